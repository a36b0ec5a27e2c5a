"""Canvas error taxonomy."""

from __future__ import annotations


class DumeError(Exception):
    """Base class for all canvas failures."""


class NotFound(DumeError, KeyError):
    """Named resource lookup miss."""

    def __init__(self, name: str, *, kind: str = "sprite") -> None:
        super().__init__(f"{kind} not found: {name!r}")
        self.name = name
        self.kind = kind

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidState(DumeError):
    """Operation not allowed in the current state."""


class MarkupSyntaxError(DumeError, ValueError):
    """Malformed markup, with the byte offset of the offending token."""

    def __init__(self, reason: str, offset: int) -> None:
        super().__init__(f"{reason} (at byte {offset})")
        self.reason = reason
        self.offset = offset


class ResourceExhausted(DumeError):
    """Engine-side allocation failure."""


class UseAfterFree(DumeError):
    """Handle or canvas used after its engine context was released."""


class EngineUnavailable(DumeError, RuntimeError):
    """Rendering engine library could not be located or loaded."""


__all__ = [
    "DumeError",
    "EngineUnavailable",
    "InvalidState",
    "MarkupSyntaxError",
    "NotFound",
    "ResourceExhausted",
    "UseAfterFree",
]
