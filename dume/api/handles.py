"""Opaque handles to engine-owned resources.

Raw engine identifiers never leave these wrappers as plain integers. Every
handle remembers the context that produced it, and ``unwrap`` refuses to hand
the identifier to any other context, or to a context that has been freed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dume.api.errors import InvalidState, UseAfterFree

if TYPE_CHECKING:
    from dume.text.rich_text import RichText


@dataclass(eq=False, slots=True)
class ContextToken:
    """Identity and liveness of one engine context."""

    label: str
    alive: bool = True

    def ensure_alive(self) -> None:
        if not self.alive:
            raise UseAfterFree(f"engine context {self.label} has been freed")

    def release(self) -> None:
        self.alive = False


def _check_owner(kind: str, owner: ContextToken, requester: ContextToken) -> None:
    if owner is not requester:
        raise UseAfterFree(f"{kind} belongs to context {owner.label}, not {requester.label}")
    owner.ensure_alive()


@dataclass(frozen=True, slots=True)
class SpriteHandle:
    """Engine sprite identifier."""

    _raw: int
    owner: ContextToken = field(repr=False, compare=True)

    def unwrap(self, requester: ContextToken) -> int:
        _check_owner("sprite", self.owner, requester)
        return self._raw


@dataclass(eq=False, slots=True)
class TextHandle:
    """Parsed rich text owned by the engine; consumed by paragraph creation."""

    _raw: int
    owner: ContextToken = field(repr=False)
    rich_text: RichText | None = field(default=None, repr=False)
    consumed: bool = False

    def take(self, requester: ContextToken) -> int:
        """Mark the text consumed and return its identifier, exactly once."""
        _check_owner("text", self.owner, requester)
        if self.consumed:
            raise InvalidState("text object has already been consumed")
        self.consumed = True
        return self._raw


@dataclass(eq=False, slots=True)
class ParagraphHandle:
    """Engine paragraph identifier."""

    _raw: int
    owner: ContextToken = field(repr=False)
    freed: bool = False

    def unwrap(self, requester: ContextToken) -> int:
        _check_owner("paragraph", self.owner, requester)
        if self.freed:
            raise InvalidState("paragraph has been freed")
        return self._raw


__all__ = ["ContextToken", "ParagraphHandle", "SpriteHandle", "TextHandle"]
