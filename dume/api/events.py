"""Normalized input/window event records."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

from dume.api.types import Vec2


class Action(IntEnum):
    PRESS = 0
    RELEASE = 1


@dataclass(frozen=True, slots=True)
class Modifiers:
    """Modifier keys held when a key or button event fired."""

    control: bool = False
    alt: bool = False
    shift: bool = False


NO_MODIFIERS = Modifiers()


@dataclass(frozen=True, slots=True)
class KeyEvent:
    TYPE: ClassVar[str] = "key"

    key: int
    action: Action
    modifiers: Modifiers = NO_MODIFIERS


@dataclass(frozen=True, slots=True)
class CharEvent:
    TYPE: ClassVar[str] = "char"

    char: str


@dataclass(frozen=True, slots=True)
class CursorMoveEvent:
    TYPE: ClassVar[str] = "cursorMove"

    pos: Vec2


@dataclass(frozen=True, slots=True)
class MouseClickEvent:
    """Mouse button event; ``pos`` is the last known cursor position."""

    TYPE: ClassVar[str] = "mouseClick"

    button: int
    action: Action
    modifiers: Modifiers = NO_MODIFIERS
    pos: Vec2 = field(default_factory=Vec2)


@dataclass(frozen=True, slots=True)
class ScrollEvent:
    """Scroll event; ``pos`` is the last known cursor position."""

    TYPE: ClassVar[str] = "scroll"

    offset: Vec2
    pos: Vec2 = field(default_factory=Vec2)


@dataclass(frozen=True, slots=True)
class ResizeEvent:
    TYPE: ClassVar[str] = "resize"

    width: int
    height: int


@dataclass(frozen=True, slots=True)
class CloseRequestEvent:
    TYPE: ClassVar[str] = "closeRequested"


@dataclass(frozen=True, slots=True)
class RedrawRequestEvent:
    TYPE: ClassVar[str] = "redrawRequested"


@dataclass(frozen=True, slots=True)
class FrameClearedEvent:
    TYPE: ClassVar[str] = "mainEventsCleared"


Event = (
    KeyEvent
    | CharEvent
    | CursorMoveEvent
    | MouseClickEvent
    | ScrollEvent
    | ResizeEvent
    | CloseRequestEvent
    | RedrawRequestEvent
    | FrameClearedEvent
)

# Records a drawing handler may receive.
DrawableEvent = KeyEvent | CharEvent | CursorMoveEvent | MouseClickEvent | ScrollEvent | ResizeEvent

EventHandler = Callable[[DrawableEvent], None]


__all__ = [
    "Action",
    "CharEvent",
    "CloseRequestEvent",
    "CursorMoveEvent",
    "DrawableEvent",
    "Event",
    "EventHandler",
    "FrameClearedEvent",
    "KeyEvent",
    "Modifiers",
    "MouseClickEvent",
    "NO_MODIFIERS",
    "RedrawRequestEvent",
    "ResizeEvent",
    "ScrollEvent",
]
