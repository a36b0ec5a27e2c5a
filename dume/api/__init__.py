"""Public value types, handles, events and the engine boundary contract."""

from dume.api.engine import EnginePort, NativeWindow, VariableResolver
from dume.api.errors import (
    DumeError,
    EngineUnavailable,
    InvalidState,
    MarkupSyntaxError,
    NotFound,
    ResourceExhausted,
    UseAfterFree,
)
from dume.api.events import (
    Action,
    CharEvent,
    CursorMoveEvent,
    DrawableEvent,
    Event,
    EventHandler,
    KeyEvent,
    Modifiers,
    MouseClickEvent,
    ResizeEvent,
    ScrollEvent,
)
from dume.api.handles import ContextToken, ParagraphHandle, SpriteHandle, TextHandle
from dume.api.logging import DumeLoggingConfig, JsonFormatter
from dume.api.types import Align, Baseline, Color, FontStyle, TextLayout, TextStyle, Vec2, Weight

__all__ = [
    "Action",
    "Align",
    "Baseline",
    "CharEvent",
    "Color",
    "ContextToken",
    "CursorMoveEvent",
    "DrawableEvent",
    "DumeError",
    "DumeLoggingConfig",
    "EngineUnavailable",
    "EnginePort",
    "Event",
    "EventHandler",
    "FontStyle",
    "InvalidState",
    "JsonFormatter",
    "KeyEvent",
    "MarkupSyntaxError",
    "Modifiers",
    "MouseClickEvent",
    "NativeWindow",
    "NotFound",
    "ParagraphHandle",
    "ResizeEvent",
    "ResourceExhausted",
    "ScrollEvent",
    "SpriteHandle",
    "TextHandle",
    "TextLayout",
    "TextStyle",
    "UseAfterFree",
    "VariableResolver",
    "Vec2",
    "Weight",
]
