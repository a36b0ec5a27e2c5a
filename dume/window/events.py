"""Translate platform window callbacks into event records."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from dume.api.events import (
    Action,
    CharEvent,
    CursorMoveEvent,
    DrawableEvent,
    EventHandler,
    KeyEvent,
    Modifiers,
    MouseClickEvent,
    NO_MODIFIERS,
    ResizeEvent,
    ScrollEvent,
)
from dume.api.types import Vec2

logger = logging.getLogger("dume.window.events")


class ResizableCanvas(Protocol):
    def resize(self, width: int, height: int) -> None: ...


class EventBridge:
    """Deliver one record per platform callback to a single handler.

    Records are delivered synchronously and in arrival order. Mouse and
    scroll callbacks carry no position, so they reuse the last cursor move.
    """

    def __init__(
        self,
        canvas: ResizableCanvas,
        handler: EventHandler | None = None,
        *,
        request_redraw: Callable[[], None] | None = None,
        trace: bool = False,
    ) -> None:
        self._canvas = canvas
        self._handler = handler
        self._request_redraw = request_redraw
        self._trace = trace
        self._cursor = Vec2(0.0, 0.0)
        self.close_requested = False

    @property
    def cursor(self) -> Vec2:
        return self._cursor

    def set_handler(self, handler: EventHandler | None) -> None:
        self._handler = handler

    def set_redraw_hook(self, request_redraw: Callable[[], None] | None) -> None:
        self._request_redraw = request_redraw

    def on_resize(self, width: int, height: int) -> None:
        if width > 0 and height > 0:
            self._canvas.resize(int(width), int(height))
        else:
            # Minimized windows report a zero framebuffer.
            logger.debug("engine_resize_skipped size=%dx%d", width, height)
        self._emit(ResizeEvent(int(width), int(height)))

    def on_char(self, codepoint: int | str) -> None:
        char = codepoint if isinstance(codepoint, str) else chr(codepoint)
        self._emit(CharEvent(char))

    def on_cursor_move(self, x: float, y: float) -> None:
        self._cursor = Vec2(float(x), float(y))
        self._emit(CursorMoveEvent(self._cursor))

    def on_key(self, key: int, action: Action, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self._emit(KeyEvent(int(key), Action(action), modifiers))

    def on_mouse_button(
        self, button: int, action: Action, modifiers: Modifiers = NO_MODIFIERS
    ) -> None:
        self._emit(MouseClickEvent(int(button), Action(action), modifiers, self._cursor))

    def on_scroll(self, dx: float, dy: float) -> None:
        self._emit(ScrollEvent(Vec2(float(dx), float(dy)), self._cursor))

    def on_redraw_requested(self) -> None:
        return

    def on_close_requested(self) -> None:
        self.close_requested = True
        logger.info("window_close_requested")

    def on_events_cleared(self) -> None:
        if self._request_redraw is not None:
            self._request_redraw()

    def _emit(self, event: DrawableEvent) -> None:
        if self._trace:
            logger.debug("window_event type=%s payload=%r", event.TYPE, event)
        if self._handler is not None:
            self._handler(event)


def _vec(value: Vec2) -> dict[str, float]:
    return {"x": value.x, "y": value.y}


def _modifiers(value: Modifiers) -> dict[str, bool]:
    return {"control": value.control, "alt": value.alt, "shift": value.shift}


def _action(value: Action) -> str:
    return "press" if value == Action.PRESS else "release"


def to_record(event: DrawableEvent) -> dict[str, Any]:
    """Encode an event as the plain record handed to scripts."""
    if isinstance(event, KeyEvent):
        return {
            "type": event.TYPE,
            "key": event.key,
            "action": _action(event.action),
            "modifiers": _modifiers(event.modifiers),
        }
    if isinstance(event, CharEvent):
        return {"type": event.TYPE, "char": event.char}
    if isinstance(event, CursorMoveEvent):
        return {"type": event.TYPE, "pos": _vec(event.pos)}
    if isinstance(event, MouseClickEvent):
        return {
            "type": event.TYPE,
            "button": event.button,
            "action": _action(event.action),
            "modifiers": _modifiers(event.modifiers),
            "pos": _vec(event.pos),
        }
    if isinstance(event, ScrollEvent):
        return {"type": event.TYPE, "offset": _vec(event.offset), "pos": _vec(event.pos)}
    if isinstance(event, ResizeEvent):
        return {"type": event.TYPE, "width": event.width, "height": event.height}
    raise TypeError(f"unsupported event {type(event).__name__}")


__all__ = ["EventBridge", "ResizableCanvas", "to_record"]
