"""GLFW-backed window layer: native handle, callback wiring and frame loop."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from dume.api.engine import NativeWindow
from dume.api.events import Action, Modifiers
from dume.runtime.errors import query_optional
from dume.window.events import EventBridge

_LOG = logging.getLogger("dume.window")


class FrameCanvas(Protocol):
    def render(self) -> None: ...


def load_glfw() -> Any:
    try:
        import glfw
    except ImportError as exc:
        raise RuntimeError("GLFW window backend unavailable. Install the 'glfw' package.") from exc
    return glfw


def translate_action(glfw: Any, action: int) -> Action | None:
    """Map a GLFW action; key repeats count as presses."""
    if action == glfw.RELEASE:
        return Action.RELEASE
    if action in (glfw.PRESS, glfw.REPEAT):
        return Action.PRESS
    return None


def translate_modifiers(glfw: Any, mods: int) -> Modifiers:
    return Modifiers(
        control=bool(mods & glfw.MOD_CONTROL),
        alt=bool(mods & glfw.MOD_ALT),
        shift=bool(mods & glfw.MOD_SHIFT),
    )


@dataclass(slots=True)
class GlfwWindow:
    """Window created without a client API so the engine owns the surface."""

    glfw: Any = field(repr=False)
    handle: Any = field(repr=False)
    title: str = "Dume"
    _bridge: EventBridge | None = field(default=None, repr=False)
    _terminated: bool = field(default=False, repr=False)

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        title: str = "Dume",
        *,
        glfw_module: Any | None = None,
    ) -> "GlfwWindow":
        glfw = glfw_module if glfw_module is not None else load_glfw()
        if not glfw.init():
            raise RuntimeError("failed to initialize GLFW")
        glfw.window_hint(glfw.CLIENT_API, glfw.NO_API)
        handle = glfw.create_window(int(width), int(height), title, None, None)
        if not handle:
            glfw.terminate()
            raise RuntimeError("failed to create GLFW window")
        _LOG.info("window_created size=%dx%d title=%r", width, height, title)
        return cls(glfw=glfw, handle=handle, title=title)

    def framebuffer_size(self) -> tuple[int, int]:
        width, height = self.glfw.get_framebuffer_size(self.handle)
        return int(width), int(height)

    def native_handle(self) -> NativeWindow:
        """Return the platform window reference the engine renders into."""
        platform = _platform_name(self.glfw)
        if platform == "win32":
            return NativeWindow(window=int(self.glfw.get_win32_window(self.handle)), platform="win32")
        if platform == "cocoa":
            return NativeWindow(window=int(self.glfw.get_cocoa_window(self.handle)), platform="cocoa")
        if platform == "wayland":
            return NativeWindow(
                window=int(self.glfw.get_wayland_window(self.handle)),
                display=self._display("wayland", lambda: self.glfw.get_wayland_display()),
                platform="wayland",
            )
        return NativeWindow(
            window=int(self.glfw.get_x11_window(self.handle)),
            display=self._display("x11", lambda: self.glfw.get_x11_display()),
            platform="x11",
        )

    @staticmethod
    def _display(platform: str, query: Callable[[], Any]) -> int | None:
        # Not every GLFW build exposes the display connection.
        raw = query_optional(_LOG, f"glfw_{platform}_display_query_failed", query, None)
        return _optional_address(raw)

    def bind(self, bridge: EventBridge) -> None:
        """Route every GLFW callback of this window into ``bridge``."""
        glfw = self.glfw
        window = self.handle
        self._bridge = bridge

        def _on_framebuffer_size(_window: Any, width: int, height: int) -> None:
            bridge.on_resize(width, height)

        def _on_char(_window: Any, codepoint: int) -> None:
            bridge.on_char(codepoint)

        def _on_cursor_pos(_window: Any, x: float, y: float) -> None:
            bridge.on_cursor_move(x, y)

        def _on_key(_window: Any, key: int, _scancode: int, action: int, mods: int) -> None:
            translated = translate_action(glfw, action)
            if translated is not None:
                bridge.on_key(key, translated, translate_modifiers(glfw, mods))

        def _on_mouse_button(_window: Any, button: int, action: int, mods: int) -> None:
            translated = translate_action(glfw, action)
            if translated is not None:
                bridge.on_mouse_button(button, translated, translate_modifiers(glfw, mods))

        def _on_scroll(_window: Any, dx: float, dy: float) -> None:
            bridge.on_scroll(dx, dy)

        def _on_refresh(_window: Any) -> None:
            bridge.on_redraw_requested()

        def _on_close(_window: Any) -> None:
            bridge.on_close_requested()

        glfw.set_framebuffer_size_callback(window, _on_framebuffer_size)
        glfw.set_char_callback(window, _on_char)
        glfw.set_cursor_pos_callback(window, _on_cursor_pos)
        glfw.set_key_callback(window, _on_key)
        glfw.set_mouse_button_callback(window, _on_mouse_button)
        glfw.set_scroll_callback(window, _on_scroll)
        glfw.set_window_refresh_callback(window, _on_refresh)
        glfw.set_window_close_callback(window, _on_close)
        bridge.set_redraw_hook(self.request_redraw)

    def should_close(self) -> bool:
        if self._bridge is not None and self._bridge.close_requested:
            return True
        return bool(self.glfw.window_should_close(self.handle))

    def run(self, canvas: FrameCanvas, draw: Callable[[], None]) -> int:
        """Draw and render frames until the window is asked to close."""
        frames = 0
        while not self.should_close():
            draw()
            canvas.render()
            frames += 1
            self.glfw.poll_events()
            if self._bridge is not None:
                self._bridge.on_events_cleared()
        _LOG.info("window_loop_exited frames=%d", frames)
        return frames

    def set_title(self, title: str) -> None:
        self.glfw.set_window_title(self.handle, title)
        self.title = title

    def set_cursor_pos(self, x: float, y: float) -> None:
        self.glfw.set_cursor_pos(self.handle, float(x), float(y))

    def grab_cursor(self, grabbed: bool = True) -> None:
        mode = self.glfw.CURSOR_DISABLED if grabbed else self.glfw.CURSOR_NORMAL
        self.glfw.set_input_mode(self.handle, self.glfw.CURSOR, mode)

    def request_redraw(self) -> None:
        self.glfw.post_empty_event()

    def time(self) -> float:
        return float(self.glfw.get_time())

    def close(self) -> None:
        if self._terminated:
            return
        self._terminated = True
        self.glfw.destroy_window(self.handle)
        self.glfw.terminate()
        _LOG.info("window_closed")


def _platform_name(glfw: Any) -> str:
    getter = getattr(glfw, "get_platform", None)
    if callable(getter):
        platform = query_optional(_LOG, "glfw_platform_query_failed", getter, None)
        known = {
            getattr(glfw, "PLATFORM_WIN32", None): "win32",
            getattr(glfw, "PLATFORM_COCOA", None): "cocoa",
            getattr(glfw, "PLATFORM_WAYLAND", None): "wayland",
            getattr(glfw, "PLATFORM_X11", None): "x11",
        }
        if platform is not None and platform in known:
            return known[platform]
    if sys.platform.startswith("win"):
        return "win32"
    if sys.platform == "darwin":
        return "cocoa"
    return "x11"


def _optional_address(value: Any) -> int | None:
    if value is None:
        return None
    address = getattr(value, "value", value)
    return int(address) if address else None


__all__ = ["FrameCanvas", "GlfwWindow", "load_glfw", "translate_action", "translate_modifiers"]
