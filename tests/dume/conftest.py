from __future__ import annotations

import itertools
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import pytest

from dume.api.engine import NativeWindow, VariableResolver
from dume.api.types import TextLayout, TextStyle, Vec2
from dume.canvas.canvas import Canvas
from dume.runtime import config as runtime_config

_VARIABLE_RE = re.compile(rb"%(\w+)")


@dataclass
class FakeEngine:
    """Recording stand-in for the native engine."""

    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    sprites: dict[bytes, int] = field(default_factory=dict)
    sprite_sizes: dict[int, tuple[float, float]] = field(default_factory=dict)
    markups: list[tuple[bytes, TextStyle, dict[bytes, bytes]]] = field(default_factory=list)
    layouts: dict[int, TextLayout] = field(default_factory=dict)
    paragraph_extent: tuple[float, float] = (120.0, 24.0)
    fail_init: bool = False
    _ids: Any = field(default_factory=lambda: itertools.count(100))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def calls_named(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def init(self, width: int, height: int, window: NativeWindow) -> int:
        self._record("init", width, height, window)
        return 0 if self.fail_init else next(self._ids)

    def free(self, ctx: int) -> None:
        self._record("free", ctx)

    def resize(self, ctx: int, width: int, height: int) -> None:
        self._record("resize", ctx, width, height)

    def get_width(self, ctx: int) -> int:
        return 0

    def get_height(self, ctx: int) -> int:
        return 0

    def load_font(self, ctx: int, data: bytes) -> None:
        self._record("load_font", ctx, data)

    def create_sprite_from_encoded(self, ctx: int, name: bytes, data: bytes) -> int:
        self._record("create_sprite_from_encoded", ctx, name, data)
        return self._new_sprite(name, (16.0, 16.0))

    def create_sprite_from_rgba(
        self, ctx: int, name: bytes, data: bytearray, width: int, height: int
    ) -> int:
        self._record("create_sprite_from_rgba", ctx, name, bytes(data), width, height)
        return self._new_sprite(name, (float(width), float(height)))

    def _new_sprite(self, name: bytes, size: tuple[float, float]) -> int:
        raw = next(self._ids)
        self.sprites[name] = raw
        self.sprite_sizes[raw] = size
        return raw

    def get_sprite_by_name(self, ctx: int, name: bytes) -> int:
        self._record("get_sprite_by_name", ctx, name)
        return self.sprites.get(name, 0)

    def get_sprite_size(self, ctx: int, sprite: int) -> tuple[float, float]:
        return self.sprite_sizes[sprite]

    def draw_sprite(self, ctx: int, pos: Vec2, width: float, sprite: int) -> None:
        self._record("draw_sprite", ctx, pos, width, sprite)

    def parse_markup(
        self, markup: bytes, default_style: TextStyle, resolve: VariableResolver
    ) -> int:
        values = {name: resolve(name) or b"" for name in _VARIABLE_RE.findall(markup)}
        self.markups.append((markup, default_style, values))
        self._record("parse_markup", markup)
        return next(self._ids)

    def text_free(self, text: int) -> None:
        self._record("text_free", text)

    def create_paragraph(self, ctx: int, text: int, layout: TextLayout) -> int:
        self._record("create_paragraph", ctx, text, layout)
        raw = next(self._ids)
        self.layouts[raw] = layout
        return raw

    def paragraph_free(self, paragraph: int) -> None:
        self._record("paragraph_free", paragraph)

    def paragraph_resize(self, ctx: int, paragraph: int, max_dimensions: Vec2) -> None:
        self._record("paragraph_resize", ctx, paragraph, max_dimensions)

    def paragraph_width(self, paragraph: int) -> float:
        return self.paragraph_extent[0]

    def paragraph_height(self, paragraph: int) -> float:
        return self.paragraph_extent[1]

    def draw_paragraph(self, ctx: int, pos: Vec2, paragraph: int) -> None:
        self._record("draw_paragraph", ctx, pos, paragraph)

    def begin_path(self, ctx: int) -> None:
        self._record("begin_path", ctx)

    def move_to(self, ctx: int, pos: Vec2) -> None:
        self._record("move_to", ctx, pos)

    def line_to(self, ctx: int, pos: Vec2) -> None:
        self._record("line_to", ctx, pos)

    def quad_to(self, ctx: int, control: Vec2, pos: Vec2) -> None:
        self._record("quad_to", ctx, control, pos)

    def cubic_to(self, ctx: int, control1: Vec2, control2: Vec2, pos: Vec2) -> None:
        self._record("cubic_to", ctx, control1, control2, pos)

    def arc(self, ctx: int, center: Vec2, radius: float, start: float, end: float) -> None:
        self._record("arc", ctx, center, radius, start, end)

    def stroke_width(self, ctx: int, width: float) -> None:
        self._record("stroke_width", ctx, width)

    def solid_color(self, ctx: int, color: Any) -> None:
        self._record("solid_color", ctx, color)

    def linear_gradient(self, ctx: int, a: Vec2, b: Vec2, color_a: Any, color_b: Any) -> None:
        self._record("linear_gradient", ctx, a, b, color_a, color_b)

    def stroke(self, ctx: int) -> None:
        self._record("stroke", ctx)

    def fill(self, ctx: int) -> None:
        self._record("fill", ctx)

    def translate(self, ctx: int, vector: Vec2) -> None:
        self._record("translate", ctx, vector)

    def scale(self, ctx: int, scale: float) -> None:
        self._record("scale", ctx, scale)

    def reset_transform(self, ctx: int) -> None:
        self._record("reset_transform", ctx)

    def scissor_rect(self, ctx: int, pos: Vec2, size: Vec2) -> None:
        self._record("scissor_rect", ctx, pos, size)

    def clear_scissor(self, ctx: int) -> None:
        self._record("clear_scissor", ctx)

    def render(self, ctx: int) -> None:
        self._record("render", ctx)


class FakeGlfw:
    """Module-shaped stand-in for the glfw package."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2
    MOD_SHIFT = 0x1
    MOD_CONTROL = 0x2
    MOD_ALT = 0x4
    CLIENT_API = 0x22001
    NO_API = 0
    CURSOR = 0x33001
    CURSOR_NORMAL = 0x34001
    CURSOR_DISABLED = 0x34003
    PLATFORM_WIN32 = 0x60001
    PLATFORM_COCOA = 0x60002
    PLATFORM_WAYLAND = 0x60003
    PLATFORM_X11 = 0x60004

    def __init__(self, platform: int = PLATFORM_X11, close_after_polls: int = 3) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.callbacks: dict[str, Any] = {}
        self.platform = platform
        self.close_after_polls = close_after_polls
        self.polls = 0
        self.window = object()
        self.init_ok = True

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def init(self) -> bool:
        self._record("init")
        return self.init_ok

    def terminate(self) -> None:
        self._record("terminate")

    def window_hint(self, hint: int, value: int) -> None:
        self._record("window_hint", hint, value)

    def create_window(self, width, height, title, monitor, share):
        self._record("create_window", width, height, title)
        return self.window

    def destroy_window(self, window) -> None:
        self._record("destroy_window", window)

    def get_framebuffer_size(self, window):
        return (1280, 720)

    def get_platform(self) -> int:
        return self.platform

    def get_x11_window(self, window) -> int:
        return 0x400001

    def get_x11_display(self) -> int:
        return 0x5500

    def get_wayland_window(self, window) -> int:
        return 0x7700

    def get_wayland_display(self) -> int:
        return 0x7800

    def get_win32_window(self, window) -> int:
        return 0x9900

    def get_cocoa_window(self, window) -> int:
        return 0xAA00

    def __getattr__(self, name: str):
        if name.startswith("set_") and name.endswith("_callback"):
            def _setter(window, callback):
                self.callbacks[name[4:-9]] = callback
                return None

            return _setter
        raise AttributeError(name)

    def window_should_close(self, window) -> bool:
        return False

    def poll_events(self) -> None:
        self.polls += 1
        if self.polls >= self.close_after_polls and "window_close" in self.callbacks:
            self.callbacks["window_close"](self.window)

    def post_empty_event(self) -> None:
        self._record("post_empty_event")

    def set_window_title(self, window, title) -> None:
        self._record("set_window_title", title)

    def set_cursor_pos(self, window, x, y) -> None:
        self._record("set_cursor_pos", x, y)

    def set_input_mode(self, window, mode, value) -> None:
        self._record("set_input_mode", mode, value)

    def get_time(self) -> float:
        return 1.5


@pytest.fixture(autouse=True)
def _isolated_runtime_config():
    token = runtime_config._RUNTIME_CONFIG.set(None)
    yield
    runtime_config._RUNTIME_CONFIG.reset(token)


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def window() -> NativeWindow:
    return NativeWindow(window=0x2A, display=0x10, platform="x11")


@pytest.fixture
def canvas(engine: FakeEngine, window: NativeWindow) -> Iterator[Canvas]:
    cv = Canvas(engine, 640, 480, window)
    yield cv
    cv.close()


@pytest.fixture
def fake_glfw() -> type[FakeGlfw]:
    return FakeGlfw
