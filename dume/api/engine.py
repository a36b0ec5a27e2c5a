"""Rendering-engine boundary contract.

The engine is an external library. This protocol is its C ABI as seen from
Python: raw integer identifiers in, raw integer identifiers out. Nothing
above ``dume.canvas`` should talk to an ``EnginePort`` directly.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from dume.api.types import Color, TextLayout, TextStyle, Vec2

VariableResolver = Callable[[bytes], bytes | None]


@dataclass(frozen=True, slots=True)
class NativeWindow:
    """Platform window reference handed to the engine at init."""

    window: int
    display: int | None = None
    platform: str = "x11"


class EnginePort(Protocol):
    """Entry points of the rendering engine."""

    def init(self, width: int, height: int, window: NativeWindow) -> int:
        """Create a context and return its identifier (0 on failure)."""

    def free(self, ctx: int) -> None:
        """Destroy a context and everything it owns."""

    def resize(self, ctx: int, width: int, height: int) -> None: ...

    def get_width(self, ctx: int) -> int: ...

    def get_height(self, ctx: int) -> int: ...

    def load_font(self, ctx: int, data: bytes) -> None: ...

    def create_sprite_from_encoded(self, ctx: int, name: bytes, data: bytes) -> int: ...

    def create_sprite_from_rgba(
        self, ctx: int, name: bytes, data: bytearray, width: int, height: int
    ) -> int: ...

    def get_sprite_by_name(self, ctx: int, name: bytes) -> int:
        """Return the sprite id registered under ``name`` or 0."""

    def get_sprite_size(self, ctx: int, sprite: int) -> tuple[float, float]: ...

    def parse_markup(
        self, markup: bytes, default_style: TextStyle, resolve: VariableResolver
    ) -> int:
        """Parse markup into an engine text object and return its identifier."""

    def text_free(self, text: int) -> None: ...

    def create_paragraph(self, ctx: int, text: int, layout: TextLayout) -> int:
        """Lay out ``text``, consuming it, and return a paragraph identifier."""

    def paragraph_free(self, paragraph: int) -> None: ...

    def paragraph_resize(self, ctx: int, paragraph: int, max_dimensions: Vec2) -> None: ...

    def paragraph_width(self, paragraph: int) -> float: ...

    def paragraph_height(self, paragraph: int) -> float: ...

    def begin_path(self, ctx: int) -> None: ...

    def move_to(self, ctx: int, pos: Vec2) -> None: ...

    def line_to(self, ctx: int, pos: Vec2) -> None: ...

    def quad_to(self, ctx: int, control: Vec2, pos: Vec2) -> None: ...

    def cubic_to(self, ctx: int, control1: Vec2, control2: Vec2, pos: Vec2) -> None: ...

    def arc(
        self, ctx: int, center: Vec2, radius: float, start_angle: float, end_angle: float
    ) -> None: ...

    def stroke_width(self, ctx: int, width: float) -> None: ...

    def solid_color(self, ctx: int, color: Color) -> None: ...

    def linear_gradient(
        self, ctx: int, point_a: Vec2, point_b: Vec2, color_a: Color, color_b: Color
    ) -> None: ...

    def stroke(self, ctx: int) -> None: ...

    def fill(self, ctx: int) -> None: ...

    def translate(self, ctx: int, vector: Vec2) -> None: ...

    def scale(self, ctx: int, scale: float) -> None: ...

    def reset_transform(self, ctx: int) -> None: ...

    def scissor_rect(self, ctx: int, pos: Vec2, size: Vec2) -> None: ...

    def clear_scissor(self, ctx: int) -> None: ...

    def draw_sprite(self, ctx: int, pos: Vec2, width: float, sprite: int) -> None: ...

    def draw_paragraph(self, ctx: int, pos: Vec2, paragraph: int) -> None: ...

    def render(self, ctx: int) -> None:
        """Flush one frame."""


__all__ = ["EnginePort", "NativeWindow", "VariableResolver"]
