"""``EnginePort`` backed by the native engine library."""

from __future__ import annotations

import logging
from typing import Any

from dume.api.engine import NativeWindow, VariableResolver
from dume.api.types import Color, TextLayout, TextStyle, Vec2
from dume.ffi.bindings import RESOLVE_VARIABLE_SIGNATURE, ffi
from dume.ffi.library import load_library

logger = logging.getLogger("dume.ffi.engine")


def _vec2(value: Vec2) -> tuple[float, float]:
    return (float(value.x), float(value.y))


def _color(value: Color) -> Any:
    return ffi.new("uint8_t[4]", value.as_tuple())


def _bytes(data: bytes | bytearray) -> Any:
    return ffi.from_buffer("uint8_t[]", data)


def _address(ptr: Any) -> int:
    if ptr == ffi.NULL:
        return 0
    return int(ffi.cast("uintptr_t", ptr))


def _text_layout(layout: TextLayout) -> dict[str, Any]:
    return {
        "max_dimensions": _vec2(layout.max_dimensions),
        "line_breaks": bool(layout.line_breaks),
        "baseline": int(layout.baseline),
        "align_h": int(layout.align_h),
        "align_v": int(layout.align_v),
    }


class NativeEngine:
    """Translate port calls into calls on the loaded library.

    Identifiers are the addresses of engine objects; sprite ids are the
    engine's own 64-bit keys.
    """

    def __init__(self, lib: Any) -> None:
        self._lib = lib

    @classmethod
    def load(cls, library_path: str | None = None) -> "NativeEngine":
        return cls(load_library(library_path))

    # Context

    def init(self, width: int, height: int, window: NativeWindow) -> int:
        raw_window = ffi.new("RawWindow *")
        raw_window.window = int(window.window)
        raw_window.display = ffi.cast("void *", window.display or 0)
        ctx = self._lib.dume_init(int(width), int(height), raw_window[0])
        return _address(ctx)

    def free(self, ctx: int) -> None:
        self._lib.dume_free(self._ctx(ctx))

    def resize(self, ctx: int, width: int, height: int) -> None:
        self._lib.dume_resize(self._ctx(ctx), int(width), int(height))

    def get_width(self, ctx: int) -> int:
        return int(self._lib.dume_get_width(self._ctx(ctx)))

    def get_height(self, ctx: int) -> int:
        return int(self._lib.dume_get_height(self._ctx(ctx)))

    def render(self, ctx: int) -> None:
        self._lib.dume_render(self._ctx(ctx))

    # Fonts and sprites

    def load_font(self, ctx: int, data: bytes) -> None:
        self._lib.dume_load_font(self._ctx(ctx), _bytes(data), len(data))

    def create_sprite_from_encoded(self, ctx: int, name: bytes, data: bytes) -> int:
        return int(
            self._lib.dume_create_sprite_from_encoded(
                self._ctx(ctx), _bytes(name), len(name), _bytes(data), len(data)
            )
        )

    def create_sprite_from_rgba(
        self, ctx: int, name: bytes, data: bytearray, width: int, height: int
    ) -> int:
        return int(
            self._lib.dume_create_sprite_from_rgba(
                self._ctx(ctx),
                _bytes(name),
                len(name),
                _bytes(data),
                len(data),
                int(width),
                int(height),
            )
        )

    def get_sprite_by_name(self, ctx: int, name: bytes) -> int:
        return int(self._lib.dume_get_sprite_by_name(self._ctx(ctx), _bytes(name), len(name)))

    def get_sprite_size(self, ctx: int, sprite: int) -> tuple[float, float]:
        size = self._lib.dume_get_sprite_size(self._ctx(ctx), int(sprite))
        return float(size.x), float(size.y)

    def draw_sprite(self, ctx: int, pos: Vec2, width: float, sprite: int) -> None:
        self._lib.dume_draw_sprite(self._ctx(ctx), _vec2(pos), float(width), int(sprite))

    # Text

    def parse_markup(
        self, markup: bytes, default_style: TextStyle, resolve: VariableResolver
    ) -> int:
        family = default_style.family.encode("utf-8")
        family_buffer = ffi.new("char[]", family)
        color_buffer = _color(default_style.color)
        style = ffi.new("CTextStyle *")
        style.family_name = family_buffer
        style.family_name_len = len(family)
        style.weight = int(default_style.weight)
        style.style = int(default_style.style)
        style.size = float(default_style.size)
        style.color = color_buffer

        # Values must outlive the parse call; the engine copies them.
        values: list[Any] = []

        def _resolve(_userdata: Any, name_ptr: Any, name_len: int) -> Any:
            name = ffi.unpack(ffi.cast("char *", name_ptr), name_len)
            value = resolve(name) or b""
            buffer = ffi.new("uint8_t[]", len(value) + 1)
            ffi.memmove(buffer, value, len(value))
            values.append(buffer)
            return (buffer, len(value))

        callback = ffi.callback(RESOLVE_VARIABLE_SIGNATURE, _resolve)
        text = self._lib.dume_parse_markup(
            _bytes(markup), len(markup), style[0], ffi.NULL, callback
        )
        logger.debug("markup_parsed bytes=%d variables=%d", len(markup), len(values))
        return _address(text)

    def text_free(self, text: int) -> None:
        self._lib.dume_text_free(ffi.cast("Text *", text))

    def create_paragraph(self, ctx: int, text: int, layout: TextLayout) -> int:
        paragraph = self._lib.dume_create_paragraph(
            self._ctx(ctx), ffi.cast("Text *", text), _text_layout(layout)
        )
        return _address(paragraph)

    def paragraph_free(self, paragraph: int) -> None:
        self._lib.dume_paragraph_free(self._paragraph(paragraph))

    def paragraph_resize(self, ctx: int, paragraph: int, max_dimensions: Vec2) -> None:
        self._lib.dume_paragraph_resize(
            self._ctx(ctx), self._paragraph(paragraph), _vec2(max_dimensions)
        )

    def paragraph_width(self, paragraph: int) -> float:
        return float(self._lib.dume_paragraph_width(self._paragraph(paragraph)))

    def paragraph_height(self, paragraph: int) -> float:
        return float(self._lib.dume_paragraph_height(self._paragraph(paragraph)))

    def draw_paragraph(self, ctx: int, pos: Vec2, paragraph: int) -> None:
        self._lib.dume_draw_paragraph(self._ctx(ctx), _vec2(pos), self._paragraph(paragraph))

    # Paths and paint

    def begin_path(self, ctx: int) -> None:
        self._lib.dume_begin_path(self._ctx(ctx))

    def move_to(self, ctx: int, pos: Vec2) -> None:
        self._lib.dume_move_to(self._ctx(ctx), _vec2(pos))

    def line_to(self, ctx: int, pos: Vec2) -> None:
        self._lib.dume_line_to(self._ctx(ctx), _vec2(pos))

    def quad_to(self, ctx: int, control: Vec2, pos: Vec2) -> None:
        self._lib.dume_quad_to(self._ctx(ctx), _vec2(control), _vec2(pos))

    def cubic_to(self, ctx: int, control1: Vec2, control2: Vec2, pos: Vec2) -> None:
        self._lib.dume_cubic_to(self._ctx(ctx), _vec2(control1), _vec2(control2), _vec2(pos))

    def arc(
        self, ctx: int, center: Vec2, radius: float, start_angle: float, end_angle: float
    ) -> None:
        self._lib.dume_arc(
            self._ctx(ctx), _vec2(center), float(radius), float(start_angle), float(end_angle)
        )

    def stroke_width(self, ctx: int, width: float) -> None:
        self._lib.dume_stroke_width(self._ctx(ctx), float(width))

    def solid_color(self, ctx: int, color: Color) -> None:
        self._lib.dume_solid_color(self._ctx(ctx), _color(color))

    def linear_gradient(
        self, ctx: int, point_a: Vec2, point_b: Vec2, color_a: Color, color_b: Color
    ) -> None:
        self._lib.dume_linear_gradient(
            self._ctx(ctx), _vec2(point_a), _vec2(point_b), _color(color_a), _color(color_b)
        )

    def stroke(self, ctx: int) -> None:
        self._lib.dume_stroke(self._ctx(ctx))

    def fill(self, ctx: int) -> None:
        self._lib.dume_fill(self._ctx(ctx))

    # Transform

    def translate(self, ctx: int, vector: Vec2) -> None:
        self._lib.dume_translate(self._ctx(ctx), _vec2(vector))

    def scale(self, ctx: int, scale: float) -> None:
        self._lib.dume_scale(self._ctx(ctx), float(scale))

    def reset_transform(self, ctx: int) -> None:
        self._lib.dume_reset_transform(self._ctx(ctx))

    def scissor_rect(self, ctx: int, pos: Vec2, size: Vec2) -> None:
        self._lib.dume_scissor_rect(self._ctx(ctx), _vec2(pos), _vec2(size))

    def clear_scissor(self, ctx: int) -> None:
        self._lib.dume_clear_scissor(self._ctx(ctx))

    @staticmethod
    def _ctx(ctx: int) -> Any:
        return ffi.cast("DumeCtx *", ctx)

    @staticmethod
    def _paragraph(paragraph: int) -> Any:
        return ffi.cast("Paragraph *", paragraph)


__all__ = ["NativeEngine"]
