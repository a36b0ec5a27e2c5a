"""Name-based canvas surface for script hosts.

Scripts pass plain data: vectors as ``{"x", "y"}`` mappings or pairs, colors
as 4-component byte sequences and layouts as records with
``maxDimensions``, ``lineBreaks``, ``baseline``, ``alignH`` and ``alignV``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from enum import IntEnum
from typing import Any, TypeVar

from dume.api.events import DrawableEvent
from dume.api.handles import TextHandle
from dume.api.types import Align, Baseline, Color, TextLayout, Vec2
from dume.canvas.canvas import Canvas
from dume.canvas.paragraph import Paragraph
from dume.window.events import to_record

E = TypeVar("E", bound=IntEnum)

ScriptCallable = Callable[..., Any]


def coerce_enum(enum_type: type[E], value: object) -> E:
    """Accept an enum member, its integer value or its name in any case."""
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_")
        try:
            return enum_type[key]
        except KeyError:
            raise ValueError(f"unknown {enum_type.__name__} {value!r}") from None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return enum_type(int(value))
    raise TypeError(f"expected {enum_type.__name__}, got {value!r}")


def coerce_layout(record: Mapping[str, Any] | TextLayout) -> TextLayout:
    if isinstance(record, TextLayout):
        return record
    defaults = TextLayout()
    raw_max = record.get("maxDimensions")
    return TextLayout(
        max_dimensions=Vec2.coerce(raw_max) if raw_max is not None else defaults.max_dimensions,
        line_breaks=bool(record.get("lineBreaks", defaults.line_breaks)),
        baseline=coerce_enum(Baseline, record.get("baseline", defaults.baseline)),
        align_h=coerce_enum(Align, record.get("alignH", defaults.align_h)),
        align_v=coerce_enum(Align, record.get("alignV", defaults.align_v)),
    )


class ScriptCanvas:
    """Adapter translating script calls into typed ``Canvas`` calls."""

    def __init__(self, canvas: Canvas) -> None:
        self._canvas = canvas

    @property
    def canvas(self) -> Canvas:
        return self._canvas

    def draw_sprite(self, name: str, pos: object, width: float) -> None:
        self._canvas.draw_sprite(name, Vec2.coerce(pos), float(width))

    def get_sprite_size(
        self, name: str, target: MutableMapping[str, float] | None = None
    ) -> dict[str, float]:
        """Return the sprite size, also writing it into ``target`` when given."""
        size = self._canvas.sprite_size(name)
        if target is not None:
            target["x"] = size.x
            target["y"] = size.y
        return {"x": size.x, "y": size.y}

    def begin_path(self) -> None:
        self._canvas.begin_path()

    def move_to(self, pos: object) -> None:
        self._canvas.move_to(Vec2.coerce(pos))

    def line_to(self, pos: object) -> None:
        self._canvas.line_to(Vec2.coerce(pos))

    def quad_to(self, control: object, pos: object) -> None:
        self._canvas.quad_to(Vec2.coerce(control), Vec2.coerce(pos))

    def cubic_to(self, control1: object, control2: object, pos: object) -> None:
        self._canvas.cubic_to(Vec2.coerce(control1), Vec2.coerce(control2), Vec2.coerce(pos))

    def arc(self, center: object, radius: float, start_angle: float, end_angle: float) -> None:
        self._canvas.arc(Vec2.coerce(center), float(radius), float(start_angle), float(end_angle))

    def rect(self, pos: object, size: object) -> None:
        self._canvas.rect(Vec2.coerce(pos), Vec2.coerce(size))

    def rounded_rect(self, pos: object, size: object, radius: float) -> None:
        self._canvas.rounded_rect(Vec2.coerce(pos), Vec2.coerce(size), float(radius))

    def stroke_width(self, width: float) -> None:
        self._canvas.stroke_width(float(width))

    def stroke(self) -> bool:
        return self._canvas.stroke()

    def fill(self) -> bool:
        return self._canvas.fill()

    def solid_color(self, color: object) -> None:
        self._canvas.solid_color(Color.coerce(color))

    def linear_gradient(
        self, point_a: object, point_b: object, color_a: object, color_b: object
    ) -> None:
        self._canvas.linear_gradient(
            Vec2.coerce(point_a),
            Vec2.coerce(point_b),
            Color.coerce(color_a),
            Color.coerce(color_b),
        )

    def parse_text_markup(
        self, markup: str, variables: Mapping[str, Any] | None = None
    ) -> TextHandle:
        """Parse markup; names missing from ``variables`` resolve to empty text."""
        values = variables if variables is not None else {}

        def _resolve(name: str) -> str:
            value = values.get(name)
            return "" if value is None else str(value)

        return self._canvas.parse_markup(markup, _resolve)

    def create_paragraph(self, text: TextHandle, layout: Mapping[str, Any] | TextLayout) -> Paragraph:
        return self._canvas.create_paragraph(text, coerce_layout(layout))

    def draw_paragraph(self, paragraph: Paragraph, pos: object) -> None:
        self._canvas.draw_paragraph(paragraph, Vec2.coerce(pos))

    def resize_paragraph(self, paragraph: Paragraph, new_size: object) -> None:
        size = Vec2.coerce(new_size)
        paragraph.resize(size.x, size.y)

    def get_paragraph_width(self, paragraph: Paragraph) -> float:
        return paragraph.width

    def get_paragraph_height(self, paragraph: Paragraph) -> float:
        return paragraph.height

    def translate(self, vector: object) -> None:
        self._canvas.translate(Vec2.coerce(vector))

    def scale(self, factor: float) -> None:
        self._canvas.scale(float(factor))

    def reset_transform(self) -> None:
        self._canvas.reset_transform()

    def scissor_rect(self, pos: object, size: object) -> None:
        self._canvas.set_scissor_rect(Vec2.coerce(pos), Vec2.coerce(size))

    def clear_scissor(self) -> None:
        self._canvas.clear_scissor()

    def get_width(self) -> int:
        return self._canvas.width

    def get_height(self) -> int:
        return self._canvas.height

    def bindings(self) -> dict[str, ScriptCallable]:
        return {
            "drawSprite": self.draw_sprite,
            "getSpriteSize": self.get_sprite_size,
            "beginPath": self.begin_path,
            "moveTo": self.move_to,
            "lineTo": self.line_to,
            "quadTo": self.quad_to,
            "cubicTo": self.cubic_to,
            "arc": self.arc,
            "rect": self.rect,
            "roundedRect": self.rounded_rect,
            "strokeWidth": self.stroke_width,
            "stroke": self.stroke,
            "fill": self.fill,
            "solidColor": self.solid_color,
            "linearGradient": self.linear_gradient,
            "parseTextMarkup": self.parse_text_markup,
            "createParagraph": self.create_paragraph,
            "drawParagraph": self.draw_paragraph,
            "resizeParagraph": self.resize_paragraph,
            "getParagraphWidth": self.get_paragraph_width,
            "getParagraphHeight": self.get_paragraph_height,
            "translate": self.translate,
            "scale": self.scale,
            "resetTransform": self.reset_transform,
            "scissorRect": self.scissor_rect,
            "clearScissor": self.clear_scissor,
            "getWidth": self.get_width,
            "getHeight": self.get_height,
        }


def make_bindings(canvas: Canvas) -> dict[str, ScriptCallable]:
    return ScriptCanvas(canvas).bindings()


class ScriptEventHandler:
    """Event handler that hands scripts plain dict records."""

    def __init__(self, callback: Callable[[dict[str, Any]], object]) -> None:
        self._callback = callback

    def __call__(self, event: DrawableEvent) -> None:
        self._callback(to_record(event))


__all__ = [
    "ScriptCallable",
    "ScriptCanvas",
    "ScriptEventHandler",
    "coerce_enum",
    "coerce_layout",
    "make_bindings",
]
