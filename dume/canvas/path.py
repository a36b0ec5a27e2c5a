"""Immediate-mode path and paint state machine.

Path commands accumulate in Python between ``begin_path`` and a terminal
``stroke``/``fill``. Only the terminal call reaches the engine, replaying the
whole path together with the current paint and stroke width, so a rejected
call never leaves the engine with half a path.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from dume.api.engine import EnginePort
from dume.api.errors import InvalidState
from dume.api.types import WHITE, Color, Vec2

logger = logging.getLogger("dume.canvas.path")


class PathState(Enum):
    IDLE = "idle"
    BUILDING = "building"


@dataclass(frozen=True, slots=True)
class MoveTo:
    pos: Vec2


@dataclass(frozen=True, slots=True)
class LineTo:
    pos: Vec2


@dataclass(frozen=True, slots=True)
class QuadTo:
    control: Vec2
    pos: Vec2


@dataclass(frozen=True, slots=True)
class CubicTo:
    control1: Vec2
    control2: Vec2
    pos: Vec2


@dataclass(frozen=True, slots=True)
class Arc:
    center: Vec2
    radius: float
    start_angle: float
    end_angle: float


PathCommand = MoveTo | LineTo | QuadTo | CubicTo | Arc


@dataclass(frozen=True, slots=True)
class SolidPaint:
    color: Color


@dataclass(frozen=True, slots=True)
class LinearGradientPaint:
    point_a: Vec2
    point_b: Vec2
    color_a: Color
    color_b: Color


Paint = SolidPaint | LinearGradientPaint


class PathBuilder:
    """Accumulates one path at a time plus paint settings that outlive it."""

    def __init__(self) -> None:
        self._state = PathState.IDLE
        self._commands: list[PathCommand] = []
        self._stroke_width = 1.0
        self._paint: Paint = SolidPaint(WHITE)

    @property
    def state(self) -> PathState:
        return self._state

    @property
    def commands(self) -> tuple[PathCommand, ...]:
        return tuple(self._commands)

    @property
    def paint(self) -> Paint:
        return self._paint

    @property
    def current_stroke_width(self) -> float:
        return self._stroke_width

    def begin_path(self) -> None:
        if self._state is PathState.BUILDING and self._commands:
            logger.debug("path_discarded commands=%d", len(self._commands))
        self._commands = []
        self._state = PathState.BUILDING

    def move_to(self, pos: Vec2) -> None:
        self._append(MoveTo(pos))

    def line_to(self, pos: Vec2) -> None:
        self._append(LineTo(pos))

    def quad_to(self, control: Vec2, pos: Vec2) -> None:
        self._append(QuadTo(control, pos))

    def cubic_to(self, control1: Vec2, control2: Vec2, pos: Vec2) -> None:
        self._append(CubicTo(control1, control2, pos))

    def arc(self, center: Vec2, radius: float, start_angle: float, end_angle: float) -> None:
        if radius < 0 or not math.isfinite(radius):
            raise ValueError(f"invalid arc radius {radius}")
        self._append(Arc(center, float(radius), float(start_angle), float(end_angle)))

    def rect(self, pos: Vec2, size: Vec2) -> None:
        self._require_building("rect")
        self._commands.extend(
            (
                MoveTo(pos),
                LineTo(pos + Vec2(size.x, 0.0)),
                LineTo(pos + size),
                LineTo(pos + Vec2(0.0, size.y)),
                LineTo(pos),
            )
        )

    def rounded_rect(self, pos: Vec2, size: Vec2, radius: float) -> None:
        self._require_building("rounded_rect")
        if radius < 0.1:
            self.rect(pos, size)
            return
        offset_x = Vec2(radius, 0.0)
        offset_y = Vec2(0.0, radius)
        size_x = Vec2(size.x, 0.0)
        size_y = Vec2(0.0, size.y)
        self._commands.extend(
            (
                MoveTo(pos + offset_x),
                LineTo(pos + size_x - offset_x),
                QuadTo(pos + size_x, pos + size_x + offset_y),
                LineTo(pos + size - offset_y),
                QuadTo(pos + size, pos + size - offset_x),
                LineTo(pos + size_y + offset_x),
                QuadTo(pos + size_y, pos + size_y - offset_y),
                LineTo(pos + offset_y),
                QuadTo(pos, pos + offset_x),
            )
        )

    def stroke_width(self, width: float) -> None:
        if width < 0 or not math.isfinite(width):
            raise ValueError(f"invalid stroke width {width}")
        self._stroke_width = float(width)

    def solid_color(self, color: Color) -> None:
        self._paint = SolidPaint(color)

    def linear_gradient(self, point_a: Vec2, point_b: Vec2, color_a: Color, color_b: Color) -> None:
        self._paint = LinearGradientPaint(point_a, point_b, color_a, color_b)

    def stroke(self, engine: EnginePort, ctx: int) -> bool:
        """Submit the path as a stroke; return whether anything was drawn."""
        return self._submit(engine, ctx, fill=False)

    def fill(self, engine: EnginePort, ctx: int) -> bool:
        """Submit the path as a fill; return whether anything was drawn."""
        return self._submit(engine, ctx, fill=True)

    def _append(self, command: PathCommand) -> None:
        self._require_building(type(command).__name__)
        self._commands.append(command)

    def _require_building(self, operation: str) -> None:
        if self._state is not PathState.BUILDING:
            raise InvalidState(f"{operation} requires begin_path() first")

    def _submit(self, engine: EnginePort, ctx: int, *, fill: bool) -> bool:
        commands = tuple(self._commands)
        self._commands = []
        self._state = PathState.IDLE
        if not commands:
            return False
        engine.begin_path(ctx)
        for command in commands:
            _replay(engine, ctx, command)
        _apply_paint(engine, ctx, self._paint)
        if fill:
            engine.fill(ctx)
        else:
            engine.stroke_width(ctx, self._stroke_width)
            engine.stroke(ctx)
        return True


def _replay(engine: EnginePort, ctx: int, command: PathCommand) -> None:
    if isinstance(command, MoveTo):
        engine.move_to(ctx, command.pos)
    elif isinstance(command, LineTo):
        engine.line_to(ctx, command.pos)
    elif isinstance(command, QuadTo):
        engine.quad_to(ctx, command.control, command.pos)
    elif isinstance(command, CubicTo):
        engine.cubic_to(ctx, command.control1, command.control2, command.pos)
    else:
        engine.arc(ctx, command.center, command.radius, command.start_angle, command.end_angle)


def _apply_paint(engine: EnginePort, ctx: int, paint: Paint) -> None:
    if isinstance(paint, SolidPaint):
        engine.solid_color(ctx, paint.color)
    else:
        engine.linear_gradient(ctx, paint.point_a, paint.point_b, paint.color_a, paint.color_b)


__all__ = [
    "Arc",
    "CubicTo",
    "LineTo",
    "LinearGradientPaint",
    "MoveTo",
    "Paint",
    "PathBuilder",
    "PathCommand",
    "PathState",
    "QuadTo",
    "SolidPaint",
]
