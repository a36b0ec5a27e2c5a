"""Value types shared by the canvas, the markup parser and the FFI layer."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum


@dataclass(frozen=True, slots=True)
class Vec2:
    """2D vector in logical pixels."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    @classmethod
    def coerce(cls, value: object) -> "Vec2":
        """Accept a Vec2, an ``{x, y}`` mapping or a 2-sequence."""
        if isinstance(value, Vec2):
            return value
        if isinstance(value, Mapping):
            return cls(float(value["x"]), float(value["y"]))
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and len(value) == 2:
            return cls(float(value[0]), float(value[1]))
        raise TypeError(f"expected a 2D vector, got {value!r}")


@dataclass(frozen=True, slots=True)
class Color:
    """sRGB color as four 0..255 components."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for component in (self.r, self.g, self.b, self.a):
            if not 0 <= int(component) <= 255:
                raise ValueError(f"color component out of range: {component}")

    @classmethod
    def rgb(cls, r: int, g: int, b: int, a: int = 255) -> "Color":
        return cls(int(r), int(g), int(b), int(a))

    @classmethod
    def coerce(cls, value: object) -> "Color":
        """Accept a Color or a 3/4-sequence of ints."""
        if isinstance(value, Color):
            return value
        if isinstance(value, Sequence) and not isinstance(value, str) and len(value) in (3, 4):
            return cls.rgb(*(int(component) for component in value))
        raise TypeError(f"expected a color, got {value!r}")

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


WHITE = Color(255, 255, 255, 255)


class Align(IntEnum):
    START = 0
    CENTER = 1
    END = 2


class Baseline(IntEnum):
    TOP = 0
    MIDDLE = 1
    ALPHABETIC = 2
    BOTTOM = 3


class Weight(IntEnum):
    THIN = 0
    EXTRA_LIGHT = 1
    LIGHT = 2
    NORMAL = 3
    MEDIUM = 4
    SEMI_BOLD = 5
    BOLD = 6
    EXTRA_BOLD = 7
    BLACK = 8


class FontStyle(IntEnum):
    NORMAL = 0
    ITALIC = 1


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Font query plus size and color for one run of text."""

    family: str = ""
    size: float = 12.0
    weight: Weight = Weight.NORMAL
    style: FontStyle = FontStyle.NORMAL
    color: Color = WHITE


@dataclass(frozen=True, slots=True)
class TextLayout:
    """Paragraph layout settings."""

    max_dimensions: Vec2 = field(default_factory=lambda: Vec2(float("inf"), float("inf")))
    # When false, characters past the maximum width are clipped.
    line_breaks: bool = True
    baseline: Baseline = Baseline.TOP
    align_h: Align = Align.START
    align_v: Align = Align.START

    def __post_init__(self) -> None:
        if self.max_dimensions.x < 0 or self.max_dimensions.y < 0:
            raise ValueError("max_dimensions must not be negative")


__all__ = [
    "Align",
    "Baseline",
    "Color",
    "FontStyle",
    "TextLayout",
    "TextStyle",
    "Vec2",
    "WHITE",
    "Weight",
]
