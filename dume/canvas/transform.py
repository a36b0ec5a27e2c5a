"""Current transform and scissor rectangle.

A single current state, not a stack. The transform is ``p * scale +
translation``: ``translate`` adds to the translation in screen units and
``scale`` multiplies the scale factor, matching how the engine composes them.
The scissor rectangle is captured in screen space when it is set.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from dume.api.types import Vec2


@dataclass(frozen=True, slots=True)
class Affine:
    scale: float = 1.0
    translation: Vec2 = Vec2()

    def apply(self, point: Vec2) -> Vec2:
        return Vec2(point.x * self.scale, point.y * self.scale) + self.translation

    def apply_vector(self, vector: Vec2) -> Vec2:
        return Vec2(vector.x * self.scale, vector.y * self.scale)

    def inverse_apply(self, point: Vec2) -> Vec2:
        shifted = point - self.translation
        return Vec2(shifted.x / self.scale, shifted.y / self.scale)


IDENTITY = Affine()


@dataclass(frozen=True, slots=True)
class ScissorRect:
    pos: Vec2
    size: Vec2

    def contains(self, point: Vec2) -> bool:
        return (
            self.pos.x <= point.x <= self.pos.x + self.size.x
            and self.pos.y <= point.y <= self.pos.y + self.size.y
        )


class TransformState:
    def __init__(self) -> None:
        self._affine = IDENTITY
        self._scissor: ScissorRect | None = None

    @property
    def affine(self) -> Affine:
        return self._affine

    @property
    def scissor(self) -> ScissorRect | None:
        return self._scissor

    def translate(self, vector: Vec2) -> None:
        self._affine = Affine(self._affine.scale, self._affine.translation + vector)

    @staticmethod
    def check_scale(factor: float) -> None:
        if factor == 0 or not math.isfinite(factor):
            raise ValueError(f"invalid scale factor {factor}")

    @staticmethod
    def check_scissor(size: Vec2) -> None:
        if size.x < 0 or size.y < 0:
            raise ValueError("scissor size must not be negative")

    def scale(self, factor: float) -> None:
        self.check_scale(factor)
        self._affine = Affine(self._affine.scale * factor, self._affine.translation)

    def reset(self) -> None:
        self._affine = IDENTITY

    def set_scissor(self, pos: Vec2, size: Vec2) -> ScissorRect:
        self.check_scissor(size)
        self._scissor = ScissorRect(self._affine.apply(pos), self._affine.apply_vector(size))
        return self._scissor

    def clear_scissor(self) -> None:
        self._scissor = None

    def to_screen(self, point: Vec2) -> Vec2:
        return self._affine.apply(point)

    def to_local(self, point: Vec2) -> Vec2:
        return self._affine.inverse_apply(point)


__all__ = ["Affine", "IDENTITY", "ScissorRect", "TransformState"]
