"""Laid-out paragraphs that re-flow in place."""

from __future__ import annotations

import logging
from dataclasses import replace

from dume.api.engine import EnginePort
from dume.api.handles import ContextToken, ParagraphHandle
from dume.api.types import TextLayout, Vec2
from dume.canvas.registry import EngineObjects

logger = logging.getLogger("dume.canvas.paragraph")


class Paragraph:
    """Engine paragraph plus its last computed extents."""

    def __init__(
        self,
        engine: EnginePort,
        ctx: int,
        token: ContextToken,
        handle: ParagraphHandle,
        layout: TextLayout,
        objects: EngineObjects,
    ) -> None:
        self._engine = engine
        self._ctx = ctx
        self._token = token
        self._handle = handle
        self._layout = layout
        self._objects = objects
        self._width = 0.0
        self._height = 0.0
        self._refresh_extents()

    @property
    def layout(self) -> TextLayout:
        return self._layout

    @property
    def width(self) -> float:
        self._handle.unwrap(self._token)
        return self._width

    @property
    def height(self) -> float:
        self._handle.unwrap(self._token)
        return self._height

    @property
    def size(self) -> Vec2:
        return Vec2(self.width, self.height)

    @property
    def freed(self) -> bool:
        return self._handle.freed

    def resize(self, width: float, height: float) -> None:
        """Re-flow within new maximum dimensions without re-parsing the text."""
        raw = self._handle.unwrap(self._token)
        new_max = Vec2(float(width), float(height))
        if new_max.x < 0 or new_max.y < 0:
            raise ValueError("paragraph dimensions must not be negative")
        if new_max == self._layout.max_dimensions:
            return
        self._engine.paragraph_resize(self._ctx, raw, new_max)
        self._layout = replace(self._layout, max_dimensions=new_max)
        self._refresh_extents()

    def free(self) -> None:
        """Release the engine paragraph. Safe to call more than once."""
        if self._handle.freed:
            return
        raw = self._handle.unwrap(self._token)
        self._engine.paragraph_free(raw)
        self._handle.freed = True
        self._objects.forget_paragraph(self._handle)
        logger.debug("paragraph_freed handle=%r", self._handle)

    def unwrap(self, requester: ContextToken) -> int:
        return self._handle.unwrap(requester)

    def _refresh_extents(self) -> None:
        raw = self._handle.unwrap(self._token)
        self._width = float(self._engine.paragraph_width(raw))
        self._height = float(self._engine.paragraph_height(raw))

    def __repr__(self) -> str:
        return f"Paragraph(handle={self._handle!r}, width={self._width}, height={self._height})"


__all__ = ["Paragraph"]
