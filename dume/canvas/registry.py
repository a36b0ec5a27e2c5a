"""Sprite name registry and engine-object lifetime tracking."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import numpy as np

from dume.api.engine import EnginePort
from dume.api.errors import NotFound, ResourceExhausted
from dume.api.handles import ContextToken, ParagraphHandle, SpriteHandle, TextHandle
from dume.api.types import Vec2

logger = logging.getLogger("dume.canvas.registry")

RgbaPixels = bytes | bytearray | memoryview | np.ndarray


class SpriteRegistry:
    """Map caller-chosen names to engine sprite handles.

    Registering an existing name overwrites the mapping. The superseded sprite
    stays alive in the engine; the registry never frees sprites.
    """

    def __init__(self, engine: EnginePort, ctx: int, token: ContextToken) -> None:
        self._engine = engine
        self._ctx = ctx
        self._token = token
        self._by_name: dict[str, SpriteHandle] = {}

    def upload_encoded(self, name: str, data: bytes) -> SpriteHandle:
        """Upload an encoded image (PNG, JPEG, ...) under ``name``."""
        self._token.ensure_alive()
        if not data:
            raise ValueError("encoded sprite data must not be empty")
        raw = self._engine.create_sprite_from_encoded(self._ctx, _encode_name(name), bytes(data))
        return self._register(name, raw)

    def upload_rgba(
        self,
        name: str,
        pixels: RgbaPixels,
        width: int | None = None,
        height: int | None = None,
    ) -> SpriteHandle:
        """Upload raw RGBA8 pixels under ``name``.

        ``pixels`` is either a ``(height, width, 4)`` uint8 array, whose shape
        gives the dimensions, or a flat buffer of exactly ``width*height*4``
        bytes.
        """
        self._token.ensure_alive()
        buffer, w, h = _rgba_buffer(pixels, width, height)
        raw = self._engine.create_sprite_from_rgba(self._ctx, _encode_name(name), buffer, w, h)
        return self._register(name, raw)

    def lookup(self, name: str) -> SpriteHandle:
        """Return the handle for ``name``; raise ``NotFound`` if never registered."""
        self._token.ensure_alive()
        handle = self._by_name.get(name)
        if handle is not None:
            return handle
        raw = self._engine.get_sprite_by_name(self._ctx, _encode_name(name))
        if not raw:
            raise NotFound(name)
        handle = SpriteHandle(raw, self._token)
        self._by_name[name] = handle
        return handle

    def size(self, handle: SpriteHandle) -> Vec2:
        width, height = self._engine.get_sprite_size(self._ctx, handle.unwrap(self._token))
        return Vec2(float(width), float(height))

    def reset(self) -> None:
        """Forget every mapping, e.g. after the engine context was recreated."""
        self._by_name.clear()

    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def _register(self, name: str, raw: int) -> SpriteHandle:
        if not raw:
            raise ResourceExhausted(f"engine failed to allocate sprite {name!r}")
        handle = SpriteHandle(raw, self._token)
        previous = self._by_name.get(name)
        if previous is not None and previous != handle:
            logger.debug("sprite_overwritten name=%s previous=%r", name, previous)
        self._by_name[name] = handle
        logger.debug("sprite_registered name=%s handle=%r", name, handle)
        return handle


class EngineObjects:
    """Live text and paragraph objects that must be freed before the context."""

    def __init__(self, engine: EnginePort) -> None:
        self._engine = engine
        self._texts: list[TextHandle] = []
        self._paragraphs: list[ParagraphHandle] = []

    def track_text(self, text: TextHandle) -> None:
        self._texts.append(text)

    def track_paragraph(self, paragraph: ParagraphHandle) -> None:
        self._paragraphs.append(paragraph)

    def forget_text(self, text: TextHandle) -> None:
        if text in self._texts:
            self._texts.remove(text)

    def forget_paragraph(self, paragraph: ParagraphHandle) -> None:
        if paragraph in self._paragraphs:
            self._paragraphs.remove(paragraph)

    def live_paragraphs(self) -> Iterator[ParagraphHandle]:
        return iter(tuple(self._paragraphs))

    def release_all(self, token: ContextToken) -> tuple[int, int]:
        """Free unconsumed texts and live paragraphs; return how many of each."""
        texts = 0
        for text in self._texts:
            if not text.consumed:
                self._engine.text_free(text.take(token))
                texts += 1
        paragraphs = 0
        for paragraph in self._paragraphs:
            if not paragraph.freed:
                self._engine.paragraph_free(paragraph.unwrap(token))
                paragraph.freed = True
                paragraphs += 1
        self._texts.clear()
        self._paragraphs.clear()
        return texts, paragraphs


def _encode_name(name: str) -> bytes:
    if not name:
        raise ValueError("sprite name must not be empty")
    return name.encode("utf-8")


def _rgba_buffer(
    pixels: RgbaPixels, width: int | None, height: int | None
) -> tuple[bytearray, int, int]:
    if isinstance(pixels, np.ndarray):
        array = pixels
        if array.dtype != np.uint8:
            raise TypeError(f"RGBA pixels must be uint8, got {array.dtype}")
    else:
        array = np.frombuffer(bytes(pixels), dtype=np.uint8)

    if array.ndim == 3:
        if array.shape[2] != 4:
            raise ValueError(f"expected 4 channels, got shape {array.shape}")
        h, w = int(array.shape[0]), int(array.shape[1])
        if (width is not None and width != w) or (height is not None and height != h):
            raise ValueError(f"dimensions {width}x{height} do not match array shape {array.shape}")
    else:
        if width is None or height is None:
            raise ValueError("width and height are required for flat RGBA buffers")
        w, h = int(width), int(height)
        if array.size != w * h * 4:
            raise ValueError(f"expected {w * h * 4} bytes for {w}x{h} RGBA, got {array.size}")
    if w <= 0 or h <= 0:
        raise ValueError(f"invalid sprite dimensions {w}x{h}")
    data = np.ascontiguousarray(array, dtype=np.uint8)
    return bytearray(data.tobytes()), w, h


__all__ = ["EngineObjects", "RgbaPixels", "SpriteRegistry"]
