"""Canvas façade over one rendering-engine context."""

from __future__ import annotations

import itertools
import logging
from pathlib import Path
from types import TracebackType

from dume.api.engine import EnginePort, NativeWindow
from dume.api.errors import ResourceExhausted
from dume.api.handles import ContextToken, ParagraphHandle, SpriteHandle, TextHandle
from dume.api.types import Color, TextLayout, TextStyle, Vec2
from dume.canvas.paragraph import Paragraph
from dume.canvas.path import PathBuilder
from dume.canvas.registry import EngineObjects, RgbaPixels, SpriteRegistry
from dume.canvas.transform import TransformState
from dume.text.markup import MarkupResolver, parse_markup
from dume.text.rich_text import RichText

logger = logging.getLogger("dume.canvas")

_CONTEXT_IDS = itertools.count(1)


class Canvas:
    """Single entry point for drawing into one engine context.

    The canvas exclusively owns its engine context. Everything that mutates
    engine state goes through it, and after ``close`` every operation, and
    every handle it produced, raises ``UseAfterFree``.
    """

    def __init__(
        self,
        engine: EnginePort,
        width: int,
        height: int,
        window: NativeWindow,
        *,
        default_style: TextStyle | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid canvas size {width}x{height}")
        self._engine = engine
        raw_ctx = engine.init(int(width), int(height), window)
        if not raw_ctx:
            raise ResourceExhausted("engine failed to create a context")
        self._raw_ctx = raw_ctx
        self._token = ContextToken(label=f"ctx-{next(_CONTEXT_IDS)}")
        self._width = int(width)
        self._height = int(height)
        self._default_style = default_style if default_style is not None else TextStyle()
        self._sprites = SpriteRegistry(engine, raw_ctx, self._token)
        self._objects = EngineObjects(engine)
        self._path = PathBuilder()
        self._transform = TransformState()
        self._frame_index = 0
        logger.info(
            "canvas_created context=%s size=%dx%d platform=%s",
            self._token.label,
            self._width,
            self._height,
            window.platform,
        )

    @classmethod
    def open(
        cls,
        width: int,
        height: int,
        window: NativeWindow,
        *,
        library_path: str | None = None,
        default_style: TextStyle | None = None,
    ) -> "Canvas":
        """Load the native engine library and create a canvas on it."""
        from dume.ffi.engine import NativeEngine

        engine = NativeEngine.load(library_path)
        return cls(engine, width, height, window, default_style=default_style)

    # Lifetime

    @property
    def closed(self) -> bool:
        return not self._token.alive

    @property
    def token(self) -> ContextToken:
        return self._token

    def close(self) -> None:
        """Free live text/paragraph objects, then the context, exactly once."""
        if not self._token.alive:
            return
        texts, paragraphs = self._objects.release_all(self._token)
        self._engine.free(self._raw_ctx)
        self._token.release()
        self._sprites.reset()
        logger.info(
            "canvas_closed context=%s frames=%d freed_texts=%d freed_paragraphs=%d",
            self._token.label,
            self._frame_index,
            texts,
            paragraphs,
        )

    def __enter__(self) -> "Canvas":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def _ctx(self) -> int:
        self._token.ensure_alive()
        return self._raw_ctx

    # Surface

    @property
    def width(self) -> int:
        self._token.ensure_alive()
        return self._width

    @property
    def height(self) -> int:
        self._token.ensure_alive()
        return self._height

    @property
    def size(self) -> Vec2:
        return Vec2(float(self.width), float(self.height))

    @property
    def frame_index(self) -> int:
        return self._frame_index

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid canvas size {width}x{height}")
        self._engine.resize(self._ctx, int(width), int(height))
        self._width = int(width)
        self._height = int(height)
        logger.debug("canvas_resized context=%s size=%dx%d", self._token.label, width, height)

    def render(self) -> None:
        """Flush every draw call issued since the previous frame."""
        self._engine.render(self._ctx)
        self._frame_index += 1
        logger.debug("frame_rendered context=%s frame=%d", self._token.label, self._frame_index)

    # Fonts and sprites

    def load_font(self, data: bytes) -> None:
        if not data:
            raise ValueError("font data must not be empty")
        self._engine.load_font(self._ctx, bytes(data))
        logger.debug("font_loaded context=%s bytes=%d", self._token.label, len(data))

    def load_font_file(self, path: str | Path) -> None:
        self.load_font(Path(path).read_bytes())

    @property
    def sprites(self) -> SpriteRegistry:
        return self._sprites

    def create_sprite_from_encoded(self, name: str, data: bytes) -> SpriteHandle:
        return self._sprites.upload_encoded(name, data)

    def create_sprite_from_rgba(
        self,
        name: str,
        pixels: RgbaPixels,
        width: int | None = None,
        height: int | None = None,
    ) -> SpriteHandle:
        return self._sprites.upload_rgba(name, pixels, width, height)

    def sprite(self, name: str) -> SpriteHandle:
        return self._sprites.lookup(name)

    def sprite_size(self, sprite: str | SpriteHandle) -> Vec2:
        return self._sprites.size(self._resolve_sprite(sprite))

    def draw_sprite(self, sprite: str | SpriteHandle, pos: Vec2, width: float) -> None:
        """Draw a sprite scaled to ``width``, keeping its aspect ratio."""
        handle = self._resolve_sprite(sprite)
        self._engine.draw_sprite(self._ctx, pos, float(width), handle.unwrap(self._token))

    def _resolve_sprite(self, sprite: str | SpriteHandle) -> SpriteHandle:
        if isinstance(sprite, SpriteHandle):
            return sprite
        return self._sprites.lookup(sprite)

    # Paths and paint

    @property
    def path(self) -> PathBuilder:
        return self._path

    def begin_path(self) -> None:
        self._token.ensure_alive()
        self._path.begin_path()

    def move_to(self, pos: Vec2) -> None:
        self._token.ensure_alive()
        self._path.move_to(pos)

    def line_to(self, pos: Vec2) -> None:
        self._token.ensure_alive()
        self._path.line_to(pos)

    def quad_to(self, control: Vec2, pos: Vec2) -> None:
        self._token.ensure_alive()
        self._path.quad_to(control, pos)

    def cubic_to(self, control1: Vec2, control2: Vec2, pos: Vec2) -> None:
        self._token.ensure_alive()
        self._path.cubic_to(control1, control2, pos)

    def arc(self, center: Vec2, radius: float, start_angle: float, end_angle: float) -> None:
        self._token.ensure_alive()
        self._path.arc(center, radius, start_angle, end_angle)

    def rect(self, pos: Vec2, size: Vec2) -> None:
        self._token.ensure_alive()
        self._path.rect(pos, size)

    def rounded_rect(self, pos: Vec2, size: Vec2, radius: float) -> None:
        self._token.ensure_alive()
        self._path.rounded_rect(pos, size, radius)

    def stroke_width(self, width: float) -> None:
        self._token.ensure_alive()
        self._path.stroke_width(width)

    def solid_color(self, color: Color) -> None:
        self._token.ensure_alive()
        self._path.solid_color(color)

    def linear_gradient(self, point_a: Vec2, point_b: Vec2, color_a: Color, color_b: Color) -> None:
        self._token.ensure_alive()
        self._path.linear_gradient(point_a, point_b, color_a, color_b)

    def stroke(self) -> bool:
        return self._path.stroke(self._engine, self._ctx)

    def fill(self) -> bool:
        return self._path.fill(self._engine, self._ctx)

    # Text

    @property
    def default_style(self) -> TextStyle:
        return self._default_style

    def parse_markup(
        self,
        markup: str,
        resolver: MarkupResolver | None = None,
        *,
        default_style: TextStyle | None = None,
    ) -> TextHandle:
        """Parse markup into an engine text object, ready for ``create_paragraph``."""
        self._token.ensure_alive()
        style = default_style if default_style is not None else self._default_style
        rich = parse_markup(markup, style, resolver)
        return self._upload_rich_text(rich)

    def _upload_rich_text(self, rich: RichText) -> TextHandle:
        engine_markup, variables = rich.to_engine_markup()
        encoded = {name.encode("utf-8"): value.encode("utf-8") for name, value in variables.items()}
        raw = self._engine.parse_markup(
            engine_markup.encode("utf-8"),
            rich.default_style,
            lambda name: encoded.get(bytes(name), b""),
        )
        if not raw:
            raise ResourceExhausted("engine failed to allocate a text object")
        text = TextHandle(raw, self._token, rich_text=rich)
        self._objects.track_text(text)
        return text

    def free_text(self, text: TextHandle) -> None:
        """Release a text object that will not be laid out."""
        raw = text.take(self._token)
        self._objects.forget_text(text)
        self._engine.text_free(raw)

    def create_paragraph(self, text: TextHandle, layout: TextLayout) -> Paragraph:
        """Lay out ``text``; the text is consumed and must not be used again."""
        if not isinstance(layout, TextLayout):
            raise TypeError(f"expected TextLayout, got {type(layout).__name__}")
        ctx = self._ctx
        raw_text = text.take(self._token)
        self._objects.forget_text(text)
        raw = self._engine.create_paragraph(ctx, raw_text, layout)
        if not raw:
            raise ResourceExhausted("engine failed to allocate a paragraph")
        handle = ParagraphHandle(raw, self._token)
        self._objects.track_paragraph(handle)
        paragraph = Paragraph(self._engine, ctx, self._token, handle, layout, self._objects)
        logger.debug(
            "paragraph_created handle=%r width=%.1f height=%.1f",
            handle,
            paragraph.width,
            paragraph.height,
        )
        return paragraph

    def draw_paragraph(self, paragraph: Paragraph, pos: Vec2) -> None:
        self._engine.draw_paragraph(self._ctx, pos, paragraph.unwrap(self._token))

    # Transform and scissor. The mirror is updated only once the engine call
    # has returned.

    @property
    def transform(self) -> TransformState:
        return self._transform

    def translate(self, vector: Vec2) -> None:
        self._engine.translate(self._ctx, vector)
        self._transform.translate(vector)

    def scale(self, factor: float) -> None:
        factor = float(factor)
        self._transform.check_scale(factor)
        self._engine.scale(self._ctx, factor)
        self._transform.scale(factor)

    def reset_transform(self) -> None:
        self._engine.reset_transform(self._ctx)
        self._transform.reset()

    def set_scissor_rect(self, pos: Vec2, size: Vec2) -> None:
        self._transform.check_scissor(size)
        self._engine.scissor_rect(self._ctx, pos, size)
        self._transform.set_scissor(pos, size)

    def clear_scissor(self) -> None:
        self._engine.clear_scissor(self._ctx)
        self._transform.clear_scissor()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{self._width}x{self._height}"
        return f"Canvas(context={self._token.label}, {state})"


__all__ = ["Canvas"]
