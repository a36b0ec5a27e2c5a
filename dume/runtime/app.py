"""Compose window, engine, canvas and event bridge into a running app."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from dume.api.engine import EnginePort
from dume.api.events import EventHandler
from dume.api.types import TextStyle
from dume.canvas.canvas import Canvas
from dume.runtime.config import RuntimeConfig, get_runtime_config
from dume.runtime.logging import setup_dume_logging, shutdown_dume_logging
from dume.window.events import EventBridge
from dume.window.factory import create_window

_LOG = logging.getLogger("dume.runtime")


def run_app(
    draw: Callable[[Canvas], None],
    handler: EventHandler | None = None,
    *,
    config: RuntimeConfig | None = None,
    engine: EnginePort | None = None,
    setup: Callable[[Canvas], None] | None = None,
    glfw_module: Any | None = None,
) -> int:
    """Open a window, draw every frame until it closes and return the frame count.

    ``setup`` runs once after fonts are loaded, before the first frame, and is
    the place to upload sprites and build paragraphs.
    """
    cfg = config if config is not None else get_runtime_config()
    setup_dume_logging(cfg.logging)
    window = create_window(
        width=cfg.window.width,
        height=cfg.window.height,
        title=cfg.window.title,
        backend=cfg.window.backend,
        glfw_module=glfw_module,
    )
    try:
        if engine is None:
            from dume.ffi.engine import NativeEngine

            engine = NativeEngine.load(cfg.engine.library_path)
        width, height = window.framebuffer_size()
        default_style = TextStyle(
            family=cfg.text.default_font_family,
            size=cfg.text.default_font_size,
        )
        with Canvas(engine, width, height, window.native_handle(), default_style=default_style) as canvas:
            for path in cfg.text.font_paths:
                canvas.load_font_file(path)
            _LOG.info("fonts_loaded count=%d", len(cfg.text.font_paths))
            bridge = EventBridge(canvas, handler, trace=cfg.window.events_trace_enabled)
            window.bind(bridge)
            if setup is not None:
                setup(canvas)
            return window.run(canvas, lambda: draw(canvas))
    finally:
        window.close()
        shutdown_dume_logging()


__all__ = ["run_app"]
