"""Dume: a 2D drawing canvas over an external GPU rendering engine."""

from dume.api.errors import (
    DumeError,
    EngineUnavailable,
    InvalidState,
    MarkupSyntaxError,
    NotFound,
    ResourceExhausted,
    UseAfterFree,
)
from dume.api.types import Align, Baseline, Color, FontStyle, TextLayout, TextStyle, Vec2, Weight
from dume.canvas.canvas import Canvas
from dume.canvas.paragraph import Paragraph


def run_app(*args, **kwargs) -> int:
    """Run a windowed app; see ``dume.runtime.app.run_app``."""
    from dume.runtime.app import run_app as runtime_run_app

    return runtime_run_app(*args, **kwargs)


__all__ = [
    "Align",
    "Baseline",
    "Canvas",
    "Color",
    "DumeError",
    "EngineUnavailable",
    "FontStyle",
    "InvalidState",
    "MarkupSyntaxError",
    "NotFound",
    "Paragraph",
    "ResourceExhausted",
    "TextLayout",
    "TextStyle",
    "UseAfterFree",
    "Vec2",
    "Weight",
    "run_app",
]
