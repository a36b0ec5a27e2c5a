"""Canvas façade and the state it composes."""

from dume.canvas.canvas import Canvas
from dume.canvas.paragraph import Paragraph
from dume.canvas.path import PathBuilder, PathState
from dume.canvas.registry import EngineObjects, SpriteRegistry
from dume.canvas.transform import Affine, ScissorRect, TransformState

__all__ = [
    "Affine",
    "Canvas",
    "EngineObjects",
    "Paragraph",
    "PathBuilder",
    "PathState",
    "ScissorRect",
    "SpriteRegistry",
    "TransformState",
]
