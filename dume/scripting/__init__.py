"""Script-facing canvas surface."""

from dume.scripting.bindings import ScriptCanvas, ScriptEventHandler, make_bindings

__all__ = ["ScriptCanvas", "ScriptEventHandler", "make_bindings"]
