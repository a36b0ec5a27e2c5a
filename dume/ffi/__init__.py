"""Native engine binding."""

from dume.ffi.engine import NativeEngine
from dume.ffi.library import load_library, resolve_library_path

__all__ = ["NativeEngine", "load_library", "resolve_library_path"]
