"""Locating and loading the engine shared library."""

from __future__ import annotations

import ctypes.util
import logging
import os
from typing import Any

from dume.api.errors import EngineUnavailable
from dume.ffi.bindings import ffi
from dume.runtime.config import get_runtime_config

logger = logging.getLogger("dume.ffi")

LIBRARY_NAME = "dume"


def resolve_library_path(explicit: str | None = None) -> str:
    """Return the library to load: explicit path, configured path, then system search."""
    if explicit:
        return explicit
    configured = get_runtime_config().engine.library_path
    if configured:
        return configured
    found = ctypes.util.find_library(LIBRARY_NAME)
    if found is None:
        raise EngineUnavailable(
            f"could not find the '{LIBRARY_NAME}' engine library; "
            "set DUME_LIBRARY_PATH to its location"
        )
    return found


def load_library(explicit: str | None = None) -> Any:
    path = resolve_library_path(explicit)
    if os.sep in path and not os.path.exists(path):
        raise EngineUnavailable(f"engine library does not exist: {path}")
    try:
        lib = ffi.dlopen(path)
    except OSError as exc:
        raise EngineUnavailable(f"failed to load engine library {path}: {exc}") from exc
    logger.info("engine_library_loaded path=%s", path)
    return lib


__all__ = ["LIBRARY_NAME", "load_library", "resolve_library_path"]
