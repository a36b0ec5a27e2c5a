"""Window backend selection and factory helpers."""

from __future__ import annotations

from typing import Any

from dume.runtime.config import get_runtime_config
from dume.window.glfw_window import GlfwWindow


def create_window(
    *,
    width: int | None = None,
    height: int | None = None,
    title: str | None = None,
    backend: str | None = None,
    glfw_module: Any | None = None,
) -> GlfwWindow:
    """Create a window on the configured backend; explicit arguments win."""
    window_config = get_runtime_config().window
    selected = backend if backend is not None else window_config.backend
    if selected == "glfw":
        return GlfwWindow.create(
            int(width if width is not None else window_config.width),
            int(height if height is not None else window_config.height),
            title if title is not None else window_config.title,
            glfw_module=glfw_module,
        )
    raise RuntimeError(f"Unsupported DUME_WINDOW_BACKEND: {selected!r}")


__all__ = ["create_window"]
