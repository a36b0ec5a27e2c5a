from __future__ import annotations

import pytest

import dume.window.factory as factory
from dume.runtime.config import initialize_runtime_config


def test_create_window_uses_configured_size_and_title(monkeypatch) -> None:
    captured: dict[str, object] = {}

    def _create(width, height, title, *, glfw_module=None):
        captured.update(width=width, height=height, title=title)
        return "window"

    initialize_runtime_config(
        env={"DUME_WINDOW_WIDTH": "320", "DUME_WINDOW_HEIGHT": "200", "DUME_WINDOW_TITLE": "Demo"}
    )
    monkeypatch.setattr(factory.GlfwWindow, "create", staticmethod(_create))

    assert factory.create_window() == "window"
    assert captured == {"width": 320, "height": 200, "title": "Demo"}


def test_explicit_arguments_override_config(monkeypatch) -> None:
    captured: dict[str, object] = {}

    def _create(width, height, title, *, glfw_module=None):
        captured.update(width=width, height=height, title=title)
        return "window"

    initialize_runtime_config(env={})
    monkeypatch.setattr(factory.GlfwWindow, "create", staticmethod(_create))

    factory.create_window(width=100, height=50, title="x")

    assert captured == {"width": 100, "height": 50, "title": "x"}


def test_unknown_backend_rejected() -> None:
    initialize_runtime_config(env={"DUME_WINDOW_BACKEND": "sdl2"})

    with pytest.raises(RuntimeError, match="Unsupported DUME_WINDOW_BACKEND"):
        factory.create_window()
