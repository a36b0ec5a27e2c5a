"""Centralized runtime configuration sourced from the environment."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class RuntimeEngineConfig:
    library_path: str | None


@dataclass(frozen=True, slots=True)
class RuntimeWindowConfig:
    backend: str
    width: int
    height: int
    title: str
    events_trace_enabled: bool


@dataclass(frozen=True, slots=True)
class RuntimeTextConfig:
    default_font_family: str
    default_font_size: float
    font_paths: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RuntimeLoggingConfig:
    level_name: str
    console_format: str
    file_path: str | None


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    engine: RuntimeEngineConfig
    window: RuntimeWindowConfig
    text: RuntimeTextConfig
    logging: RuntimeLoggingConfig


_RUNTIME_CONFIG: ContextVar[RuntimeConfig | None] = ContextVar("dume_runtime_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _paths(name: str, *, env: Mapping[str, str] | None = None) -> tuple[str, ...]:
    raw = _text(name, "", env=env)
    if not raw:
        return ()
    sep = ";" if ";" in raw else os.pathsep
    return tuple(item.strip() for item in raw.split(sep) if item.strip())


def _normalize_window_backend(raw: str) -> str:
    value = str(raw).strip().lower()
    if value in {"glfw", "pyglfw", "direct_glfw"}:
        return "glfw"
    return value


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with a package-prefixed override."""
    value = _raw("DUME_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    library_path = _text("DUME_LIBRARY_PATH", "", env=env)
    log_file = _text("DUME_LOG_FILE", "", env=env)
    console_format = _text("DUME_LOG_FORMAT", "text", env=env).lower()
    if console_format not in {"text", "json"}:
        console_format = "text"

    return RuntimeConfig(
        engine=RuntimeEngineConfig(
            library_path=library_path or None,
        ),
        window=RuntimeWindowConfig(
            backend=_normalize_window_backend(_text("DUME_WINDOW_BACKEND", "glfw", env=env)),
            width=_int("DUME_WINDOW_WIDTH", 960, minimum=1, env=env),
            height=_int("DUME_WINDOW_HEIGHT", 540, minimum=1, env=env),
            title=_text("DUME_WINDOW_TITLE", "Dume", env=env),
            events_trace_enabled=_flag("DUME_EVENTS_TRACE_ENABLED", False, env=env),
        ),
        text=RuntimeTextConfig(
            default_font_family=_text("DUME_DEFAULT_FONT_FAMILY", "", env=env),
            default_font_size=_float("DUME_DEFAULT_FONT_SIZE", 12.0, minimum=1.0, env=env),
            font_paths=_paths("DUME_FONT_PATHS", env=env),
        ),
        logging=RuntimeLoggingConfig(
            level_name=resolve_log_level_name(env=env),
            console_format=console_format,
            file_path=log_file or None,
        ),
    )


def initialize_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    config = load_runtime_config(env=env)
    _RUNTIME_CONFIG.set(config)
    return config


def set_runtime_config(config: RuntimeConfig) -> RuntimeConfig:
    _RUNTIME_CONFIG.set(config)
    return config


def get_runtime_config() -> RuntimeConfig:
    config = _RUNTIME_CONFIG.get()
    if config is not None:
        return config
    return initialize_runtime_config()


__all__ = [
    "RuntimeConfig",
    "RuntimeEngineConfig",
    "RuntimeLoggingConfig",
    "RuntimeTextConfig",
    "RuntimeWindowConfig",
    "get_runtime_config",
    "initialize_runtime_config",
    "load_runtime_config",
    "resolve_log_level_name",
    "set_runtime_config",
]
