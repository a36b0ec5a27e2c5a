"""Logging setup for hosts embedding the canvas."""

from __future__ import annotations

import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from dume.api.logging import DumeLoggingConfig, JsonFormatter
from dume.runtime.config import RuntimeLoggingConfig, get_runtime_config

_QUEUE_LISTENER: QueueListener | None = None


def configure_dume_logging(config: DumeLoggingConfig) -> None:
    """Configure root logging with optional async file streaming."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None

    level = getattr(logging, config.level_name.upper(), logging.INFO)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def setup_dume_logging(config: RuntimeLoggingConfig | None = None) -> None:
    """Configure logging from runtime config if no handlers are present."""
    root = logging.getLogger()
    if root.handlers:
        return
    settings = config if config is not None else get_runtime_config().logging
    configure_dume_logging(
        DumeLoggingConfig(
            level_name=settings.level_name,
            console_format=settings.console_format,
            file_path=settings.file_path,
            file_format="json",
        )
    )


def shutdown_dume_logging() -> None:
    """Flush and stop the background file listener, if any."""
    global _QUEUE_LISTENER
    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
