"""Window subsystem adapters."""

from dume.window.events import EventBridge, to_record
from dume.window.factory import create_window
from dume.window.glfw_window import GlfwWindow

__all__ = ["EventBridge", "GlfwWindow", "create_window", "to_record"]
