"""
Controller package exports.

Provides a stable import surface for the Qt wiring layer.
"""

from .annotation_controller import AnnotationController  # noqa: F401
from .export_controller import ExportController  # noqa: F401
from .input_controller import InputController  # noqa: F401
from .main_window_controller import MainWindowController  # noqa: F401
from .settings_ui_controller import SettingsUiController  # noqa: F401

__all__ = [
    "AnnotationController",
    "ExportController",
    "InputController",
    "MainWindowController",
    "SettingsUiController",
]
