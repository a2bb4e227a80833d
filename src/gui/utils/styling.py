"""
Shared styling utilities for the RegForm GUI application.

This module contains the color palette and stylesheet helpers used by the
registration form and its dialogs.
"""

from typing import Any, Protocol


class StyleableWidget(Protocol):
    """Protocol for widgets that can be styled."""

    def setStyleSheet(self, styleSheet: str) -> None: ...
    def setProperty(self, name: str, value: Any) -> bool: ...
    def style(self) -> Any: ...


class AccessiblePalette:
    """Centralized color palette for form inputs, messages and buttons."""

    ERROR_TEXT = "#721c24"  # Dark red for high contrast
    SUCCESS_TEXT = "#198754"  # Green

    BORDER_DEFAULT = "#dee2e6"  # Light border
    BORDER_FOCUS = "#0d6efd"  # Blue focus indicator
    BORDER_ERROR = "#dc3545"  # Error state border

    BACKGROUND_DEFAULT = "#ffffff"
    BACKGROUND_DISABLED = "#e9ecef"

    TEXT_PRIMARY = "#212529"
    TEXT_DISABLED = "#adb5bd"

    BUTTON_PRIMARY_BG = "#0d6efd"
    BUTTON_PRIMARY_TEXT = "#ffffff"


class StyleSheets:
    """Collection of reusable stylesheet definitions using the accessible palette."""

    @staticmethod
    def get_form_style() -> str:
        """Get the stylesheet for the registration form container."""
        return f"""
            QWidget#registrationForm QLineEdit,
            QWidget#registrationForm QComboBox {{
                border: 1px solid {AccessiblePalette.BORDER_DEFAULT};
                border-radius: 4px;
                padding: 4px 6px;
                background-color: {AccessiblePalette.BACKGROUND_DEFAULT};
                color: {AccessiblePalette.TEXT_PRIMARY};
            }}

            QWidget#registrationForm QLineEdit:focus,
            QWidget#registrationForm QComboBox:focus {{
                border: 2px solid {AccessiblePalette.BORDER_FOCUS};
            }}

            QWidget#registrationForm QLineEdit[hasError="true"],
            QWidget#registrationForm QComboBox[hasError="true"] {{
                border: 2px solid {AccessiblePalette.BORDER_ERROR};
            }}

            QLabel#fieldError {{
                color: {AccessiblePalette.ERROR_TEXT};
                font-size: 12px;
            }}
        """

    @staticmethod
    def get_button_style() -> str:
        """Get the primary button stylesheet."""
        return f"""
            QPushButton {{
                background-color: {AccessiblePalette.BUTTON_PRIMARY_BG};
                color: {AccessiblePalette.BUTTON_PRIMARY_TEXT};
                border: 2px solid {AccessiblePalette.BUTTON_PRIMARY_BG};
                border-radius: 4px;
                padding: 8px 16px;
                font-weight: bold;
                min-height: 20px;
            }}

            QPushButton:hover {{
                background-color: #0b5ed7;
                border-color: #0b5ed7;
            }}

            QPushButton:pressed {{
                background-color: #0a58ca;
                border-color: #0a58ca;
            }}

            QPushButton:disabled {{
                background-color: {AccessiblePalette.BACKGROUND_DISABLED};
                color: {AccessiblePalette.TEXT_DISABLED};
                border-color: {AccessiblePalette.BORDER_DEFAULT};
            }}
        """


def apply_error_state(widget: StyleableWidget, has_error: bool) -> None:
    """
    Toggle the error state of an input widget.

    Args:
        widget: The input widget to style
        has_error: Whether the field currently has a validation error
    """
    widget.setProperty("hasError", has_error)

    # Force style refresh so the dynamic property selector is re-evaluated
    widget.style().unpolish(widget)
    widget.style().polish(widget)


def get_common_form_layout_config() -> dict[str, Any]:
    """
    Get common configuration for form layouts.

    Returns:
        Dictionary with layout configuration parameters
    """
    return {
        "margins": (16, 16, 16, 16),
        "spacing": 6,
        "row_spacing": 10,
    }
