"""
GUI-specific utilities for the RegForm application.

This module contains styling helpers shared by the form widgets and dialogs.
"""

from .styling import (
    AccessiblePalette,
    StyleSheets,
    apply_error_state,
    get_common_form_layout_config,
)

__all__ = [
    "AccessiblePalette",
    "StyleSheets",
    "apply_error_state",
    "get_common_form_layout_config",
]
