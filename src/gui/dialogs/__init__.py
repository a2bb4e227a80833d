"""
Dialog windows for the RegForm application.

This module contains dialog windows and modal interfaces.
"""

from .confirmation import ConfirmationDialog

__all__ = ["ConfirmationDialog"]
