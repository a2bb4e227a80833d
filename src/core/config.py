"""
Configuration defaults for the RegForm GUI.

This module provides the application identifiers and the default values
for every supported setting.
"""

from typing import Any

from PySide6.QtCore import QCoreApplication

# Application identifiers for QSettings
APP_ORGANIZATION = "RegForm"
APP_NAME = "GUI"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Default configuration with all supported keys and their expected types
DEFAULT_CONFIG: dict[str, Any] = {
    "engine": "schema",  # Options: "schema", "manual"
    "confirm_on_accept": True,  # Only honoured by the schema engine form
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
    "window_width": 520,
    "window_height": 760,
}


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    This should be called early in application startup to ensure
    QSettings uses the correct organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
