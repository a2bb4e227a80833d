"""
Persistent settings for the RegForm GUI.

Values live in QSettings and are always read back through DEFAULT_CONFIG,
so a missing or mangled entry quietly turns into its default.
"""

import logging
from typing import Any

from PySide6.QtCore import QSettings

from .config import DEFAULT_CONFIG, LOG_LEVELS, setup_qsettings
from .engines import DEFAULT_ENGINE, available_engines

logger = logging.getLogger(__name__)

TRUTHY = frozenset({"true", "1", "yes", "on"})


def coerce_setting(value: Any, like: Any) -> Any:
    """
    Convert a stored value to the type of `like`.

    QSettings hands back strings for most scalar types on INI and registry
    backends, so "640" and "false" are normal here.

    Raises:
        ValueError, TypeError: If the value cannot take that type
    """
    target = type(like)

    if target is bool:
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY
        return bool(value)
    if target in (int, float, str):
        return value if isinstance(value, target) else target(value)
    if not isinstance(value, target):
        raise TypeError(f"expected {target.__name__}, got {type(value).__name__}")
    return value


class ConfigManager:
    """
    Typed access to the application's QSettings store.

    Every known key has a default in DEFAULT_CONFIG; reads coerce to the
    default's type and writes are synced straight away.
    """

    def __init__(self) -> None:
        setup_qsettings()

        self._settings = QSettings()
        self._defaults = DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any | None = None) -> Any:
        """
        Read one setting.

        Args:
            key: Setting name
            default: Value to use instead of the DEFAULT_CONFIG entry

        Returns:
            The stored value coerced to the default's type, the default when
            nothing usable is stored, or None for an unknown key
        """
        fallback = self._defaults.get(key) if default is None else default
        value = self._settings.value(key, fallback)

        if fallback is None:
            return value

        try:
            return coerce_setting(value, fallback)
        except (ValueError, TypeError) as e:
            logger.warning(f"Ignoring stored value for '{key}' ({e}), using default")
            return fallback

    def set(self, key: str, value: Any) -> None:
        """Store one setting and flush it to disk."""
        self._settings.setValue(key, value)
        self._settings.sync()

    def load_all(self) -> dict[str, Any]:
        """Return every known setting, stored values taking precedence over defaults."""
        config = self._defaults.copy()

        for key in config:
            current = self.get(key)
            if current is not None:
                config[key] = current

        return config

    export_config = load_all

    def import_config(self, config: dict[str, Any]) -> None:
        """
        Store the settings in `config`.

        Keys without a default and values that will not coerce are logged
        and skipped; the rest are written one by one.
        """
        for key, value in config.items():
            if key not in self._defaults:
                logger.warning(f"Skipping unknown setting '{key}'")
                continue

            try:
                self.set(key, coerce_setting(value, self._defaults[key]))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping setting '{key}': {e}")

    def reset_to_defaults(self) -> None:
        """Forget every stored setting."""
        self._settings.clear()
        self._settings.sync()

        logger.info("Settings reset to defaults")

    def get_engine_name(self) -> str:
        """
        Get the configured validation engine.

        Returns:
            A registered engine name; unknown values fall back to the default
        """
        name = str(self.get("engine")).strip().lower()
        if name not in available_engines():
            logger.warning(f"Configured engine '{name}' is not available, using '{DEFAULT_ENGINE}'")
            return DEFAULT_ENGINE
        return name

    def get_log_level(self) -> int:
        """Get the configured log level as a logging constant."""
        name = str(self.get("log_level")).strip().upper()
        if name not in LOG_LEVELS:
            logger.warning(f"Configured log level '{name}' is not valid, using INFO")
            return logging.INFO
        return getattr(logging, name)
