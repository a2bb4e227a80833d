"""
Registry of the available validation engines.
"""

from __future__ import annotations

from .errors import ConfigError, ErrorCode
from .manual_engine import ManualValidationEngine
from .schema_engine import SchemaValidationEngine
from .validation import ValidationEngine

ENGINES: dict[str, type[ValidationEngine]] = {
    SchemaValidationEngine.name: SchemaValidationEngine,
    ManualValidationEngine.name: ManualValidationEngine,
}

DEFAULT_ENGINE = SchemaValidationEngine.name


def available_engines() -> list[str]:
    """Return the registered engine names."""
    return list(ENGINES)


def get_engine(name: str) -> ValidationEngine:
    """
    Create the validation engine registered under a name.

    Args:
        name: Engine name ("schema" or "manual")

    Returns:
        A new engine instance

    Raises:
        ConfigError: If no engine is registered under that name
    """
    try:
        engine_class = ENGINES[name]
    except KeyError:
        raise ConfigError(
            code=ErrorCode.CONFIG_INVALID,
            user_message=f"Unknown validation engine: {name}",
            technical_message=f"Expected one of {', '.join(ENGINES)}, got {name!r}",
            context={"engine": name},
        ) from None
    return engine_class()
