"""
Error taxonomy for the RegForm GUI.

Validation problems are ordinary, user-correctable outcomes and are
reported as FieldValidationError values. Configuration and system errors
cover everything else and are funnelled through the ErrorHandler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Broad category of an application error."""

    VALIDATION = "validation"
    CONFIG = "config"
    SYSTEM = "system"


class ErrorCode(Enum):
    """Machine-readable reason attached to every application error."""

    # A form field broke one of its rules
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_TYPE = "INVALID_TYPE"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    FIELD_MISMATCH = "FIELD_MISMATCH"
    INVALID_CHOICE = "INVALID_CHOICE"
    INVALID_INPUT = "INVALID_INPUT"

    CONFIG_INVALID = "CONFIG_INVALID"

    OS_ERROR = "OS_ERROR"
    MEMORY_ERROR = "MEMORY_ERROR"
    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class BaseAppError(Exception):
    """
    Root of the application's exceptions.

    Carries a message for the user, a technical message for the log and
    free-form context (field name, engine, form snapshot) for diagnostics.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retriable: bool = False
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.user_message

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"{name}(type={self.type.value}, code={self.code.value}, message='{self.user_message}')"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging."""
        return {
            "type": self.type.value,
            "code": self.code.value,
            "user_message": self.user_message,
            "technical_message": self.technical_message,
            "severity": self.severity.value,
            "retriable": self.retriable,
            "context": self.context,
        }


class FieldValidationError(BaseAppError):
    """
    One broken rule on one form field.

    Always low severity and retriable: the user fixes the field and
    submits again.
    """

    def __init__(
        self,
        field: str,
        user_message: str,
        code: ErrorCode = ErrorCode.INVALID_INPUT,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.VALIDATION,
            code=code,
            user_message=user_message,
            technical_message=technical_message or f"Validation failed for field '{field}': {user_message}",
            severity=ErrorSeverity.LOW,
            retriable=True,
            context={**(context or {}), "field": field},
        )

    @property
    def field(self) -> str:
        return self.context["field"]


class FormValidationFailed(BaseAppError):
    """Raised by callers that need a typed result from a form that did not validate."""

    def __init__(self, errors: list[FieldValidationError]):
        fields = [error.field for error in errors]
        super().__init__(
            type=ErrorType.VALIDATION,
            code=ErrorCode.INVALID_INPUT,
            user_message="Please correct the highlighted fields",
            technical_message=f"Form validation failed for: {', '.join(fields)}",
            severity=ErrorSeverity.LOW,
            retriable=True,
            context={"fields": fields},
        )
        self.errors = errors

    def error_map(self) -> dict[str, str]:
        """Return the failures as a field -> message mapping."""
        return {error.field: error.user_message for error in self.errors}


class _CategorizedError(BaseAppError):
    """Error whose type is fixed by its class."""

    error_type: ErrorType = ErrorType.SYSTEM
    default_severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity | None = None,
        retriable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=self.error_type,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity or self.default_severity,
            retriable=retriable,
            context=context or {},
        )


class ConfigError(_CategorizedError):
    """Invalid or unknown configuration, e.g. an unregistered engine name."""

    error_type = ErrorType.CONFIG


class SystemError(_CategorizedError):
    """Unexpected internal failure, including defects in a validation engine."""

    error_type = ErrorType.SYSTEM
    default_severity = ErrorSeverity.HIGH


# Built-in exception -> (code, fallback message). Looked up along the MRO,
# so FileNotFoundError resolves to the OSError entry.
_EXCEPTION_MAPPING: dict[type[Exception], tuple[ErrorCode, str]] = {
    OSError: (ErrorCode.OS_ERROR, "System error occurred"),
    MemoryError: (ErrorCode.MEMORY_ERROR, "Insufficient memory"),
    ValueError: (ErrorCode.INVALID_INPUT, "Invalid input provided"),
    KeyError: (ErrorCode.INVALID_INPUT, "Unknown form field"),
}

# Raised by RegistrationForm for bad edits, so they point at a field
_INPUT_EXCEPTIONS = (ValueError, KeyError)


def _lookup(exc_type: type[Exception]) -> tuple[ErrorCode, str] | None:
    for base in exc_type.__mro__:
        if base in _EXCEPTION_MAPPING:
            return _EXCEPTION_MAPPING[base]
    return None


def map_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Wrap any exception in the application's error hierarchy.

    Application errors are returned as-is. ValueError and KeyError become
    a FieldValidationError for `context["field"]` (or "form"); other known
    built-ins become a SystemError; anything else is an UNKNOWN SystemError.
    """
    context = context or {}

    if isinstance(exc, BaseAppError):
        return exc

    technical_message = f"{type(exc).__name__}: {exc}"
    mapping = _lookup(type(exc))

    if mapping is None:
        logger.warning(f"Unknown exception type: {technical_message}")
        return SystemError(
            code=ErrorCode.UNKNOWN,
            user_message="An unexpected error occurred",
            technical_message=technical_message,
            context=context,
        )

    code, default_message = mapping
    user_message = str(exc) or default_message

    if isinstance(exc, _INPUT_EXCEPTIONS):
        return FieldValidationError(
            field=str(context.get("field", "form")),
            user_message=user_message,
            code=code,
            technical_message=technical_message,
            context=context,
        )

    return SystemError(code=code, user_message=user_message, technical_message=technical_message, context=context)


def from_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """Alias of map_exception()."""
    return map_exception(exc, context)
