"""
Application-wide error reporting for the RegForm GUI.

A single ErrorHandler turns unexpected exceptions (engine defects,
configuration problems, anything reaching the excepthooks) into
BaseAppError values, writes them to a rotating log file and announces
them through a Qt signal. Field validation failures never come through
here; they are part of normal form state.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
import traceback
from pathlib import Path
from typing import Any, ClassVar

from PySide6.QtCore import QObject, QStandardPaths, Signal

from .config import APP_NAME, APP_ORGANIZATION
from .errors import BaseAppError, from_exception
from .form_model import SECRET_FIELDS

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
ERROR_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | code=%(app_code)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 5_242_880  # 5MB
LOG_BACKUP_COUNT = 5

SENSITIVE_KEYS = ("password", "token", "key", "secret")
MAX_CONTEXT_ITEMS = 20
MAX_VALUE_LENGTH = 200
REDACTED = "[REDACTED]"


def log_directory() -> Path:
    """Return the directory the error log is written to."""
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if location:
        return Path(location) / "logs"

    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(location) / APP_ORGANIZATION / APP_NAME / "logs"


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return lowered in SECRET_FIELDS or any(word in lowered for word in SENSITIVE_KEYS)


def _safe_value(value: Any) -> Any:
    if isinstance(value, dict):
        return sanitize_context(value)
    if isinstance(value, str):
        return value if len(value) <= MAX_VALUE_LENGTH else value[:MAX_VALUE_LENGTH] + "..."
    if isinstance(value, list | tuple) and all(isinstance(item, str) for item in value):
        return [_safe_value(item) for item in value]
    try:
        return repr(value)[:MAX_VALUE_LENGTH]
    except Exception:
        return "[REPR_FAILED]"


def sanitize_context(context: dict[str, Any]) -> dict[str, Any]:
    """
    Make an error context safe to log.

    Password-like keys are redacted at any depth (a form snapshot nested
    under "form" included), long strings are truncated, other values are
    reduced to their repr and the number of entries is capped.

    Args:
        context: Raw context mapping

    Returns:
        A new, sanitized mapping
    """
    safe: dict[str, Any] = {}

    for index, (key, value) in enumerate(context.items()):
        if index >= MAX_CONTEXT_ITEMS:
            safe["..."] = f"({len(context) - MAX_CONTEXT_ITEMS} more items truncated)"
            break
        safe[key] = REDACTED if _is_sensitive(str(key)) else _safe_value(value)

    return safe


class ErrorHandler(QObject):
    """
    Singleton that captures, logs and broadcasts application errors.

    Widgets subscribe to errorOccurred to show a short message; the full
    technical detail and traceback only go to the log file.
    """

    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = threading.excepthook

        self._setup_logging()

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Normalize an exception without logging or signalling it.

        Args:
            exception: The exception to capture
            context: Optional diagnostic context; sanitized before use

        Returns:
            The matching BaseAppError, with a traceback in its context
        """
        app_error = from_exception(exception, sanitize_context(context or {}))

        if not app_error.technical_message:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"

        if "traceback" not in app_error.context:
            tb_str = traceback.format_exc()
            if tb_str == "NoneType: None\n":
                # Not called from an except block
                tb_str = f"{type(exception).__name__}: {exception}\n"
            app_error.context["traceback"] = tb_str

        return app_error

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture an exception, log it and emit errorOccurred.

        SystemExit and KeyboardInterrupt are re-raised untouched.

        Returns:
            The BaseAppError that was reported
        """
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        app_error = self.capture(exception, context)

        if self._logger:
            self._logger.error(
                f"[{app_error.code.value}] {app_error.user_message}",
                extra={
                    "app_code": app_error.code.value,
                    "error_type": app_error.type.value,
                    "severity": app_error.severity.value,
                    "retriable": app_error.retriable,
                },
                exc_info=exception,
            )

        self.errorOccurred.emit(app_error)
        return app_error

    def to_user_message(self, app_error: BaseAppError) -> str:
        """Return the text to show the user, with a retry hint where it helps."""
        if app_error.retriable:
            return f"{app_error.user_message} You can try again."
        return app_error.user_message

    def _setup_logging(self) -> None:
        """Attach a rotating file handler (and a console handler in debug builds)."""
        try:
            logs_dir = log_directory()
            logs_dir.mkdir(parents=True, exist_ok=True)

            logger = logging.getLogger("regform_gui.errors")
            logger.setLevel(logging.DEBUG)
            logger.propagate = False
            ErrorHandler._logger = logger

            if logger.handlers:
                return

            formatter = logging.Formatter(ERROR_LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

            file_handler = logging.handlers.RotatingFileHandler(
                logs_dir / "app.log",
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            if __debug__:
                console_handler = logging.StreamHandler()
                console_handler.setFormatter(formatter)
                console_handler.setLevel(logging.WARNING)
                logger.addHandler(console_handler)

        except Exception as e:
            logging.basicConfig(level=logging.ERROR)
            logging.error(f"Failed to setup error logging: {e}")

    def _excepthook(self, exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
        if issubclass(exc_type, KeyboardInterrupt) or not isinstance(exc_value, Exception):
            self._original_excepthook(exc_type, exc_value, exc_traceback)
            return

        try:
            self.handle(exc_value, {"source": "sys.excepthook"})
        except Exception:
            self._original_excepthook(exc_type, exc_value, exc_traceback)

    def _threading_excepthook(self, args: threading.ExceptHookArgs) -> None:
        if not isinstance(args.exc_value, Exception):
            self._original_threading_excepthook(args)
            return

        thread_name = args.thread.name if args.thread else "unknown"
        try:
            self.handle(args.exc_value, {"source": "threading.excepthook", "thread": thread_name})
        except Exception:
            self._original_threading_excepthook(args)

    def install_hooks(self) -> None:
        """Route unhandled exceptions from any thread through handle()."""
        sys.excepthook = self._excepthook
        threading.excepthook = self._threading_excepthook

    def restore_hooks(self) -> None:
        """Put back the hooks that were active when the handler was created."""
        sys.excepthook = self._original_excepthook
        threading.excepthook = self._original_threading_excepthook


def get_error_handler() -> ErrorHandler:
    """Return the process-wide ErrorHandler."""
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """Create the ErrorHandler and install its exception hooks; call once at startup."""
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: int = logging.INFO) -> None:
    """
    Configure root logging for the application.

    Module loggers go to the console at the given level; errors also go to
    the ErrorHandler's rotating file.
    """
    get_error_handler()
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
