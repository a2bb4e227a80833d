"""
Validation engine interface for the registration form.

An engine maps a RegistrationForm snapshot to an ErrorMap (field ->
user-facing message). An empty map means the form is valid. Engines are
pure: they never mutate the snapshot and never raise for bad input.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from .errors import FieldValidationError
from .form_model import RegistrationForm

ErrorMap = dict[str, str]

# ErrorMap key for failures that belong to no single field
FORM_ERROR_KEY = "form"


def to_error_map(errors: list[FieldValidationError]) -> ErrorMap:
    """Flatten a list of field errors, keeping the first message per field."""
    error_map: ErrorMap = {}
    for error in errors:
        error_map.setdefault(error.field, error.user_message)
    return error_map


class ValidationEngine(ABC):
    """Base class for registration form validation engines."""

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    @abstractmethod
    def collect(self, form: RegistrationForm) -> list[FieldValidationError]:
        """
        Return every field violation in the form.

        Args:
            form: Snapshot to validate

        Returns:
            At most one FieldValidationError per field
        """

    def validate(self, form: RegistrationForm) -> ErrorMap:
        """Validate the form and return its ErrorMap."""
        return to_error_map(self.collect(form))

    async def validate_async(self, form: RegistrationForm) -> ErrorMap:
        """Awaitable variant of validate(); the work itself is synchronous."""
        return self.validate(form)

    def is_valid(self, form: RegistrationForm) -> bool:
        return not self.collect(form)
