"""
Form controller for the registration form.

The controller owns the current form snapshot and the ErrorMap, applies
input events to the snapshot, and runs the validation engine when the
form is submitted. Widgets never touch the form state directly; they
send events in and listen to the controller's signals.
"""

from __future__ import annotations

import logging
from typing import Any

from PySide6.QtCore import QObject, Signal

from core.error_handler import get_error_handler
from core.form_model import RegistrationForm
from core.form_state import FormState
from core.validation import FORM_ERROR_KEY, ErrorMap, ValidationEngine

SUCCESS_MESSAGE = "Data successfully saved!"


class FormController(QObject):
    """
    Stateful mediator between input events and a validation engine.

    Validation only happens on submit; edits never re-validate eagerly.
    """

    formChanged = Signal(object)  # RegistrationForm
    errorsChanged = Signal(dict)  # field -> message
    stateChanged = Signal(object)  # FormState
    submissionAccepted = Signal(object)  # RegistrationForm
    confirmationRequested = Signal(str)  # message

    def __init__(
        self,
        engine: ValidationEngine,
        confirm_on_accept: bool = False,
        parent: QObject | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            engine: Validation engine run on submit
            confirm_on_accept: Show a confirmation and reset the form after a
                successful submission instead of keeping the entered data
            parent: Optional parent object
        """
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._engine = engine
        self._confirm_on_accept = confirm_on_accept
        self._form = RegistrationForm.empty()
        self._errors: ErrorMap = {}
        self._state = FormState.EDITING
        self._awaiting_confirmation = False

    @property
    def engine(self) -> ValidationEngine:
        return self._engine

    @property
    def form(self) -> RegistrationForm:
        return self._form

    @property
    def errors(self) -> ErrorMap:
        return dict(self._errors)

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def confirm_on_accept(self) -> bool:
        return self._confirm_on_accept

    @property
    def awaiting_confirmation(self) -> bool:
        return self._awaiting_confirmation

    def error_for(self, field_name: str) -> str:
        """Return the current error message for a field, or an empty string."""
        return self._errors.get(field_name, "")

    def on_field_change(self, field_name: str, new_value: Any) -> None:
        """
        Replace the value of a scalar field.

        Args:
            field_name: Field identifier
            new_value: New raw value

        Raises:
            KeyError: If the field does not exist
            ValueError: If the field is not a scalar field
        """
        self._set_form(self._form.with_field(field_name, new_value))

    def on_interest_toggle(self, name: str, checked: bool) -> None:
        """
        Add or remove an interest from the selection.

        Raises:
            ValueError: If the interest is not one of the offered choices
        """
        self._set_form(self._form.with_interest(name, checked))

    def on_submit(self) -> bool:
        """
        Validate the current snapshot and accept or reject the submission.

        Returns:
            True if the submission was accepted
        """
        if self._awaiting_confirmation:
            self._logger.debug("Submit ignored while the confirmation is open")
            return False

        self._set_state(FormState.SUBMITTING)
        snapshot = self._form

        try:
            errors = self._engine.validate(snapshot)
        except Exception as e:
            # Malformed input never raises; anything here is a defect in an engine
            app_error = get_error_handler().handle(e, {"engine": self._engine.name, "form": snapshot.to_log_dict()})
            errors = {FORM_ERROR_KEY: app_error.user_message}

        self._set_errors(errors)

        if errors:
            self._logger.info(f"Form validation failed for: {', '.join(errors)}")
            for field_name, message in errors.items():
                self._logger.debug(f"  {field_name}: {message}")
            self._set_state(FormState.REJECTED)
            return False

        self._logger.info(f"Form submitted: {snapshot.to_log_dict()}")
        self._set_state(FormState.ACCEPTED)
        self.submissionAccepted.emit(snapshot)

        if self._confirm_on_accept:
            self._awaiting_confirmation = True
            self.confirmationRequested.emit(SUCCESS_MESSAGE)

        return True

    def dismiss_confirmation(self) -> None:
        """Close the success confirmation and start over with an empty form."""
        if not self._awaiting_confirmation:
            return

        self._awaiting_confirmation = False
        self.reset()

    def reset(self) -> None:
        """Return to an empty form with no errors."""
        self._awaiting_confirmation = False
        self._form = RegistrationForm.empty()
        self.formChanged.emit(self._form)
        self._set_errors({})
        self._set_state(FormState.EDITING)

    def _set_form(self, form: RegistrationForm) -> None:
        if form == self._form:
            return

        self._form = form
        self.formChanged.emit(form)

        if self._state in (FormState.ACCEPTED, FormState.REJECTED) and not self._awaiting_confirmation:
            self._set_state(FormState.EDITING)

    def _set_errors(self, errors: ErrorMap) -> None:
        if errors == self._errors:
            return

        self._errors = dict(errors)
        self.errorsChanged.emit(dict(errors))

    def _set_state(self, state: FormState) -> None:
        if state == self._state:
            return

        self._state = state
        self.stateChanged.emit(state)
