"""
Main window for the RegForm GUI application.

This module contains the MainWindow class which hosts the registration
form and wires it to the form controller.
"""

import contextlib
import logging

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QScrollArea

from core.config_manager import ConfigManager
from core.engines import get_engine
from core.error_handler import get_error_handler
from core.errors import BaseAppError
from core.form_model import RegistrationForm
from core.form_state import FormState
from gui.dialogs.confirmation import ConfirmationDialog
from gui.form_controller import FormController
from gui.widgets.registration_form import RegistrationFormWidget

FORM_TITLES = {
    "schema": "Registration Form",
    "manual": "Registration Form (manual validation)",
}

STATUS_MESSAGES = {
    FormState.EDITING: "",
    FormState.SUBMITTING: "Validating...",
    FormState.ACCEPTED: "Form submitted",
    FormState.REJECTED: "Please correct the highlighted fields",
}


class MainWindow(QMainWindow):
    """
    Main application window.

    Shows one registration form backed by the configured validation engine.
    """

    def __init__(self, engine_name: str | None = None, config_manager: ConfigManager | None = None) -> None:
        """
        Initialize the main window.

        Args:
            engine_name: Validation engine to use; defaults to the configured one
            config_manager: Optional ConfigManager instance
        """
        super().__init__()
        self._logger = logging.getLogger(__name__)

        self.config_manager = config_manager or ConfigManager()
        self.engine_name = engine_name or self.config_manager.get_engine_name()

        # Only the schema-validated form confirms and clears after success
        confirm_on_accept = self.engine_name == "schema" and bool(self.config_manager.get("confirm_on_accept"))
        self.controller = FormController(get_engine(self.engine_name), confirm_on_accept=confirm_on_accept, parent=self)

        self.form_widget = RegistrationFormWidget(FORM_TITLES.get(self.engine_name, FORM_TITLES["schema"]))
        self.confirmation_dialog: ConfirmationDialog | None = None

        self._setup_window()
        self._connect_signals()
        self._logger.info(f"Registration form ready using the '{self.engine_name}' engine")

    def _setup_window(self) -> None:
        self.setWindowTitle("RegForm GUI")
        self.resize(int(self.config_manager.get("window_width")), int(self.config_manager.get("window_height")))

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        scroll_area.setWidget(self.form_widget)
        self.setCentralWidget(scroll_area)

        self.statusBar().showMessage("")

    def _connect_signals(self) -> None:
        """Connect form widget events and controller updates."""
        self.form_widget.fieldEdited.connect(self.controller.on_field_change)
        self.form_widget.interestToggled.connect(self.controller.on_interest_toggle)
        self.form_widget.submitRequested.connect(self.controller.on_submit)

        self.controller.formChanged.connect(self._on_form_changed)
        self.controller.errorsChanged.connect(self.form_widget.set_errors)
        self.controller.stateChanged.connect(self._on_state_changed)
        self.controller.confirmationRequested.connect(self.show_confirmation)

        get_error_handler().errorOccurred.connect(self._on_error_occurred)

    def _on_form_changed(self, form: RegistrationForm) -> None:
        self.form_widget.load_form(form)

    def _on_state_changed(self, state: FormState) -> None:
        self.statusBar().showMessage(STATUS_MESSAGES.get(state, ""))

    def _on_error_occurred(self, app_error: BaseAppError) -> None:
        self.statusBar().showMessage(get_error_handler().to_user_message(app_error))

    def show_confirmation(self, message: str) -> ConfirmationDialog:
        """
        Open the success dialog; dismissing it resets the form.

        Args:
            message: Text shown in the dialog

        Returns:
            The open dialog
        """
        dialog = ConfirmationDialog(message, self)
        dialog.finished.connect(self._on_confirmation_finished)
        self.confirmation_dialog = dialog
        dialog.open()
        return dialog

    def _on_confirmation_finished(self, _result: int) -> None:
        self.confirmation_dialog = None
        self.controller.dismiss_confirmation()

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        """Remember the window size and disconnect from the shared error handler."""
        self.config_manager.set("window_width", self.width())
        self.config_manager.set("window_height", self.height())
        with contextlib.suppress(RuntimeError, TypeError):
            get_error_handler().errorOccurred.disconnect(self._on_error_occurred)
        super().closeEvent(event)
