"""
Tests for the RegistrationFormWidget.
"""

from PySide6.QtWidgets import QLineEdit

from core.form_model import FIELD_NAMES
from core.validation import FORM_ERROR_KEY
from gui.widgets.registration_form import GENDER_PLACEHOLDER, RegistrationFormWidget


class TestRegistrationFormLayout:
    """Test widget construction."""

    def test_inputs_created(self, qtbot):
        """Test that every field has an input and a hidden error label."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        assert set(widget.error_labels) == {*FIELD_NAMES, FORM_ERROR_KEY}
        assert set(widget.inputs) == set(FIELD_NAMES) - {"gender", "interests"}
        assert set(widget.interest_boxes) == {"coding", "sports", "reading"}
        assert all(widget.error_text(name) == "" for name in FIELD_NAMES)

    def test_password_inputs_are_masked(self, qtbot):
        """Test that both password inputs hide their text."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        assert widget.inputs["password"].echoMode() == QLineEdit.EchoMode.Password
        assert widget.inputs["confirm_password"].echoMode() == QLineEdit.EchoMode.Password
        assert widget.inputs["email"].echoMode() == QLineEdit.EchoMode.Normal

    def test_gender_placeholder(self, qtbot):
        """Test the gender selector starts on its placeholder."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        assert widget.gender_combo.currentText() == GENDER_PLACEHOLDER
        assert widget.gender_combo.currentData() == ""
        assert widget.gender_combo.count() == 4


class TestRegistrationFormSignals:
    """Test that user input is re-emitted as signals."""

    def test_typing_emits_field_edited(self, qtbot):
        """Test that typing into an input emits fieldEdited."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        with qtbot.waitSignal(widget.fieldEdited, timeout=1000) as blocker:
            qtbot.keyClicks(widget.inputs["first_name"], "A")

        assert blocker.args == ["first_name", "A"]

    def test_programmatic_text_does_not_emit(self, qtbot):
        """Test that loading values does not echo edits back."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        with qtbot.assertNotEmitted(widget.fieldEdited):
            widget.inputs["email"].setText("a@b.co")

    def test_gender_activation_emits_value(self, qtbot):
        """Test that picking a gender emits its value, not its label."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        with qtbot.waitSignal(widget.fieldEdited, timeout=1000) as blocker:
            widget.gender_combo.activated.emit(2)

        assert blocker.args == ["gender", "Female"]

    def test_interest_toggle_emits(self, qtbot):
        """Test that checking a box emits interestToggled."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        with qtbot.waitSignal(widget.interestToggled, timeout=1000) as blocker:
            widget.interest_boxes["sports"].setChecked(True)

        assert blocker.args == ["sports", True]

    def test_submit_button_emits(self, qtbot):
        """Test that clicking Submit emits submitRequested."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        with qtbot.waitSignal(widget.submitRequested, timeout=1000):
            widget.submit_button.click()


class TestRegistrationFormDisplay:
    """Test pushing state into the widget."""

    def test_load_form(self, qtbot, valid_form):
        """Test that a snapshot is shown without emitting signals."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        with qtbot.assertNotEmitted(widget.interestToggled):
            widget.load_form(valid_form)

        assert widget.inputs["first_name"].text() == "Ada"
        assert widget.inputs["birth_date"].text() == "1815-12-10"
        assert widget.gender_combo.currentData() == "Female"
        assert widget.interest_boxes["coding"].isChecked()
        assert not widget.interest_boxes["sports"].isChecked()

    def test_load_empty_form_clears_inputs(self, qtbot, valid_form, empty_form):
        """Test that loading an empty snapshot resets every input."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)
        widget.load_form(valid_form)

        widget.load_form(empty_form)

        assert widget.inputs["first_name"].text() == ""
        assert widget.gender_combo.currentText() == GENDER_PLACEHOLDER
        assert not any(box.isChecked() for box in widget.interest_boxes.values())

    def test_set_errors(self, qtbot):
        """Test that errors are shown per field and cleared when absent."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        widget.set_errors({"email": "Invalid email format", "interests": "Select at least one interest"})

        assert widget.error_text("email") == "Invalid email format"
        assert widget.error_text("interests") == "Select at least one interest"
        assert widget.error_text("age") == ""
        assert widget.inputs["email"].property("hasError") is True
        assert widget.inputs["age"].property("hasError") is False

        widget.set_errors({})

        assert widget.error_text("email") == ""
        assert widget.inputs["email"].property("hasError") is False

    def test_form_level_error(self, qtbot):
        """Test that an error not tied to a field is shown above Submit."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        widget.set_errors({FORM_ERROR_KEY: "An unexpected error occurred"})

        assert widget.error_text(FORM_ERROR_KEY) == "An unexpected error occurred"
        assert all(widget.error_text(name) == "" for name in FIELD_NAMES)

        widget.set_errors({})

        assert widget.error_text(FORM_ERROR_KEY) == ""

    def test_input_widget_lookup(self, qtbot):
        """Test resolving the input widget for each kind of field."""
        widget = RegistrationFormWidget()
        qtbot.addWidget(widget)

        assert widget.input_widget("email") is widget.inputs["email"]
        assert widget.input_widget("gender") is widget.gender_combo
        assert widget.input_widget("interests") is None
