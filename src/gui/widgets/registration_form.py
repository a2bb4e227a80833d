"""
Registration form widget.

Renders the labeled inputs, gender selector, interest checkboxes and the
per-field error messages. The widget holds no form state of its own: edits
are re-emitted as signals and the displayed values and errors are pushed
in from the form controller.
"""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.form_model import FIELD_LABELS, FIELD_NAMES, GENDER_CHOICES, INTEREST_CHOICES, RegistrationForm
from core.validation import FORM_ERROR_KEY
from gui.utils.styling import StyleSheets, apply_error_state, get_common_form_layout_config

TEXT_FIELDS: dict[str, tuple[str, QLineEdit.EchoMode]] = {
    "first_name": ("Enter Your First Name", QLineEdit.EchoMode.Normal),
    "last_name": ("Enter Your Last Name", QLineEdit.EchoMode.Normal),
    "email": ("Enter Your Email", QLineEdit.EchoMode.Normal),
    "phone_number": ("Enter Your Phone Number", QLineEdit.EchoMode.Normal),
    "password": ("Enter Your Password", QLineEdit.EchoMode.Password),
    "confirm_password": ("Confirm Your Password", QLineEdit.EchoMode.Password),
    "age": ("Enter Your Age", QLineEdit.EchoMode.Normal),
    "birth_date": ("YYYY-MM-DD", QLineEdit.EchoMode.Normal),
}

GENDER_PLACEHOLDER = "Select Gender"


class RegistrationFormWidget(QWidget):
    """Form view with one input and one error label per field."""

    fieldEdited = Signal(str, str)  # field, value
    interestToggled = Signal(str, bool)  # interest, checked
    submitRequested = Signal()

    def __init__(self, title: str = "Registration Form", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("registrationForm")

        self.inputs: dict[str, QLineEdit] = {}
        self.error_labels: dict[str, QLabel] = {}
        self.interest_boxes: dict[str, QCheckBox] = {}
        self.gender_combo: QComboBox | None = None
        self.submit_button: QPushButton | None = None

        self._setup_ui(title)

    def _setup_ui(self, title: str) -> None:
        layout_config = get_common_form_layout_config()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(*layout_config["margins"])
        layout.setSpacing(layout_config["row_spacing"])

        title_label = QLabel(title)
        title_label.setObjectName("formTitle")
        title_label.setStyleSheet("font-weight: bold; font-size: 18px;")
        layout.addWidget(title_label)

        for name in FIELD_NAMES:
            group = QVBoxLayout()
            group.setSpacing(layout_config["spacing"])
            group.addWidget(QLabel(f"{FIELD_LABELS[name]}:"))

            if name in TEXT_FIELDS:
                group.addWidget(self._create_line_edit(name))
            elif name == "gender":
                group.addWidget(self._create_gender_combo())
            elif name == "interests":
                group.addLayout(self._create_interest_boxes())

            group.addWidget(self._create_error_label(name))

            layout.addLayout(group)

        # Failures not tied to one field, shown above Submit
        layout.addWidget(self._create_error_label(FORM_ERROR_KEY))

        self.submit_button = QPushButton("Submit")
        self.submit_button.setObjectName("btnSubmit")
        self.submit_button.setStyleSheet(StyleSheets.get_button_style())
        self.submit_button.clicked.connect(self.submitRequested)
        layout.addWidget(self.submit_button)
        layout.addStretch()

        self.setStyleSheet(StyleSheets.get_form_style())

    def _create_error_label(self, name: str) -> QLabel:
        error_label = QLabel()
        error_label.setObjectName("fieldError")
        error_label.setWordWrap(True)
        error_label.setVisible(False)
        self.error_labels[name] = error_label
        return error_label

    def _create_line_edit(self, name: str) -> QLineEdit:
        placeholder, echo_mode = TEXT_FIELDS[name]
        line_edit = QLineEdit()
        line_edit.setObjectName(f"input_{name}")
        line_edit.setPlaceholderText(placeholder)
        line_edit.setEchoMode(echo_mode)
        line_edit.textEdited.connect(lambda text, field=name: self.fieldEdited.emit(field, text))
        self.inputs[name] = line_edit
        return line_edit

    def _create_gender_combo(self) -> QComboBox:
        combo = QComboBox()
        combo.setObjectName("input_gender")
        combo.addItem(GENDER_PLACEHOLDER, "")
        for choice in GENDER_CHOICES:
            combo.addItem(choice, choice)
        combo.activated.connect(lambda index: self.fieldEdited.emit("gender", combo.itemData(index)))
        self.gender_combo = combo
        return combo

    def _create_interest_boxes(self) -> QHBoxLayout:
        row = QHBoxLayout()
        for interest in INTEREST_CHOICES:
            box = QCheckBox(interest.capitalize())
            box.setObjectName(f"interest_{interest}")
            box.toggled.connect(lambda checked, value=interest: self.interestToggled.emit(value, checked))
            self.interest_boxes[interest] = box
            row.addWidget(box)
        row.addStretch()
        return row

    def load_form(self, form: RegistrationForm) -> None:
        """
        Show the values of a form snapshot without re-emitting edit signals.

        Args:
            form: Snapshot to display
        """
        for name, line_edit in self.inputs.items():
            value = getattr(form, name)
            if line_edit.text() != value:
                line_edit.setText(value)

        if self.gender_combo is not None:
            index = self.gender_combo.findData(form.gender)
            self.gender_combo.setCurrentIndex(max(index, 0))

        for interest, box in self.interest_boxes.items():
            checked = interest in form.interests
            if box.isChecked() != checked:
                box.blockSignals(True)
                box.setChecked(checked)
                box.blockSignals(False)

    def set_errors(self, errors: dict[str, str]) -> None:
        """
        Display an ErrorMap, clearing every field that has no message.

        Args:
            errors: Field -> message mapping
        """
        for name, label in self.error_labels.items():
            message = errors.get(name, "")
            label.setText(message)
            label.setVisible(bool(message))

            widget = self.input_widget(name)
            if widget is not None:
                apply_error_state(widget, bool(message))

    def input_widget(self, name: str) -> QWidget | None:
        """Return the input widget for a field (None for the checkbox group)."""
        if name in self.inputs:
            return self.inputs[name]
        if name == "gender":
            return self.gender_combo
        return None

    def error_text(self, name: str) -> str:
        """Return the error message currently shown for a field."""
        label = self.error_labels.get(name)
        return label.text() if label is not None and label.isVisibleTo(self) else ""
