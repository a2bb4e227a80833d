"""
Success confirmation dialog shown after an accepted submission.
"""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QDialog, QLabel, QPushButton, QVBoxLayout, QWidget

from gui.utils.styling import AccessiblePalette, StyleSheets


class ConfirmationDialog(QDialog):
    """
    Modal overlay with a static message and a single Close action.

    Closing the dialog by any means (button, Escape, window close) counts
    as dismissing it.
    """

    def __init__(self, message: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("confirmationDialog")
        self.setWindowTitle("Registration")
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        self.message_label = QLabel(message)
        self.message_label.setObjectName("confirmationMessage")
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.message_label.setStyleSheet(f"color: {AccessiblePalette.SUCCESS_TEXT}; font-size: 14px;")
        layout.addWidget(self.message_label)

        self.close_button = QPushButton("Close")
        self.close_button.setObjectName("btnClose")
        self.close_button.setStyleSheet(StyleSheets.get_button_style())
        self.close_button.setDefault(True)
        self.close_button.clicked.connect(self.accept)
        layout.addWidget(self.close_button)

    def message(self) -> str:
        return self.message_label.text()
