"""Form widget for composing a new comment."""

import logging

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QLineEdit, QTextEdit, QPushButton,
)
from PyQt6.QtCore import pyqtSignal

from commentwall.core.i18n_manager import I18nManager
from commentwall.services.comment_form import CommentForm

logger = logging.getLogger("commentwall")


class CommentFormWidget(QWidget):
    """Username + body inputs, character counter, error line and submit button.

    Field edits are written straight into the CommentForm; sync_from_form()
    pulls state back after a submission step changes it.
    """

    submit_requested = pyqtSignal()

    def __init__(self, form: CommentForm, parent=None):
        super().__init__(parent)
        self._form = form
        self._i18n = I18nManager()
        self._syncing = False
        self._init_ui()
        self.sync_from_form()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        self._heading = QLabel(self._i18n.get("form.heading"))
        self._heading.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(self._heading)

        self._username_label = QLabel(self._i18n.get("form.username"))
        layout.addWidget(self._username_label)

        self._username_input = QLineEdit()
        self._username_input.setPlaceholderText(self._i18n.get("form.username_placeholder"))
        self._username_input.textChanged.connect(self._on_username_changed)
        layout.addWidget(self._username_input)

        self._content_input = QTextEdit()
        self._content_input.setAcceptRichText(False)
        self._content_input.setPlaceholderText(self._i18n.get("form.content_placeholder"))
        self._content_input.setMaximumHeight(120)
        self._content_input.textChanged.connect(self._on_content_changed)
        layout.addWidget(self._content_input)

        self._counter_label = QLabel()
        self._counter_label.setStyleSheet("color: gray; font-size: 11px;")
        layout.addWidget(self._counter_label)

        self._error_label = QLabel()
        self._error_label.setStyleSheet("color: #e53935;")
        self._error_label.setWordWrap(True)
        self._error_label.hide()
        layout.addWidget(self._error_label)

        self._submit_btn = QPushButton()
        self._submit_btn.clicked.connect(self.submit_requested.emit)
        layout.addWidget(self._submit_btn)

    def _on_username_changed(self, text: str):
        if not self._syncing:
            self._form.set_username(text)

    def _on_content_changed(self):
        if not self._syncing:
            self._form.set_content(self._content_input.toPlainText())
        self._update_counter()

    def _update_counter(self):
        self._counter_label.setText(self._i18n.get(
            "form.counter",
            count=str(self._form.character_count),
            max=str(self._form.max_length),
        ))
        over_limit = self._form.remaining_characters < 0
        self._counter_label.setStyleSheet(
            f"color: {'#e53935' if over_limit else 'gray'}; font-size: 11px;"
        )

    def sync_from_form(self):
        """Reflect form fields, error and submitting state in the widgets."""
        self._syncing = True
        try:
            if self._username_input.text() != self._form.username:
                self._username_input.setText(self._form.username)
            if self._content_input.toPlainText() != self._form.content:
                self._content_input.setPlainText(self._form.content)
        finally:
            self._syncing = False

        error = self._form.error_message
        if error:
            self._error_label.setText(error)
            self._error_label.show()
        else:
            self._error_label.clear()
            self._error_label.hide()

        submitting = self._form.is_submitting
        self._submit_btn.setEnabled(not submitting)
        self._submit_btn.setText(
            self._i18n.get("form.submitting" if submitting else "form.submit")
        )
        self._update_counter()

