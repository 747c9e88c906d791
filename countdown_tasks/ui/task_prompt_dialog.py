"""Modal task prompt with label and deadline fields."""

from __future__ import annotations

from datetime import datetime, timedelta

from PyQt6.QtWidgets import (
    QDateTimeEdit,
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from countdown_tasks.config import DEADLINE_INPUT_FORMAT
from countdown_tasks.domain.deadline_math import parse_deadline
from countdown_tasks.domain.errors import ValidationError
from countdown_tasks.domain.prompts import Cancelled, PromptResult, Submitted, validate_submission


class TaskPromptDialog(QDialog):
    def __init__(self, title: str, initial: Submitted | None = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumWidth(360)
        self._result: Submitted | None = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        layout.addWidget(QLabel("Task"))
        self.text_edit = QLineEdit(initial.text if initial else "")
        self.text_edit.setPlaceholderText("Task name")
        self.text_edit.returnPressed.connect(self._on_save)
        layout.addWidget(self.text_edit)

        layout.addWidget(QLabel("Deadline"))
        self.deadline_edit = QDateTimeEdit()
        self.deadline_edit.setCalendarPopup(True)
        self.deadline_edit.setDisplayFormat("yyyy-MM-dd HH:mm")
        self.deadline_edit.setDateTime(self._initial_deadline(initial))
        layout.addWidget(self.deadline_edit)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #ef4444;")
        self.error_label.setVisible(False)
        layout.addWidget(self.error_label)

        btn_row = QHBoxLayout()
        btn_row.addStretch()

        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(cancel_btn)

        save_btn = QPushButton("Save")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self._on_save)
        btn_row.addWidget(save_btn)
        layout.addLayout(btn_row)

    @staticmethod
    def _initial_deadline(initial: Submitted | None) -> datetime:
        if initial is not None:
            try:
                return parse_deadline(initial.deadline)
            except ValidationError:
                pass
        start = (datetime.now() + timedelta(hours=1)).replace(second=0, microsecond=0)
        return start

    def _on_save(self):
        deadline = self.deadline_edit.dateTime().toPyDateTime().strftime(DEADLINE_INPUT_FORMAT)
        try:
            self._result = validate_submission(self.text_edit.text(), deadline)
        except ValidationError as exc:
            self.error_label.setText(str(exc))
            self.error_label.setVisible(True)
            return
        self.accept()

    def result_value(self) -> PromptResult:
        return self._result if self._result is not None else Cancelled()


class DialogInputSurface:
    """``InputSurface`` backed by modal Qt dialogs."""

    def __init__(self, parent: QWidget | None = None):
        self.parent = parent

    def prompt_task(self, title: str, initial: Submitted | None = None) -> PromptResult:
        dialog = TaskPromptDialog(title, initial, self.parent)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return Cancelled()
        return dialog.result_value()

    def confirm(self, title: str, message: str) -> bool:
        answer = QMessageBox.question(
            self.parent,
            title,
            message,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return answer == QMessageBox.StandardButton.Yes
