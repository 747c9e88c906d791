"""Main application window for Countdown Tasks."""

from __future__ import annotations

import logging
from datetime import datetime

from PyQt6.QtCore import QTimer, Qt, pyqtSlot
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QMainWindow,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from countdown_tasks.application.controller import TaskCollectionController
from countdown_tasks.application.projection import build_rows
from countdown_tasks.application.usecases.interactive_actions import InteractiveTaskActions
from countdown_tasks.config import NOTIFICATION_TIMEOUT_MS
from countdown_tasks.domain.models import Notification, RowState, SortDirection, SortKey, TaskRow
from countdown_tasks.domain.ordering import next_sort
from countdown_tasks.ui.sort_state_store import SortState, SortStateStore
from countdown_tasks.ui.task_prompt_dialog import DialogInputSurface
from countdown_tasks.ui.ticker import CountdownTicker


logger = logging.getLogger(__name__)

COLUMN_DONE, COLUMN_TEXT, COLUMN_DEADLINE, COLUMN_REMAINING = range(4)
COLUMN_SORT_KEYS = {
    COLUMN_TEXT: SortKey.LABEL,
    COLUMN_DEADLINE: SortKey.DEADLINE,
    COLUMN_REMAINING: SortKey.REMAINING,
}
HEADER_TITLES = ["", "Task", "Deadline", "Time left"]
ROW_COLORS = {
    RowState.COMPLETED: QColor("#dcfce7"),
    RowState.EXPIRED: QColor("#fee2e2"),
    RowState.PENDING: QColor("#fef9c3"),
}


class MainWindow(QMainWindow):
    """Task table driven by the controller and a one-second countdown tick."""

    def __init__(
        self,
        controller: TaskCollectionController,
        ticker: CountdownTicker | None = None,
        sort_store: SortStateStore | None = None,
    ):
        super().__init__()
        self.setWindowTitle("Countdown Tasks")
        self.resize(720, 480)

        self.controller = controller
        self.ticker = ticker or CountdownTicker(parent=self)
        self._sort_store = sort_store or SortStateStore()
        self._sort = self._sort_store.load()
        self._row_ids: list[str] = []
        self._rendering = False
        self.task_actions = InteractiveTaskActions(controller, DialogInputSurface(self))

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        button_row = QHBoxLayout()
        self.add_button = QPushButton("Add task")
        self.add_button.clicked.connect(self._on_add)
        button_row.addWidget(self.add_button)
        self.edit_button = QPushButton("Edit")
        self.edit_button.clicked.connect(self._on_edit)
        button_row.addWidget(self.edit_button)
        self.delete_button = QPushButton("Delete")
        self.delete_button.clicked.connect(self._on_delete)
        button_row.addWidget(self.delete_button)
        button_row.addStretch()
        layout.addLayout(button_row)

        self.table = QTableWidget(0, len(HEADER_TITLES))
        self.table.setHorizontalHeaderLabels(HEADER_TITLES)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(COLUMN_TEXT, QHeaderView.ResizeMode.Stretch)
        header.setSectionsClickable(True)
        header.sectionClicked.connect(self._on_header_clicked)
        self.table.itemChanged.connect(self._on_item_changed)
        self.table.cellDoubleClicked.connect(lambda row, _column: self._on_edit())
        layout.addWidget(self.table)

        self.setCentralWidget(central)

        self.controller.tasks_changed.connect(self.render)
        self.controller.notified.connect(self._on_notified)
        self.ticker.ticked.connect(self._on_tick)

    def start(self) -> None:
        self.controller.load()
        self.render()
        self.ticker.start()

    def closeEvent(self, event):
        self.ticker.stop()
        self._sort_store.save(self._sort)
        super().closeEvent(event)

    @property
    def sort_state(self) -> SortState:
        return self._sort

    @pyqtSlot()
    def render(self, now: datetime | None = None) -> None:
        now = now or self.ticker.now()
        rows = build_rows(self.controller.tasks, self._sort.sort_key, self._sort.direction, now)
        selected = self._selected_task_id()

        self._rendering = True
        try:
            self.table.setRowCount(len(rows))
            self._row_ids = [row.id for row in rows]
            for index, row in enumerate(rows):
                self._fill_row(index, row)
        finally:
            self._rendering = False

        if selected in self._row_ids:
            self.table.selectRow(self._row_ids.index(selected))
        self._update_header_indicator()

    def _fill_row(self, index: int, row: TaskRow) -> None:
        done_item = QTableWidgetItem()
        done_item.setFlags(Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable)
        done_item.setCheckState(Qt.CheckState.Checked if row.completed else Qt.CheckState.Unchecked)

        text_item = QTableWidgetItem(row.text)
        text_item.setToolTip(row.text)
        font = text_item.font()
        font.setStrikeOut(row.completed)
        text_item.setFont(font)

        items = [done_item, text_item, QTableWidgetItem(row.deadline_label), QTableWidgetItem(row.remaining_label)]
        for column, item in enumerate(items):
            item.setBackground(ROW_COLORS[row.state])
            self.table.setItem(index, column, item)

    def _update_header_indicator(self) -> None:
        header = self.table.horizontalHeader()
        column = next(col for col, key in COLUMN_SORT_KEYS.items() if key == self._sort.sort_key)
        order = (
            Qt.SortOrder.AscendingOrder
            if self._sort.direction == SortDirection.ASCENDING
            else Qt.SortOrder.DescendingOrder
        )
        header.setSortIndicatorShown(True)
        header.setSortIndicator(column, order)

    def _selected_task_id(self) -> str | None:
        rows = self.table.selectionModel().selectedRows() if self.table.selectionModel() else []
        if not rows:
            return None
        index = rows[0].row()
        return self._row_ids[index] if 0 <= index < len(self._row_ids) else None

    @pyqtSlot(object)
    def _on_tick(self, now: datetime) -> None:
        self.render(now)

    @pyqtSlot(int)
    def _on_header_clicked(self, column: int) -> None:
        clicked = COLUMN_SORT_KEYS.get(column)
        if clicked is None:
            return
        key, direction = next_sort(self._sort.sort_key, self._sort.direction, clicked)
        self._sort = SortState(sort_key=key, direction=direction)
        self._sort_store.save(self._sort)
        self.render()

    def _on_item_changed(self, item: QTableWidgetItem) -> None:
        if self._rendering or item.column() != COLUMN_DONE:
            return
        if 0 <= item.row() < len(self._row_ids):
            task_id = self._row_ids[item.row()]
            # The table is rebuilt on toggle; leave the itemChanged handler first.
            QTimer.singleShot(0, lambda: self.task_actions.toggle_task(task_id))

    def _on_add(self) -> None:
        self.task_actions.add_task()

    def _on_edit(self) -> None:
        task_id = self._selected_task_id()
        if task_id is not None:
            self.task_actions.edit_task(task_id)

    def _on_delete(self) -> None:
        task_id = self._selected_task_id()
        if task_id is not None:
            self.task_actions.delete_task(task_id)

    @pyqtSlot(object)
    def _on_notified(self, notification: Notification) -> None:
        if notification.is_error:
            logger.warning("Showing error notification: %s", notification.message)
        self.statusBar().showMessage(notification.message, NOTIFICATION_TIMEOUT_MS)
