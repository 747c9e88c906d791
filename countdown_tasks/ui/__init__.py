"""Desktop UI modules."""

from countdown_tasks.ui.main_window import MainWindow
from countdown_tasks.ui.sort_state_store import SortState, SortStateStore
from countdown_tasks.ui.task_prompt_dialog import DialogInputSurface, TaskPromptDialog
from countdown_tasks.ui.ticker import CountdownTicker

__all__ = [
    "CountdownTicker",
    "DialogInputSurface",
    "MainWindow",
    "SortState",
    "SortStateStore",
    "TaskPromptDialog",
]
