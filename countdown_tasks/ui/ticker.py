from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from countdown_tasks.config import TICK_INTERVAL_MS


class CountdownTicker(QObject):
    """Repeating clock tick that invalidates countdown output.

    Listeners recompute their projection from the emitted reading; the
    ticker holds no reference to the task collection.
    """

    ticked = pyqtSignal(object)  # datetime

    def __init__(
        self,
        interval_ms: int = TICK_INTERVAL_MS,
        clock: Callable[[], datetime] = datetime.now,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._clock = clock
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    def start(self) -> None:
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_running(self) -> bool:
        return self._timer.isActive()

    def interval_ms(self) -> int:
        return self._timer.interval()

    def now(self) -> datetime:
        return self._clock()

    def _on_timeout(self) -> None:
        self.ticked.emit(self._clock())
