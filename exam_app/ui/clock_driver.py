"""QTimer that drives the attempt countdown from the Qt event loop."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer

from exam_app.constants.exam_constants import CLOCK_POLL_INTERVAL_MS
from exam_app.core.session_controller import TestSessionController


class QtClockDriver(QObject):
    """Polls the running attempt's clock; a late timer never loses time.

    The clock derives the remaining seconds from its deadline, so a stalled
    event loop just produces one tick with a lower value.
    """

    def __init__(
        self,
        controller: TestSessionController,
        interval_ms: int = CLOCK_POLL_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._poll)

    def start(self) -> None:
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def _poll(self) -> None:
        attempt = self._controller.attempt
        if attempt is None:
            return
        clock = attempt.clock
        if clock.is_active():
            clock.poll()
