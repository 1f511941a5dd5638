"""Trailing debounce timer for coalescing bursts of notifications."""

from typing import Callable
from PyQt6.QtCore import QTimer


class DebounceTimer:
    """
    Trailing debounce timer.

    Each trigger() restarts the countdown; the handler fires once after
    delay_ms of quiet. Used to fold a drag-resize into a single geometry
    notification.

    Usage:
        self._resize_debounce = DebounceTimer(delay_ms=50, handler=self._publish_resize)

        def resizeEvent(self, event):
            self._resize_debounce.trigger()
    """

    def __init__(self, delay_ms: int, handler: Callable[[], None]):
        self._handler = handler
        self._timer = QTimer()
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, int(delay_ms)))
        self._timer.timeout.connect(self._handler)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def pending(self) -> bool:
        """True while a trigger is waiting to fire."""
        return self._timer.isActive()

    def trigger(self):
        """Restart the countdown."""
        self._timer.start()

    def cancel(self):
        """Drop a pending trigger."""
        self._timer.stop()

    def flush(self):
        """Fire now if a trigger is pending."""
        if self._timer.isActive():
            self._timer.stop()
            self._handler()
