"""Tests for core utilities."""


def test_debounce_timer_trigger_and_flush(qapp):
    """flush() fires a pending trigger once."""
    from pyqt_formlayout.core import DebounceTimer

    called = []
    timer = DebounceTimer(delay_ms=5000, handler=lambda: called.append(1))
    assert timer.delay_ms == 5000
    assert not timer.pending

    timer.trigger()
    timer.trigger()
    assert timer.pending

    timer.flush()
    assert called == [1]
    assert not timer.pending

    timer.flush()
    assert called == [1]


def test_debounce_timer_cancel(qapp):
    from pyqt_formlayout.core import DebounceTimer

    called = []
    timer = DebounceTimer(delay_ms=5000, handler=lambda: called.append(1))
    timer.trigger()
    timer.cancel()
    timer.flush()
    assert called == []


def test_debounce_timer_fires_from_event_loop(qapp):
    from PyQt6.QtTest import QTest
    from pyqt_formlayout.core import DebounceTimer

    called = []
    timer = DebounceTimer(delay_ms=10, handler=lambda: called.append(1))
    timer.trigger()
    QTest.qWait(200)
    assert called == [1]
