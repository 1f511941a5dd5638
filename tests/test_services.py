"""Tests for notification, flag and configuration services."""

import threading

import pytest

from pyqt_formlayout.protocols import FormLayoutSettings, LayoutConfigSource
from pyqt_formlayout.services import (
    ChangeEvent, ChangeKind, ChangeNotifier, FlagContextManager, ManagerFlag,
)
from pyqt_formlayout.services.change_notifier import is_structural


class _Owner:
    def __init__(self):
        self._recomputing = False


def test_notifier_delivers_batches_in_order():
    notifier = ChangeNotifier()
    received = []
    notifier.subscribe(lambda events: received.append(("a", events)))
    notifier.subscribe(lambda events: received.append(("b", events)))

    notifier.structural("added", 1)
    assert [name for name, _ in received] == ["a", "b"]
    assert received[0][1] == (ChangeEvent(ChangeKind.STRUCTURAL, "added", 1),)


def test_notifier_unsubscribe():
    notifier = ChangeNotifier()
    received = []
    unsubscribe = notifier.subscribe(received.append)
    assert notifier.subscriber_count == 1

    unsubscribe()
    unsubscribe()
    notifier.geometry("resize")
    assert received == []
    assert notifier.subscriber_count == 0


def test_notifier_ignores_empty_publish():
    notifier = ChangeNotifier()
    received = []
    notifier.subscribe(received.append)
    notifier.publish()
    assert received == []


def test_unsubscribe_during_delivery():
    notifier = ChangeNotifier()
    received = []
    unsubscribers = []

    def once(events):
        received.append("once")
        unsubscribers[0]()

    unsubscribers.append(notifier.subscribe(once))
    notifier.subscribe(lambda events: received.append("always"))

    notifier.geometry()
    notifier.geometry()
    assert received == ["once", "always", "always"]


def test_is_structural():
    geometry = ChangeEvent(ChangeKind.GEOMETRY)
    structural = ChangeEvent(ChangeKind.STRUCTURAL)
    assert not is_structural([geometry, geometry])
    assert is_structural([geometry, structural])
    assert not is_structural([])


def test_flags_restored_after_exception():
    owner = _Owner()
    with pytest.raises(RuntimeError):
        with FlagContextManager.manage_flags(owner, _recomputing=True):
            assert FlagContextManager.is_flag_set(owner, ManagerFlag.RECOMPUTING)
            raise RuntimeError("boom")
    assert owner._recomputing is False
    assert FlagContextManager.get_flag_state(owner) == {"_recomputing": False}


def test_unknown_flag_rejected():
    with pytest.raises(ValueError, match="Invalid flags"):
        with FlagContextManager.manage_flags(_Owner(), _busy=True):
            pass


def test_config_source_deep_merges():
    source = LayoutConfigSource({"layout": {"gap": 8}, "presets": {"zip": {"span": 2, "match": ["zip"]}}})
    settings = source.configure({"layout": {"maxColumns": 3}, "presets": {"zip": {"match": ["postcode"]}}})

    assert settings.layout == {"gap": 8, "maxColumns": 3}
    # Mappings merge, lists replace
    assert settings.presets["zip"] == {"span": 2, "match": ["postcode"]}


def test_config_source_ignores_bad_sections(caplog):
    source = LayoutConfigSource({"theme": {"dark": True}, "groups": "address"})
    assert source.snapshot() == FormLayoutSettings()
    assert "theme" in caplog.text


def test_config_source_snapshot_is_isolated():
    source = LayoutConfigSource({"groups": {"address": {"gap_before": "2rem"}}})
    snapshot = source.snapshot()
    snapshot.groups["address"]["gap_before"] = "9rem"
    assert source.snapshot().groups["address"]["gap_before"] == "2rem"


def test_config_source_notifies_and_resets():
    source = LayoutConfigSource()
    calls = []
    unsubscribe = source.subscribe(lambda: calls.append(source.snapshot().layout))

    source.configure({"layout": {"gap": 4}})
    source.reset()
    unsubscribe()
    source.configure({"layout": {"gap": 2}})

    assert calls == [{"gap": 4}, {}]


def test_config_source_snapshot_shares_leaf_values():
    lock = threading.Lock()
    predicate = lambda name, descriptor: lock.locked()
    source = LayoutConfigSource({"presets": {"busy": {"match": [predicate]}}})

    snapshot = source.snapshot()
    assert snapshot.presets["busy"]["match"][0] is predicate
    snapshot.presets["busy"]["match"].append("other")
    assert source.snapshot().presets["busy"]["match"] == [predicate]


def test_missing_owner_flag_is_an_error():
    with pytest.raises(AttributeError):
        with FlagContextManager.manage_flags(object(), _recomputing=True):
            pass
