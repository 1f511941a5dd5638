"""pytest configuration and fixtures for pyqt-formlayout tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture
def address_form_fields():
    """Fields covering presets, groups, multiline and action controls."""
    from pyqt_formlayout.layout import RawField

    return [
        RawField("input", {"name": "firstName"}),
        RawField("input", {"name": "lastName"}),
        RawField("input", {"name": "email"}),
        RawField("input", {"name": "zipCode"}),
        RawField("textarea", {"name": "notes"}),
        RawField("button", {}, control_type="submit"),
        RawField("div", {}),
    ]
