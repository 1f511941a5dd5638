"""Tests for descriptor extraction."""

import pytest

from pyqt_formlayout.layout import FieldExtractionError, RawField, extract_descriptor
from pyqt_formlayout.layout.field_descriptor import parse_validation_max


def test_basic_attributes():
    raw = RawField("input", {
        "name": "city",
        "span": 2,
        "preset": "town",
        "group": "shipping",
        "format": "title",
    })
    descriptor = extract_descriptor(raw, 3)
    assert descriptor.name == "city"
    assert descriptor.document_order == 3
    assert descriptor.explicit_span == "2"
    assert descriptor.explicit_preset_key == "town"
    assert descriptor.explicit_group == "shipping"
    assert descriptor.explicit_format == "title"
    assert descriptor.stacked is False


def test_data_span_used_when_span_missing():
    descriptor = extract_descriptor(RawField("input", {"name": "a", "data-span": "full"}), 0)
    assert descriptor.explicit_span == "full"


def test_maxlength_wins_over_validation():
    raw = RawField("input", {"name": "code", "maxlength": "8", "validation": "required|max:40"})
    assert extract_descriptor(raw, 0).max_chars == 8


def test_max_chars_from_validation_string():
    raw = RawField("input", {"name": "code", "validate": "required | MAX:24 | max:99"})
    assert extract_descriptor(raw, 0).max_chars == 24


@pytest.mark.parametrize("rules, expected", [
    ("required|max:abc|max:12", 12),
    ("min:3", None),
    ("max:0", None),
    ("", None),
    (None, None),
])
def test_parse_validation_max(rules, expected):
    assert parse_validation_max(rules) == expected


def test_invalid_maxlength_falls_back_to_validation():
    raw = RawField("input", {"name": "x", "maxlength": "-1", "validation": "max:30"})
    assert extract_descriptor(raw, 0).max_chars == 30


@pytest.mark.parametrize("value, expected", [
    (True, True),
    ("", True),
    ("stacked", True),
    ("false", False),
    (False, False),
])
def test_stacked_flag(value, expected):
    descriptor = extract_descriptor(RawField("input", {"name": "x", "stacked": value}), 0)
    assert descriptor.stacked is expected


def test_option_group_and_action_buttons_are_full_only():
    assert extract_descriptor(RawField("option-group", {}), 0).capability.full_only
    assert extract_descriptor(RawField("button", {}, control_type="submit"), 0).capability.full_only
    assert extract_descriptor(RawField("button", {"type": "Reset"}), 0).capability.full_only
    assert not extract_descriptor(RawField("button", {}), 0).capability.full_only


def test_textarea_is_multiline():
    assert extract_descriptor(RawField("textarea", {"name": "notes"}), 0).capability.multiline


def test_unnamed_unknown_element_is_excluded():
    assert extract_descriptor(RawField("div", {}), 0) is None


def test_named_unknown_element_is_a_field():
    assert extract_descriptor(RawField("custom-picker", {"name": "colour"}), 0).name == "colour"


def test_unreadable_field_raises():
    with pytest.raises(FieldExtractionError):
        extract_descriptor(RawField("input", None), 0)
