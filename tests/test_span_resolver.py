"""Tests for desired span precedence."""

import pytest

from pyqt_formlayout.layout import (
    FULL, FieldCapability, FieldDescriptor, LayoutConfig, Preset, clamp_span, desired_span, normalize_span,
)
from pyqt_formlayout.layout.span_resolver import span_from_chars

CONFIG = LayoutConfig(max_columns=4, column_chars=12, span_padding_chars=2)


def descriptor(**kwargs):
    kwargs.setdefault("name", "field")
    kwargs.setdefault("document_order", 0)
    return FieldDescriptor(**kwargs)


def test_stacked_is_full():
    assert desired_span(descriptor(stacked=True, explicit_span="2"), None, CONFIG) == FULL


def test_full_only_is_full():
    d = descriptor(capability=FieldCapability(full_only=True), explicit_span="1")
    assert desired_span(d, None, CONFIG) == FULL


def test_explicit_beats_preset():
    preset = Preset("zip", span=2)
    assert desired_span(descriptor(explicit_span="3"), preset, CONFIG) == 3


def test_explicit_full():
    assert desired_span(descriptor(explicit_span="FULL"), None, CONFIG) == FULL


def test_invalid_explicit_falls_through_to_preset():
    preset = Preset("city", span=2)
    assert desired_span(descriptor(explicit_span="wide"), preset, CONFIG) == 2
    assert desired_span(descriptor(explicit_span="0"), preset, CONFIG) == 2


def test_invalid_preset_span_falls_through_to_chars():
    preset = Preset("odd", span=-3)
    assert desired_span(descriptor(max_chars=30), preset, CONFIG) == 3


def test_span_from_max_chars_is_clamped():
    # ceil((60 + 2) / 12) = 6, clamped to 4
    assert desired_span(descriptor(max_chars=60), None, CONFIG) == 4


def test_max_chars_beats_multiline():
    d = descriptor(max_chars=10, capability=FieldCapability(multiline=True))
    assert desired_span(d, None, CONFIG) == 1


def test_multiline_without_hints_is_full():
    d = descriptor(capability=FieldCapability(multiline=True))
    assert desired_span(d, None, CONFIG) == FULL


def test_default_is_one():
    assert desired_span(descriptor(), None, CONFIG) == 1


@pytest.mark.parametrize("max_chars", [1, 5, 10, 22, 23, 46, 47, 1000])
def test_derived_span_within_bounds(max_chars):
    span = span_from_chars(max_chars, CONFIG)
    assert 1 <= span <= CONFIG.max_columns


@pytest.mark.parametrize("value, expected", [
    ("full", FULL), (" 2 ", 2), (3, 3), (2.9, 2), ("0", None), ("", None), (None, None), (True, None), ("x", None),
])
def test_normalize_span(value, expected):
    assert normalize_span(value) == expected


def test_clamp_span():
    assert clamp_span(4, 2) == 2
    assert clamp_span(1, 3) == 1
    assert clamp_span(FULL, 1) == FULL
