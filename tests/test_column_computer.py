"""Tests for live column computation."""

import math

import pytest

from pyqt_formlayout.layout import LayoutConfig, compute_columns

PIXELS = LayoutConfig(gap=16, min_column_width=256, collapse_at=672, max_columns=4)


def test_two_columns_at_700px():
    # floor((700 + 16) / (256 + 16)) = 2
    assert compute_columns(700, PIXELS) == 2


def test_collapse_at_or_below_breakpoint():
    assert compute_columns(672, PIXELS) == 1
    assert compute_columns(300, PIXELS) == 1


def test_clamped_to_max_columns():
    assert compute_columns(5000, PIXELS) == 4


@pytest.mark.parametrize("width", [None, 0, -10, math.nan, math.inf])
def test_unusable_width_keeps_previous(width):
    assert compute_columns(width, PIXELS, previous_columns=3) == 3


def test_unusable_width_on_first_pass_is_one():
    assert compute_columns(None, PIXELS) == 1


def test_monotonic_in_width():
    widths = range(1, 2000, 7)
    columns = [compute_columns(w, PIXELS) for w in widths]
    assert columns == sorted(columns)
    assert all(1 <= c <= PIXELS.max_columns for c in columns)


def test_rem_lengths_use_measurement():
    config = LayoutConfig(gap="1rem", min_column_width="16rem", collapse_at="42rem", max_columns=4)
    measure = lambda value: float(value.rstrip("rem")) * 16
    # 42rem = 672px breakpoint, 16rem = 256px columns
    assert compute_columns(700, config, measure=measure) == 2
    assert compute_columns(672, config, measure=measure) == 1


def test_rem_lengths_without_measurement_use_fallbacks():
    config = LayoutConfig(gap="1rem", min_column_width="16rem", collapse_at="42rem", max_columns=4)
    # Fallbacks: gap 16, column 240, collapse 672 -> floor(1016 / 256) = 3
    assert compute_columns(1000, config) == 3
