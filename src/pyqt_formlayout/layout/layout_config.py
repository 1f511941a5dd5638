"""
Layout configuration for adaptive form grids.

This module centralizes the grid knobs (gap, column width, collapse breakpoint,
span heuristics) and the per-group spacing table. A fresh LayoutConfig is built
from the external configuration source at the start of every full pass; nothing
here is cached between passes.

Length values are expressions: a plain number is pixels, a string may carry a
``px``, ``rem``, ``em`` or ``pt`` unit. Converting them to pixels is the job of
the geometry provider; ``length_to_px`` applies the numeric fallbacks when no
measurement is available.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .exceptions import InvalidLayoutValueError

logger = logging.getLogger(__name__)

Length = Union[int, float, str]
MeasureFn = Callable[[Length], Optional[float]]

_LENGTH_RE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*(px|rem|em|pt)?\s*$", re.IGNORECASE)
_INT_RE = re.compile(r"^\s*\+?(\d+)")

# Used when a length cannot be measured and is not a plain pixel number
GAP_FALLBACK_PX = 16.0
MIN_COLUMN_FALLBACK_PX = 240.0
COLLAPSE_AT_FALLBACK_PX = 672.0


@dataclass(frozen=True)
class LayoutConfig:
    """Grid configuration for one recompute pass."""

    # Length expressions
    gap: Length = "1rem"
    min_column_width: Length = "16rem"
    collapse_at: Length = "42rem"        # Single column at or below this width
    group_gap: Length = "0.85rem"        # Default gap before a new group

    # Integer knobs
    max_columns: int = 4
    column_chars: int = 12               # Characters that fit in one column
    span_padding_chars: int = 2          # Added to maxChars before dividing


@dataclass(frozen=True)
class GroupSettings:
    """Per-group overrides."""
    gap_before: Optional[Length] = None


GroupConfig = Dict[str, GroupSettings]

DEFAULT_LAYOUT = LayoutConfig()

DEFAULT_GROUPS: Dict[str, Dict[str, Any]] = {
    "address": {"gap_before": "1rem"},
    "person": {"gap_before": "0.75rem"},
    "contact": {"gap_before": "0.75rem"},
}

# Accepted spellings for each LayoutConfig field
_KEY_ALIASES = {
    "gap": ("gap",),
    "min_column_width": ("min_column_width", "minColumnWidth", "min_width", "minWidth"),
    "collapse_at": ("collapse_at", "collapseAt"),
    "group_gap": ("group_gap", "groupGap"),
    "max_columns": ("max_columns", "maxColumns"),
    "column_chars": ("column_chars", "columnChars"),
    "span_padding_chars": ("span_padding_chars", "spanPaddingChars"),
}


def parse_length(value: Length) -> tuple:
    """
    Split a length expression into ``(number, unit)``.

    A bare number (or numeric string) has unit ``"px"``.

    Raises:
        InvalidLayoutValueError: If the value is not a non-negative length.
    """
    if isinstance(value, bool):
        raise InvalidLayoutValueError(f"Not a length: {value!r}")
    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            raise InvalidLayoutValueError(f"Length must be finite and >= 0: {value!r}")
        return float(value), "px"
    if isinstance(value, str):
        match = _LENGTH_RE.match(value)
        if match:
            return float(match.group(1)), (match.group(2) or "px").lower()
    raise InvalidLayoutValueError(f"Unparseable length: {value!r}")


def convert_length(value: Length, font_px: float = 16.0) -> Optional[float]:
    """
    Unit conversion for hosts that know their font size.

    ``rem`` and ``em`` scale by ``font_px``, ``pt`` by 4/3. Returns None for
    unparseable values.
    """
    try:
        number, unit = parse_length(value)
    except InvalidLayoutValueError:
        return None
    if unit in ("rem", "em"):
        return number * font_px
    if unit == "pt":
        return number * 4.0 / 3.0
    return number


def length_to_px(value: Length, fallback_px: float, measure: Optional[MeasureFn] = None) -> float:
    """
    Resolve a length expression to pixels.

    Tries ``measure`` first. When measurement is unavailable or fails, plain
    pixel values are used as is and anything else resolves to ``fallback_px``.
    """
    if measure is not None:
        try:
            measured = measure(value)
        except Exception as e:
            logger.debug(f"Length measurement failed for {value!r}: {e}")
            measured = None
        if measured is not None and math.isfinite(measured) and measured > 0:
            return float(measured)

    try:
        number, unit = parse_length(value)
    except InvalidLayoutValueError:
        return fallback_px
    if unit == "px":
        return number
    return fallback_px


def to_positive_int(value: Any, allow_zero: bool = False) -> int:
    """
    Parse a positive integer the lenient way form attributes are written.

    ``"4"``, ``4``, ``4.7`` and ``"4 cols"`` all give 4.

    Raises:
        InvalidLayoutValueError: If no integer can be read or it is out of range.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidLayoutValueError(f"Not an integer: {value!r}")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidLayoutValueError(f"Not an integer: {value!r}")
        number = int(value)
    elif isinstance(value, int):
        number = value
    else:
        match = _INT_RE.match(str(value))
        if not match:
            raise InvalidLayoutValueError(f"Not an integer: {value!r}")
        number = int(match.group(1))

    minimum = 0 if allow_zero else 1
    if number < minimum:
        raise InvalidLayoutValueError(f"Expected integer >= {minimum}, got {value!r}")
    return number


def _lookup(raw: Mapping[str, Any], field_name: str) -> Any:
    for key in _KEY_ALIASES[field_name]:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def build_layout_config(raw: Optional[Mapping[str, Any]] = None) -> LayoutConfig:
    """
    Build a LayoutConfig from raw overrides, replacing invalid values with defaults.

    Args:
        raw: Mapping of overrides using snake_case or camelCase keys

    Returns:
        A new LayoutConfig. Invalid values are logged and never raised.
    """
    raw = raw if isinstance(raw, Mapping) else {}
    values: Dict[str, Any] = {}

    for name in ("gap", "min_column_width", "collapse_at", "group_gap"):
        value = _lookup(raw, name)
        if value is None:
            continue
        try:
            parse_length(value)
        except InvalidLayoutValueError as e:
            logger.warning(f"Invalid layout value for '{name}': {e}. Using default {getattr(DEFAULT_LAYOUT, name)!r}")
            continue
        values[name] = value

    for name in ("max_columns", "column_chars", "span_padding_chars"):
        value = _lookup(raw, name)
        if value is None:
            continue
        try:
            values[name] = to_positive_int(value, allow_zero=(name == "span_padding_chars"))
        except InvalidLayoutValueError as e:
            logger.warning(f"Invalid layout value for '{name}': {e}. Using default {getattr(DEFAULT_LAYOUT, name)!r}")

    return LayoutConfig(**values)


def build_group_config(overrides: Optional[Mapping[str, Any]] = None) -> GroupConfig:
    """
    Merge group overrides over the built-in group table.

    An override entry replaces the built-in entry of the same name. Entries may
    use ``gap_before`` or ``gapBefore``.
    """
    merged: Dict[str, Any] = dict(DEFAULT_GROUPS)
    if isinstance(overrides, Mapping):
        merged.update(overrides)

    groups: GroupConfig = {}
    for name, entry in merged.items():
        if isinstance(entry, GroupSettings):
            groups[str(name)] = entry
            continue
        if not isinstance(entry, Mapping):
            logger.warning(f"Ignoring group '{name}': expected a mapping, got {type(entry).__name__}")
            continue
        gap = entry.get("gap_before", entry.get("gapBefore"))
        if gap is not None:
            try:
                parse_length(gap)
            except InvalidLayoutValueError as e:
                logger.warning(f"Invalid gap for group '{name}': {e}. Using layout group gap")
                gap = None
        groups[str(name)] = GroupSettings(gap_before=gap)
    return groups
