"""
Desired column span for a field.

Precedence, first applicable rule wins:
1. stacked or full-only capability -> "full"
2. valid explicit span
3. valid preset span
4. span derived from maxChars
5. multiline capability -> "full"
6. 1

Invalid explicit and preset spans count as absent.
"""

import math
from typing import Any, Optional, Union

from .exceptions import InvalidLayoutValueError
from .field_descriptor import FieldDescriptor
from .layout_config import LayoutConfig, to_positive_int
from .preset_registry import Preset

FULL = "full"

Span = Union[int, str]


def normalize_span(value: Any) -> Optional[Span]:
    """Return ``"full"``, a positive int, or None when the value is not a valid span."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip().lower()
        if not text:
            return None
        if text == FULL:
            return FULL
        value = text
    try:
        return to_positive_int(value)
    except InvalidLayoutValueError:
        return None


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


def span_from_chars(max_chars: Optional[int], config: LayoutConfig) -> Optional[int]:
    """Size a field to roughly fit its expected character width in columns."""
    if max_chars is None or max_chars <= 0:
        return None
    padded = max_chars + config.span_padding_chars
    return clamp(math.ceil(padded / config.column_chars), 1, config.max_columns)


def desired_span(descriptor: FieldDescriptor, preset: Optional[Preset], config: LayoutConfig) -> Span:
    """Compute the base span for a field."""
    if descriptor.stacked or descriptor.capability.full_only:
        return FULL

    explicit = normalize_span(descriptor.explicit_span)
    if explicit is not None:
        return explicit

    if preset is not None:
        from_preset = normalize_span(preset.span)
        if from_preset is not None:
            return from_preset

    from_chars = span_from_chars(descriptor.max_chars, config)
    if from_chars is not None:
        return from_chars

    if descriptor.capability.multiline:
        return FULL
    return 1


def clamp_span(base_span: Span, columns: int) -> Span:
    """Live span: base span limited to the current column count."""
    if base_span == FULL:
        return FULL
    return clamp(normalize_span(base_span) or 1, 1, max(1, columns))
