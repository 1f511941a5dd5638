"""Layout snapshot: the engine's only output."""

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from .layout_config import Length
from .span_resolver import FULL, Span, clamp_span

# Write-back property names
ATTR_PRESET = "layoutPreset"
ATTR_GROUP = "layoutGroup"
ATTR_SPAN_BASE = "layoutSpanBase"
ATTR_SPAN = "layoutSpan"
ATTR_GROUP_START = "layoutGroupStart"
ATTR_GROUP_GAP = "layoutGroupGap"
ATTR_COLUMNS = "layoutColumns"
ATTR_GAP = "layoutGap"

FIELD_OUTPUT_ATTRS = (ATTR_PRESET, ATTR_GROUP, ATTR_SPAN_BASE, ATTR_SPAN, ATTR_GROUP_START, ATTR_GROUP_GAP)


@dataclass(frozen=True)
class FieldLayout:
    """Resolved placement metadata for one field."""
    name: str
    document_order: int
    resolved_preset_key: Optional[str] = None
    resolved_group: Optional[str] = None
    resolved_format: Optional[str] = None
    base_span: Span = 1
    live_span: Span = 1
    is_group_start: bool = False
    group_gap: Optional[Length] = None

    @property
    def is_full(self) -> bool:
        return self.live_span == FULL


@dataclass(frozen=True)
class LayoutSnapshot:
    """
    Per-field layouts plus container columns.

    Rebuilt wholesale on every full pass; a cheap pass only produces a copy
    with new columns and live spans.
    """
    columns: int = 1
    fields: Tuple[FieldLayout, ...] = field(default_factory=tuple)
    gap: Optional[Length] = None

    def by_order(self) -> Dict[int, FieldLayout]:
        return {item.document_order: item for item in self.fields}

    def get(self, name: str) -> Optional[FieldLayout]:
        """First field with this name, in document order."""
        for item in self.fields:
            if item.name == name:
                return item
        return None

    def with_columns(self, columns: int) -> 'LayoutSnapshot':
        """Re-clamp every base span against a new column count."""
        return replace(
            self,
            columns=columns,
            fields=tuple(replace(item, live_span=clamp_span(item.base_span, columns)) for item in self.fields),
        )
