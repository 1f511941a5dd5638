"""
Qt-free layout surface.

Keeps fields as RawField records and write-back as plain attribute dicts.
Useful for server-side rendering, headless tests, and hosts without geometry.
When bound to a ChangeNotifier, every write-back publishes a structural
notification, the way an attribute observer on a live tree would.
"""

from typing import Any, Dict, List, Optional

from pyqt_formlayout.protocols.layout_surface import GeometryProvider, LayoutSurface
from pyqt_formlayout.services.change_notifier import ChangeNotifier

from .field_descriptor import RawField
from .layout_config import Length, convert_length
from .snapshot import (
    ATTR_COLUMNS,
    ATTR_GAP,
    ATTR_GROUP,
    ATTR_GROUP_GAP,
    ATTR_GROUP_START,
    ATTR_PRESET,
    ATTR_SPAN,
    ATTR_SPAN_BASE,
    FIELD_OUTPUT_ATTRS,
    LayoutSnapshot,
)


class InMemoryFormSurface(LayoutSurface, GeometryProvider):
    """
    Surface over a list of RawFields.

    Attributes:
        fields: Elements in document order
        written: Per-element attributes written by the engine, same order
        container: Container-level attributes written by the engine
        width: Container width in pixels, None for no geometry
        font_px: Pixel size used for ``rem``/``em`` lengths
    """

    def __init__(self, fields: Optional[List[RawField]] = None, width: Optional[float] = None,
                 font_px: float = 16.0, notifier: Optional[ChangeNotifier] = None):
        self.fields: List[RawField] = list(fields or [])
        self.written: List[Dict[str, Any]] = [{} for _ in self.fields]
        self.container: Dict[str, Any] = {}
        self.width = width
        self.font_px = font_px
        self.notifier = notifier

    # ==================== MUTATION ====================

    def add_field(self, raw: RawField) -> None:
        self.fields.append(raw)
        self.written.append({})
        if self.notifier is not None:
            self.notifier.structural("field-added", raw)

    def remove_field(self, index: int) -> RawField:
        raw = self.fields.pop(index)
        self.written.pop(index)
        if self.notifier is not None:
            self.notifier.structural("field-removed", raw)
        return raw

    def resize(self, width: Optional[float]) -> None:
        self.width = width
        if self.notifier is not None:
            self.notifier.geometry("resize", width)

    def attributes_of(self, index: int) -> Dict[str, Any]:
        """Raw attributes merged with everything the engine wrote."""
        merged = dict(self.fields[index].attributes)
        merged.update(self.written[index])
        return merged

    # ==================== LayoutSurface ====================

    def collect_fields(self) -> List[RawField]:
        return list(self.fields)

    def apply_layout(self, snapshot: LayoutSnapshot) -> None:
        self.container[ATTR_COLUMNS] = snapshot.columns
        self.container[ATTR_GAP] = snapshot.gap

        by_order = snapshot.by_order()
        for index, written in enumerate(self.written):
            for name in FIELD_OUTPUT_ATTRS:
                written.pop(name, None)
            item = by_order.get(index)
            if item is None:
                continue

            if item.resolved_preset_key:
                written[ATTR_PRESET] = item.resolved_preset_key
            if item.resolved_group:
                written[ATTR_GROUP] = item.resolved_group
            if item.resolved_format and not self.fields[index].attributes.get("format"):
                written["format"] = item.resolved_format
            written[ATTR_SPAN_BASE] = str(item.base_span)
            written[ATTR_SPAN] = str(item.live_span)
            if item.is_group_start:
                written[ATTR_GROUP_START] = True
                written[ATTR_GROUP_GAP] = item.group_gap

        if self.notifier is not None:
            self.notifier.structural("write-back")

    # ==================== GeometryProvider ====================

    def container_width(self) -> Optional[float]:
        return self.width

    def measure_length(self, value: Length) -> Optional[float]:
        return convert_length(value, self.font_px)
