"""
Adaptive grid form container.

GridFormWidget hosts form fields in a QGridLayout and lets a LayoutController
decide each field's span and the column count. It is both the controller's
LayoutSurface (fields in, metadata out) and its GeometryProvider (width and
length measurement).

Notifications:
- add_field/remove_field, a field being destroyed, and changes to a field's
  layout properties publish structural events
- resizeEvent publishes geometry events, optionally debounced

Write-back sets dynamic properties on each field (layoutPreset, layoutSpan,
...) and re-places the fields in the grid.
"""

import logging
from abc import ABCMeta
from typing import List, Optional

from PyQt6.QtCore import QEvent, QObject
from PyQt6.QtGui import QFontInfo
from PyQt6.QtWidgets import QGridLayout, QWidget

from pyqt_formlayout.core.debounce_timer import DebounceTimer
from pyqt_formlayout.layout.field_descriptor import RawField
from pyqt_formlayout.layout.grid_flow import flow_cells
from pyqt_formlayout.layout.layout_config import GAP_FALLBACK_PX, Length, convert_length, length_to_px
from pyqt_formlayout.layout.layout_controller import LayoutController
from pyqt_formlayout.layout.snapshot import (
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
from pyqt_formlayout.layout.span_resolver import FULL
from pyqt_formlayout.protocols.form_config import LayoutConfigSource
from pyqt_formlayout.protocols.layout_surface import GeometryProvider, LayoutSurface
from pyqt_formlayout.services.change_notifier import ChangeNotifier

from .field_adapter import LAYOUT_INPUT_PROPERTIES, raw_field_for

logger = logging.getLogger(__name__)


class _CombinedMeta(ABCMeta, type(QWidget)):
    """Combined metaclass for ABC + PyQt6 QWidget."""
    pass


class GridFormWidget(QWidget, LayoutSurface, GeometryProvider, metaclass=_CombinedMeta):
    """
    QWidget that lays its fields out on an adaptive grid.

    Example:
        form = GridFormWidget(config_source=LayoutConfigSource({"layout": {"maxColumns": 3}}))
        form.add_field(QLineEdit(objectName="zipCode"))
        form.add_field(QTextEdit(), name="notes")
        form.add_field(QPushButton("Save"), role="submit")
    """

    def __init__(self, parent: Optional[QWidget] = None,
                 config_source: Optional[LayoutConfigSource] = None,
                 resize_debounce_ms: int = 0):
        super().__init__(parent)
        self._fields: List[QWidget] = []

        self._grid = QGridLayout(self)
        self._grid.setContentsMargins(0, 0, 0, 0)
        self._grid.setVerticalSpacing(0)   # Row gaps come from spacer rows

        self.notifier = ChangeNotifier()
        self.controller = LayoutController(self, self, config_source)
        self.controller.attach(self.notifier)

        self._resize_debounce: Optional[DebounceTimer] = None
        if resize_debounce_ms > 0:
            self._resize_debounce = DebounceTimer(resize_debounce_ms, self._publish_resize)

    # ==================== FIELDS ====================

    @property
    def fields(self) -> List[QWidget]:
        return list(self._fields)

    def add_field(self, widget: QWidget, **attributes) -> QWidget:
        """
        Append a field and run a full layout pass.

        Args:
            widget: The field widget
            **attributes: Layout properties to set first (span, preset, group,
                stacked, validation, format, name, role, ...). Use ``data_span``
                for ``data-span``.
        """
        for name, value in attributes.items():
            widget.setProperty("data-span" if name == "data_span" else name, value)

        widget.setParent(self)
        self._fields.append(widget)
        widget.installEventFilter(self)
        widget.destroyed.connect(self._on_field_destroyed)
        widget.show()
        self.notifier.structural("field-added", widget)
        return widget

    def remove_field(self, widget: QWidget) -> None:
        """Detach a field from the form without deleting it."""
        if widget not in self._fields:
            return
        self._fields.remove(widget)
        widget.removeEventFilter(self)
        widget.destroyed.disconnect(self._on_field_destroyed)
        self._grid.removeWidget(widget)
        widget.setParent(None)
        self.notifier.structural("field-removed", widget)

    def _on_field_destroyed(self, obj: QObject = None) -> None:
        before = len(self._fields)
        self._fields = [field for field in self._fields if field is not obj]
        if len(self._fields) != before:
            self.notifier.structural("field-destroyed")

    # ==================== NOTIFICATIONS ====================

    def eventFilter(self, obj, event):
        if event.type() == QEvent.Type.DynamicPropertyChange and obj in self._fields:
            name = bytes(event.propertyName()).decode("utf-8", errors="replace")
            if name in LAYOUT_INPUT_PROPERTIES:
                self.notifier.structural(f"property:{name}", obj)
        return False

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if self._resize_debounce is not None:
            self._resize_debounce.trigger()
        else:
            self._publish_resize()

    def _publish_resize(self) -> None:
        self.notifier.geometry("resize", self.width())

    def flush_pending_resize(self) -> None:
        """Deliver a debounced resize now, if one is waiting."""
        if self._resize_debounce is not None:
            self._resize_debounce.flush()

    # ==================== LayoutSurface ====================

    def collect_fields(self) -> List[RawField]:
        return [raw_field_for(widget) for widget in self._fields]

    def apply_layout(self, snapshot: LayoutSnapshot) -> None:
        self.setProperty(ATTR_COLUMNS, snapshot.columns)
        self.setProperty(ATTR_GAP, snapshot.gap)

        by_order = snapshot.by_order()
        spans = []
        row_gaps = {}
        for index, widget in enumerate(self._fields):
            item = by_order.get(index)
            for name in FIELD_OUTPUT_ATTRS:
                widget.setProperty(name, None)

            if item is None:
                # Not a field: keep it out of the way at full width
                spans.append(FULL)
                continue

            widget.setProperty(ATTR_PRESET, item.resolved_preset_key)
            widget.setProperty(ATTR_GROUP, item.resolved_group)
            widget.setProperty(ATTR_SPAN_BASE, str(item.base_span))
            widget.setProperty(ATTR_SPAN, str(item.live_span))
            if item.is_group_start:
                widget.setProperty(ATTR_GROUP_START, True)
                widget.setProperty(ATTR_GROUP_GAP, item.group_gap)
            if item.resolved_format and widget.property("format") is None:
                widget.setProperty("format", item.resolved_format)
            spans.append(item.live_span)

        gap_px = int(round(length_to_px(snapshot.gap if snapshot.gap is not None else GAP_FALLBACK_PX,
                                        GAP_FALLBACK_PX, self.measure_length)))
        cells = flow_cells(spans, snapshot.columns)

        # The group gap applies to the whole row its group-start field lands on
        for index, cell in enumerate(cells):
            item = by_order.get(index)
            if item is not None and item.is_group_start:
                extra = int(round(length_to_px(item.group_gap, 0.0, self.measure_length)))
                row_gaps[cell.row] = max(row_gaps.get(cell.row, 0), extra)

        self._place(cells, snapshot.columns, gap_px, row_gaps)

    def _place(self, cells, columns: int, gap_px: int, row_gaps) -> None:
        for widget in self._fields:
            self._grid.removeWidget(widget)
        for row in range(self._grid.rowCount()):
            self._grid.setRowMinimumHeight(row, 0)
        for column in range(self._grid.columnCount()):
            self._grid.setColumnStretch(column, 0)

        self._grid.setHorizontalSpacing(gap_px)
        for column in range(columns):
            self._grid.setColumnStretch(column, 1)

        # Logical row r sits on grid row 2r + 1; grid row 2r is its top spacer
        for widget, cell in zip(self._fields, cells):
            self._grid.addWidget(widget, 2 * cell.row + 1, cell.column, 1, cell.column_span)
        rows = (cells[-1].row + 1) if cells else 0
        for row in range(rows):
            spacer = (gap_px if row > 0 else 0) + row_gaps.get(row, 0)
            self._grid.setRowMinimumHeight(2 * row, spacer)
        logger.debug(f"Placed {len(cells)} widget(s) on {rows} row(s) x {columns} column(s)")

    # ==================== GeometryProvider ====================

    def container_width(self) -> Optional[float]:
        width = self.contentsRect().width()
        return float(width) if width > 0 else None

    def measure_length(self, value: Length) -> Optional[float]:
        font_px = QFontInfo(self.font()).pixelSize() or 16
        return convert_length(value, float(font_px))

