"""
Layout controller: runs recompute passes on change notifications.

States are IDLE and RECOMPUTING. A batch received while RECOMPUTING (typically
caused by the controller's own write-back) is dropped, not queued. Batches
containing any structural event run a full pass; geometry-only batches run a
cheap pass that reuses the last full pass's base spans.

Nothing raised by the surface, configuration or preset predicates escapes a
pass. Per-field failures fall back to span 1 with no preset and no group.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from pyqt_formlayout.protocols.form_config import FormLayoutSettings, LayoutConfigSource
from pyqt_formlayout.protocols.layout_surface import GeometryProvider, LayoutSurface
from pyqt_formlayout.services.change_notifier import ChangeEvent, ChangeKind, ChangeNotifier, is_structural
from pyqt_formlayout.services.flag_context_manager import FlagContextManager, ManagerFlag

from .column_computer import compute_columns
from .field_descriptor import FieldDescriptor, RawField, extract_descriptor
from .group_gap_annotator import annotate_groups
from .layout_config import DEFAULT_LAYOUT, LayoutConfig, build_group_config, build_layout_config
from .preset_registry import PresetRegistry
from .snapshot import FieldLayout, LayoutSnapshot
from .span_resolver import Span, clamp_span, desired_span

logger = logging.getLogger(__name__)


class LayoutState(Enum):
    IDLE = "idle"
    RECOMPUTING = "recomputing"


@dataclass(frozen=True)
class _ResolvedField:
    name: str
    document_order: int
    preset_key: Optional[str]
    group: Optional[str]
    format: Optional[str]
    base_span: Span


def _fallback_name(raw: RawField) -> str:
    try:
        return str(raw.attributes.get("name") or "")
    except Exception:
        return ""


class LayoutController:
    """
    Orchestrates extraction, preset resolution, span and column computation,
    group annotation and write-back.

    Example:
        notifier = ChangeNotifier()
        controller = LayoutController(surface, geometry, config_source)
        controller.attach(notifier)
        notifier.structural("fields-added")   # full pass
        notifier.geometry("resize")           # cheap pass
    """

    def __init__(self, surface: LayoutSurface, geometry: Optional[GeometryProvider] = None,
                 config_source: Optional[LayoutConfigSource] = None):
        self.surface = surface
        self.geometry = geometry
        self.config_source = config_source

        self._recomputing = False
        self._snapshot = LayoutSnapshot()
        self._layout_config: LayoutConfig = DEFAULT_LAYOUT
        self._has_full_pass = False
        self._dropped_notifications = 0
        self._unsubscribers: List[Callable[[], None]] = []

    # ==================== SUBSCRIPTION ====================

    def attach(self, notifier: Optional[ChangeNotifier] = None) -> None:
        """Subscribe to a notifier and, if present, to configuration changes."""
        if notifier is not None:
            self._unsubscribers.append(notifier.subscribe(self.handle))
        if self.config_source is not None:
            self._unsubscribers.append(self.config_source.subscribe(self._on_config_changed))

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _on_config_changed(self) -> None:
        self.handle([ChangeEvent(ChangeKind.STRUCTURAL, "config")])

    # ==================== STATE ====================

    @property
    def state(self) -> LayoutState:
        if FlagContextManager.is_flag_set(self, ManagerFlag.RECOMPUTING):
            return LayoutState.RECOMPUTING
        return LayoutState.IDLE

    @property
    def snapshot(self) -> LayoutSnapshot:
        """Last computed snapshot."""
        return self._snapshot

    @property
    def dropped_notifications(self) -> int:
        """Batches discarded because a pass was running."""
        return self._dropped_notifications

    # ==================== ENTRY POINTS ====================

    def handle(self, events: Sequence[ChangeEvent]) -> bool:
        """
        Process one notification batch.

        Returns:
            True if a pass ran, False if the batch was empty or dropped.
        """
        if not events:
            return False
        if self.state is LayoutState.RECOMPUTING:
            self._dropped_notifications += 1
            logger.debug(f"🚫 Dropped re-entrant batch ({len(events)} event(s)) while recomputing")
            return False

        with FlagContextManager.manage_flags(self, _recomputing=True):
            if is_structural(events) or not self._has_full_pass:
                self._full_pass()
            else:
                self._cheap_pass()
        return True

    def recompute(self) -> LayoutSnapshot:
        """Run a full pass now."""
        self.handle([ChangeEvent(ChangeKind.STRUCTURAL, "manual")])
        return self._snapshot

    def refresh_columns(self) -> LayoutSnapshot:
        """Run a cheap pass now (a full pass if none ran yet)."""
        self.handle([ChangeEvent(ChangeKind.GEOMETRY, "manual")])
        return self._snapshot

    # ==================== PASSES ====================

    def _read_settings(self) -> FormLayoutSettings:
        if self.config_source is None:
            return FormLayoutSettings()
        try:
            return self.config_source.snapshot()
        except Exception as e:
            logger.warning(f"Could not read layout configuration, using defaults: {e}")
            return FormLayoutSettings()

    def _full_pass(self) -> None:
        settings = self._read_settings()
        layout_config = build_layout_config(settings.layout)
        registry = PresetRegistry.from_config(settings.presets)
        group_config = build_group_config(settings.groups)

        try:
            raw_fields = list(self.surface.collect_fields())
        except Exception as e:
            logger.error(f"Could not collect fields, keeping previous layout: {e}")
            return

        resolved: List[_ResolvedField] = []
        for order, raw in enumerate(raw_fields):
            item = self._resolve_field(raw, order, registry, layout_config)
            if item is not None:
                resolved.append(item)

        columns = self._compute_columns(layout_config)
        marks = annotate_groups([item.group for item in resolved], group_config, layout_config)

        fields = tuple(
            FieldLayout(
                name=item.name,
                document_order=item.document_order,
                resolved_preset_key=item.preset_key,
                resolved_group=item.group,
                resolved_format=item.format,
                base_span=item.base_span,
                live_span=clamp_span(item.base_span, columns),
                is_group_start=mark.is_group_start,
                group_gap=mark.gap,
            )
            for item, mark in zip(resolved, marks)
        )

        self._layout_config = layout_config
        self._has_full_pass = True
        self._snapshot = LayoutSnapshot(columns=columns, fields=fields, gap=layout_config.gap)
        logger.debug(f"Full layout pass: {len(fields)} field(s), {columns} column(s)")
        self._write_back()

    def _cheap_pass(self) -> None:
        columns = self._compute_columns(self._layout_config)
        if columns == self._snapshot.columns:
            logger.debug(f"Cheap layout pass: columns unchanged ({columns})")
            return
        self._snapshot = self._snapshot.with_columns(columns)
        logger.debug(f"Cheap layout pass: {columns} column(s)")
        self._write_back()

    def _resolve_field(self, raw: RawField, order: int, registry: PresetRegistry,
                       layout_config: LayoutConfig) -> Optional[_ResolvedField]:
        try:
            descriptor = extract_descriptor(raw, order)
            if descriptor is None:
                return None
            return self._resolve_descriptor(descriptor, registry, layout_config)
        except Exception as e:
            logger.warning(f"Field at position {order} fell back to defaults: {e}")
            return _ResolvedField(
                name=_fallback_name(raw),
                document_order=order,
                preset_key=None,
                group=None,
                format=None,
                base_span=1,
            )

    @staticmethod
    def _resolve_descriptor(descriptor: FieldDescriptor, registry: PresetRegistry,
                            layout_config: LayoutConfig) -> _ResolvedField:
        preset = registry.resolve(descriptor.name, descriptor.explicit_preset_key, descriptor)
        group = descriptor.explicit_group or (preset.group if preset is not None else None)
        fmt = descriptor.explicit_format or (preset.format if preset is not None else None)
        return _ResolvedField(
            name=descriptor.name,
            document_order=descriptor.document_order,
            preset_key=preset.key if preset is not None else None,
            group=group or None,
            format=fmt,
            base_span=desired_span(descriptor, preset, layout_config),
        )

    def _compute_columns(self, layout_config: LayoutConfig) -> int:
        width = None
        measure = None
        if self.geometry is not None:
            measure = self.geometry.measure_length
            try:
                width = self.geometry.container_width()
            except Exception as e:
                logger.debug(f"Container width unavailable: {e}")
        return compute_columns(width, layout_config, self._snapshot.columns, measure)

    def _write_back(self) -> None:
        try:
            self.surface.apply_layout(self._snapshot)
        except Exception as e:
            logger.error(f"Layout write-back failed: {e}")
