"""
Adaptive field-layout engine.

Pure Python: preset resolution, descriptor extraction, span and column
computation, group annotation and the controller that runs them.
"""

from .exceptions import LayoutError, InvalidLayoutValueError, FieldExtractionError
from .layout_config import (
    LayoutConfig,
    GroupSettings,
    DEFAULT_LAYOUT,
    DEFAULT_GROUPS,
    build_layout_config,
    build_group_config,
    convert_length,
    length_to_px,
)
from .patterns import MatchPattern, PatternKind, normalize_name, literal, regex, predicate
from .preset_registry import Preset, PresetRegistry, DEFAULT_PRESETS
from .field_descriptor import RawField, FieldCapability, FieldDescriptor, extract_descriptor
from .span_resolver import FULL, desired_span, normalize_span, clamp_span
from .column_computer import ColumnMetrics, compute_columns
from .group_gap_annotator import GroupMark, annotate_groups
from .snapshot import FieldLayout, LayoutSnapshot
from .grid_flow import GridCell, flow_cells
from .layout_controller import LayoutController, LayoutState
from .memory_surface import InMemoryFormSurface

__all__ = [
    "LayoutError",
    "InvalidLayoutValueError",
    "FieldExtractionError",
    "LayoutConfig",
    "GroupSettings",
    "DEFAULT_LAYOUT",
    "DEFAULT_GROUPS",
    "build_layout_config",
    "build_group_config",
    "convert_length",
    "length_to_px",
    "MatchPattern",
    "PatternKind",
    "normalize_name",
    "literal",
    "regex",
    "predicate",
    "Preset",
    "PresetRegistry",
    "DEFAULT_PRESETS",
    "RawField",
    "FieldCapability",
    "FieldDescriptor",
    "extract_descriptor",
    "FULL",
    "desired_span",
    "normalize_span",
    "clamp_span",
    "ColumnMetrics",
    "compute_columns",
    "GroupMark",
    "annotate_groups",
    "FieldLayout",
    "LayoutSnapshot",
    "GridCell",
    "flow_cells",
    "LayoutController",
    "LayoutState",
    "InMemoryFormSurface",
]
