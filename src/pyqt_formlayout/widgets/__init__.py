"""
PyQt6 hosts for the layout engine.

GridFormWidget lays fields out on the adaptive grid; field_adapter reads
Qt widgets as engine input.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .grid_form_widget import GridFormWidget
    from .field_adapter import raw_field_for, widget_kind

_EXPORTS = {
    "GridFormWidget": ("pyqt_formlayout.widgets.grid_form_widget", "GridFormWidget"),
    "raw_field_for": ("pyqt_formlayout.widgets.field_adapter", "raw_field_for"),
    "widget_kind": ("pyqt_formlayout.widgets.field_adapter", "widget_kind"),
    "LAYOUT_INPUT_PROPERTIES": ("pyqt_formlayout.widgets.field_adapter", "LAYOUT_INPUT_PROPERTIES"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
