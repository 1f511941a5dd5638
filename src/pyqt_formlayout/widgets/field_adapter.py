"""
Read Qt widgets as RawField records.

Layout attributes live in dynamic properties (``widget.setProperty("span", 2)``).
The widget class decides the element kind, which drives full-only and
multiline capabilities.
"""

from typing import Any, Dict, List, Tuple, Type

from PyQt6.QtWidgets import (
    QAbstractSpinBox, QCheckBox, QComboBox, QGroupBox, QLineEdit,
    QPlainTextEdit, QPushButton, QRadioButton, QTextEdit, QWidget,
)

from pyqt_formlayout.layout.field_descriptor import RawField

# Properties that describe a field's layout. Changing one is a structural change.
LAYOUT_INPUT_PROPERTIES = (
    "name",
    "span",
    "data-span",
    "preset",
    "group",
    "stacked",
    "maxlength",
    "validation",
    "validate",
    "format",
    "role",
)

# QLineEdit.maxLength() when no limit was set
QT_DEFAULT_MAX_LENGTH = 32767

# First matching class wins, so subclasses go before their bases
_KIND_BY_CLASS: List[Tuple[Type[QWidget], str]] = [
    (QPlainTextEdit, "textarea"),
    (QTextEdit, "textarea"),
    (QLineEdit, "input"),
    (QComboBox, "select"),
    (QCheckBox, "input-checkbox"),
    (QRadioButton, "input-radio"),
    (QAbstractSpinBox, "input-number"),
    (QPushButton, "button"),
    (QGroupBox, "option-group"),
]


def widget_kind(widget: QWidget) -> str:
    for widget_class, kind in _KIND_BY_CLASS:
        if isinstance(widget, widget_class):
            return kind
    return "widget"


def raw_field_for(widget: QWidget) -> RawField:
    """Snapshot a widget's layout attributes."""
    attributes: Dict[str, Any] = {}
    for name in LAYOUT_INPUT_PROPERTIES:
        value = widget.property(name)
        if value is not None:
            attributes[name] = value

    if "name" not in attributes and widget.objectName():
        attributes["name"] = widget.objectName()

    if isinstance(widget, QLineEdit) and "maxlength" not in attributes:
        max_length = widget.maxLength()
        if 0 < max_length < QT_DEFAULT_MAX_LENGTH:
            attributes["maxlength"] = max_length

    role = attributes.get("role")
    return RawField(
        kind=widget_kind(widget),
        attributes=attributes,
        control_type=str(role) if role else None,
    )
