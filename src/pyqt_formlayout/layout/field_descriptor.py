"""
Field descriptor extraction.

Surfaces hand the engine RawField records (an element kind plus its raw
attributes). extract_descriptor() turns one into a read-only FieldDescriptor;
it has no side effects and never touches the surface.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .exceptions import FieldExtractionError, InvalidLayoutValueError
from .layout_config import to_positive_int

# Element kinds that count as fields even without a name
FIELD_KINDS = frozenset({
    "input-text",
    "input-textarea",
    "input-select",
    "input-checkbox",
    "input-radio",
    "input-number",
    "option-group",
    "input",
    "textarea",
    "select",
    "button",
})

MULTILINE_KINDS = frozenset({"input-textarea", "textarea"})
LAYOUT_BREAK_KINDS = frozenset({"option-group"})
ACTION_TYPES = frozenset({"submit", "reset"})

_FALSE_FLAGS = frozenset({"false", "0", "no", "off"})


@dataclass(frozen=True)
class RawField:
    """A field as the surface sees it, before any interpretation."""
    kind: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    control_type: Optional[str] = None   # e.g. "submit" for action buttons


@dataclass(frozen=True)
class FieldCapability:
    full_only: bool = False
    multiline: bool = False


@dataclass(frozen=True)
class FieldDescriptor:
    """Normalized snapshot of one field's layout-relevant attributes."""
    name: str
    document_order: int
    explicit_span: Optional[Any] = None
    explicit_preset_key: Optional[str] = None
    max_chars: Optional[int] = None
    stacked: bool = False
    capability: FieldCapability = field(default_factory=FieldCapability)
    explicit_group: Optional[str] = None
    explicit_format: Optional[str] = None


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def _flag(attributes: Mapping[str, Any], name: str) -> bool:
    """Boolean attribute: present means on unless spelled false."""
    if name not in attributes:
        return False
    value = attributes[name]
    if value is None or value is False:
        return False
    if isinstance(value, str) and value.strip().lower() in _FALSE_FLAGS:
        return False
    return True


def is_field_like(raw: RawField) -> bool:
    """True for recognized field kinds and for anything carrying a name."""
    if str(raw.kind or "").lower() in FIELD_KINDS:
        return True
    return _text(raw.attributes.get("name")) is not None


def parse_validation_max(rules: Any) -> Optional[int]:
    """
    Find the first ``max:<N>`` token in a ``|``-separated rule string.

    Matching is case-insensitive; tokens whose N is not a positive integer are
    skipped.
    """
    text = _text(rules)
    if not text:
        return None
    for token in text.split("|"):
        token = token.strip()
        if not token.lower().startswith("max:"):
            continue
        try:
            return to_positive_int(token[4:].strip())
        except InvalidLayoutValueError:
            continue
    return None


def field_max_chars(attributes: Mapping[str, Any]) -> Optional[int]:
    """Explicit length constraint first, then the validation rule string."""
    for key in ("maxlength", "max_length"):
        value = attributes.get(key)
        if value is None:
            continue
        try:
            return to_positive_int(value)
        except InvalidLayoutValueError:
            pass
    rules = attributes.get("validation")
    if _text(rules) is None:
        rules = attributes.get("validate")
    return parse_validation_max(rules)


def extract_descriptor(raw: RawField, document_order: int) -> Optional[FieldDescriptor]:
    """
    Map a RawField to a FieldDescriptor.

    Args:
        raw: The field's raw attributes
        document_order: Position of the field in the container

    Returns:
        The descriptor, or None when the element is not a field.

    Raises:
        FieldExtractionError: If the attributes cannot be read.
    """
    if not isinstance(raw, RawField) or not isinstance(raw.attributes, Mapping):
        raise FieldExtractionError(f"Unreadable field at position {document_order}: {raw!r}")
    if not is_field_like(raw):
        return None

    attributes = raw.attributes
    kind = str(raw.kind or "").lower()
    control_type = str(raw.control_type or attributes.get("type") or "").strip().lower()

    full_only = kind in LAYOUT_BREAK_KINDS or (kind == "button" and control_type in ACTION_TYPES)
    capability = FieldCapability(
        full_only=full_only,
        multiline=kind in MULTILINE_KINDS,
    )

    explicit_span = _text(attributes.get("span"))
    if explicit_span is None:
        explicit_span = _text(attributes.get("data-span"))

    return FieldDescriptor(
        name=_text(attributes.get("name")) or "",
        document_order=document_order,
        explicit_span=explicit_span,
        explicit_preset_key=_text(attributes.get("preset")),
        max_chars=field_max_chars(attributes),
        stacked=_flag(attributes, "stacked"),
        capability=capability,
        explicit_group=_text(attributes.get("group")),
        explicit_format=_text(attributes.get("format")),
    )
