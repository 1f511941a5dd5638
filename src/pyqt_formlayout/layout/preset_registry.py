"""
Named layout presets and their resolution for a field.

A preset bundles a default span, group and format for fields whose name
matches one of its patterns. The registry is rebuilt every full pass from the
built-in table merged with configured overrides; an override with the same key
replaces the built-in entry wholesale.

Resolution order, first hit wins:
1. explicit preset key (normalized) equals a preset key
2. field name (normalized) equals a preset key
3. scan presets in registration order for the first matching pattern
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .exceptions import InvalidLayoutValueError
from .patterns import MatchPattern, coerce_pattern, normalize_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preset:
    """Named bundle of layout defaults."""
    key: str
    match_patterns: Tuple[MatchPattern, ...] = field(default_factory=tuple)
    span: Optional[Any] = None          # int, "full", or unvalidated config value
    group: Optional[str] = None
    format: Optional[str] = None

    def matches(self, field_name: str, descriptor: Any = None) -> bool:
        return any(pattern.matches(field_name, descriptor) for pattern in self.match_patterns)


DEFAULT_PRESETS: Dict[str, Dict[str, Any]] = {
    "zip": {
        "match": ["zip", "zipcode", "postal", "postalcode", "postcode"],
        "span": 1,
        "group": "address",
    },
    "state": {
        "match": ["state", "province", "region"],
        "span": 1,
        "group": "address",
    },
    "city": {
        "match": ["city", "town"],
        "span": 2,
        "group": "address",
    },
    "address_line": {
        "match": [re.compile("address", re.IGNORECASE), re.compile("street", re.IGNORECASE), "line1", "line2"],
        "span": "full",
        "group": "address",
    },
    "first_name": {
        "match": ["firstname", "first_name", "givenname"],
        "span": 1,
        "group": "person",
    },
    "middle_name": {
        "match": ["middlename", "middle_name"],
        "span": 1,
        "group": "person",
    },
    "last_name": {
        "match": ["lastname", "last_name", "surname"],
        "span": 1,
        "group": "person",
    },
    "email": {
        "match": ["email", "emailaddress"],
        "span": 2,
        "group": "contact",
    },
    "phone": {
        "match": ["phone", "mobile", "tel", "telephone"],
        "span": 2,
        "group": "contact",
    },
}


def preset_from_config(key: str, entry: Any) -> Optional[Preset]:
    """
    Build a Preset from a configured entry.

    Entries are Preset instances or mappings with optional ``match``, ``span``,
    ``group`` and ``format`` keys. A mapping without ``match`` matches on its
    own key. Unusable patterns are logged and skipped.

    Returns:
        The Preset, or None when the entry is not usable at all.
    """
    if isinstance(entry, Preset):
        return entry
    if not isinstance(entry, Mapping):
        logger.warning(f"Ignoring preset '{key}': expected a mapping, got {type(entry).__name__}")
        return None

    raw_match = entry.get("match")
    if raw_match is None:
        raw_patterns: List[Any] = [key]
    elif isinstance(raw_match, (list, tuple)):
        raw_patterns = list(raw_match)
    else:
        raw_patterns = [raw_match]

    patterns: List[MatchPattern] = []
    for raw in raw_patterns:
        try:
            patterns.append(coerce_pattern(raw))
        except InvalidLayoutValueError as e:
            logger.warning(f"Skipping pattern in preset '{key}': {e}")

    group = entry.get("group")
    fmt = entry.get("format")
    return Preset(
        key=str(key),
        match_patterns=tuple(patterns),
        span=entry.get("span"),
        group=str(group).strip() if group else None,
        format=str(fmt) if fmt else None,
    )


class PresetRegistry:
    """
    Ordered preset table with pure lookup.

    No lookup results are cached: resolve() depends only on its arguments and
    the presets given at construction.
    """

    def __init__(self, presets: Iterable[Preset] = ()):
        # normalized key -> preset, in registration order
        self._presets: Dict[str, Preset] = {}
        for preset in presets:
            normalized = normalize_name(preset.key)
            if not normalized:
                logger.warning(f"Ignoring preset with empty key: {preset!r}")
                continue
            self._presets[normalized] = preset

    @classmethod
    def from_config(cls, overrides: Optional[Mapping[str, Any]] = None,
                    defaults: Optional[Mapping[str, Any]] = None) -> 'PresetRegistry':
        """
        Merge built-in presets with overrides.

        Overrides replace built-ins with the same normalized key and keep the
        built-in position; new keys are appended in override order.
        """
        merged: Dict[str, Tuple[str, Any]] = {}
        sources = [DEFAULT_PRESETS if defaults is None else defaults]
        if isinstance(overrides, Mapping):
            sources.append(overrides)
        for source in sources:
            for key, entry in source.items():
                merged[normalize_name(key)] = (key, entry)

        presets = []
        for key, entry in merged.values():
            preset = preset_from_config(key, entry)
            if preset is not None:
                presets.append(preset)
        return cls(presets)

    @property
    def presets(self) -> List[Preset]:
        return list(self._presets.values())

    def __len__(self) -> int:
        return len(self._presets)

    def get(self, key: Any) -> Optional[Preset]:
        """Exact lookup by normalized key."""
        normalized = normalize_name(key)
        if not normalized:
            return None
        return self._presets.get(normalized)

    def resolve(self, field_name: Any, explicit_preset_key: Any = None,
                descriptor: Any = None) -> Optional[Preset]:
        """
        Resolve the preset for a field.

        Args:
            field_name: Raw field name
            explicit_preset_key: Value of the field's ``preset`` attribute, if any
            descriptor: Passed to predicate patterns

        Returns:
            The first matching Preset, or None.
        """
        by_explicit = self.get(explicit_preset_key)
        if by_explicit is not None:
            return by_explicit

        by_name = self.get(field_name)
        if by_name is not None:
            return by_name

        raw_name = "" if field_name is None else str(field_name)
        for preset in self._presets.values():
            if preset.matches(raw_name, descriptor):
                return preset
        return None
