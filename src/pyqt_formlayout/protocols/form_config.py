"""External configuration source for form layout.

Holds application overrides for the ``layout``, ``presets`` and ``groups``
sections. The layout controller reads a snapshot at the start of every full
pass and re-runs a full pass whenever the configuration changes.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

SECTIONS = ("layout", "presets", "groups")


@dataclass
class FormLayoutSettings:
    """Overrides for form layout.

    Attributes:
        layout: LayoutConfig overrides (snake_case or camelCase keys)
        presets: Preset overrides by key; same-key entries replace built-ins
        groups: Group overrides by name, e.g. {"address": {"gap_before": "1rem"}}
    """

    layout: Dict[str, Any] = field(default_factory=dict)
    presets: Dict[str, Any] = field(default_factory=dict)
    groups: Dict[str, Any] = field(default_factory=dict)


def _copy_tree(value: Any) -> Any:
    """Rebuild nested dicts and lists; leaves (predicates included) are shared."""
    if isinstance(value, dict):
        return {key: _copy_tree(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy_tree(item) for item in value]
    return value


def _deep_merge(target: Dict[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    """Mappings merge recursively; lists and scalars replace."""
    for key, value in source.items():
        if isinstance(value, Mapping):
            if not isinstance(target.get(key), dict):
                target[key] = {}
            _deep_merge(target[key], value)
        elif isinstance(value, (list, tuple)):
            target[key] = list(value)
        else:
            target[key] = value
    return target


class LayoutConfigSource:
    """
    Mutable configuration holder with change callbacks.

    Example:
        source = LayoutConfigSource()
        source.configure({"layout": {"maxColumns": 3}})
        controller = LayoutController(form, form, config_source=source)
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        self._settings = FormLayoutSettings()
        self._callbacks: List[Callable[[], Any]] = []
        if config:
            self._merge(config)

    def _merge(self, config: Mapping[str, Any]) -> None:
        for section, value in config.items():
            if section not in SECTIONS:
                logger.warning(f"Ignoring unknown layout config section '{section}'")
                continue
            if not isinstance(value, Mapping):
                logger.warning(f"Ignoring layout config section '{section}': expected a mapping, got {type(value).__name__}")
                continue
            _deep_merge(getattr(self._settings, section), value)

    def configure(self, config: Mapping[str, Any]) -> FormLayoutSettings:
        """Merge overrides and notify listeners.

        Args:
            config: Mapping with any of the sections layout/presets/groups

        Returns:
            Snapshot of the effective settings
        """
        self._merge(config)
        self._notify()
        return self.snapshot()

    def reset(self) -> FormLayoutSettings:
        """Drop all overrides and notify listeners."""
        self._settings = FormLayoutSettings()
        self._notify()
        return self.snapshot()

    def snapshot(self) -> FormLayoutSettings:
        """
        Copy of the current settings.

        Dicts and lists are new, so callers may restructure them freely. Leaf
        values are shared: a bound-method predicate keeps seeing its live owner.
        """
        return FormLayoutSettings(
            layout=_copy_tree(self._settings.layout),
            presets=_copy_tree(self._settings.presets),
            groups=_copy_tree(self._settings.groups),
        )

    def subscribe(self, callback: Callable[[], Any]) -> Callable[[], None]:
        """Call ``callback`` after every configure/reset. Returns an unsubscribe function."""
        self._callbacks.append(callback)

        def unsubscribe():
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._callbacks):
            callback()
