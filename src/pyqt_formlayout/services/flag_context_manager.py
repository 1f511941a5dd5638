"""
Context manager for temporary boolean flags.

Pattern:
    Instead of:
        self._recomputing = True
        try:
            # ... logic
        finally:
            self._recomputing = False

    Use:
        with FlagContextManager.manage_flags(self, _recomputing=True):
            # ... logic

Previous values are restored even when the body raises.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Set
import logging

logger = logging.getLogger(__name__)


class ManagerFlag(Enum):
    """
    Registry of valid controller flags.

    Add new flags here as they're introduced to the codebase.
    """
    RECOMPUTING = '_recomputing'


class FlagContextManager:
    """
    Save/set/restore boolean flags on an object.

    Examples:
        with FlagContextManager.manage_flags(self, _recomputing=True):
            self._run_full_pass()

        if FlagContextManager.is_flag_set(self, ManagerFlag.RECOMPUTING):
            return  # Re-entrant notification
    """

    VALID_FLAGS: Set[str] = {flag.value for flag in ManagerFlag}

    @staticmethod
    @contextmanager
    def manage_flags(obj: Any, **flags: bool):
        """
        Set flags on entry and restore previous values on exit.

        Args:
            obj: Object to set flags on
            **flags: Flag names and values to set (e.g., _recomputing=True)

        Raises:
            ValueError: If any flag name is not in VALID_FLAGS registry
        """
        unknown = sorted(set(flags) - FlagContextManager.VALID_FLAGS)
        if unknown:
            raise ValueError(f"Invalid flags: {unknown}. Register them in ManagerFlag first.")

        owner = type(obj).__name__
        # Owners declare their flags in __init__; a missing one is a bug, not False
        saved = {name: getattr(obj, name) for name in flags}
        for name, value in flags.items():
            setattr(obj, name, value)
        logger.debug(f"{owner}: flags set {flags}")
        try:
            yield
        finally:
            for name, value in saved.items():
                setattr(obj, name, value)
            logger.debug(f"{owner}: flags restored {saved}")

    @staticmethod
    def is_flag_set(obj: Any, flag: ManagerFlag) -> bool:
        """Check if a flag is currently set to True."""
        return getattr(obj, flag.value)

    @staticmethod
    def get_flag_state(obj: Any) -> Dict[str, bool]:
        """Current value of every registered flag, for debugging."""
        return {
            flag.value: getattr(obj, flag.value)
            for flag in ManagerFlag
        }
