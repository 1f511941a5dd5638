"""
Service layer for layout management.

Change notification and flag management shared by surfaces and the
layout controller.
"""

from .change_notifier import ChangeNotifier, ChangeEvent, ChangeKind
from .flag_context_manager import FlagContextManager, ManagerFlag

__all__ = [
    "ChangeNotifier",
    "ChangeEvent",
    "ChangeKind",
    "FlagContextManager",
    "ManagerFlag",
]
