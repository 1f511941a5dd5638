"""
Core PyQt6 utilities.

Pure PyQt6 helpers with no layout-specific logic.
"""

from .debounce_timer import DebounceTimer

__all__ = [
    "DebounceTimer",
]
