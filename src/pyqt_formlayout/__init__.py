"""
pyqt-formlayout: adaptive grid layout for PyQt6 forms.

Assigns each form field a grid span and the form a column count, from field
names, explicit attributes, length limits and the live container width.

Architecture:
- Tier 1 (Layout): Pure-Python engine with no Qt imports
- Tier 2 (Protocols): Surface/geometry ABCs and the configuration source
- Tier 3 (Services): Change notification hub and flag context manager
- Tier 4 (Widgets): GridFormWidget, a QGridLayout host for the engine

Key Features:
- Name-pattern presets (literal, regex, predicate) with overrides
- Span from explicit attributes, presets or expected character width
- Responsive column count with a single-column collapse breakpoint
- Group gaps between distinct named groups
- Reentrancy-guarded recompute on structural and geometry changes
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
