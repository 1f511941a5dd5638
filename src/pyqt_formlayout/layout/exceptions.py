"""Layout engine exceptions.

None of these escape a recompute pass. They are raised by parsing helpers and
caught at the pass boundary, where the offending value or field falls back to
its default.
"""


class LayoutError(Exception):
    """Base class for layout engine errors."""


class InvalidLayoutValueError(LayoutError, ValueError):
    """Raised when a configuration value cannot be parsed or is out of range."""


class FieldExtractionError(LayoutError):
    """Raised when a raw field cannot be turned into a descriptor."""
