"""
ABC contracts for the layout engine's collaborators.

The controller talks to the rendering surface and the geometry primitive only
through these; it holds no reference to concrete widget classes.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from pyqt_formlayout.layout.field_descriptor import RawField
    from pyqt_formlayout.layout.layout_config import Length
    from pyqt_formlayout.layout.snapshot import LayoutSnapshot


class LayoutSurface(ABC):
    """
    ABC for containers whose fields are laid out by the engine.
    """

    @abstractmethod
    def collect_fields(self) -> List['RawField']:
        """
        Read the container's elements.

        Returns:
            One RawField per child element, in document order. Non-field
            elements are included; the engine filters them.
        """
        pass

    @abstractmethod
    def apply_layout(self, snapshot: 'LayoutSnapshot') -> None:
        """
        Write resolved layout metadata back onto the elements.

        Args:
            snapshot: The snapshot just computed. Field entries refer to
                elements by document order.
        """
        pass


class GeometryProvider(ABC):
    """
    ABC for measuring the container.

    Contexts without geometry either pass no provider or return None.
    """

    @abstractmethod
    def container_width(self) -> Optional[float]:
        """Current container width in pixels, or None if unknown."""
        pass

    @abstractmethod
    def measure_length(self, value: 'Length') -> Optional[float]:
        """
        Convert a length expression (number or string with unit) to pixels.

        Returns:
            Pixels, or None if the expression cannot be measured.
        """
        pass
