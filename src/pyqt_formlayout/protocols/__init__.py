"""
Collaborator contracts and configuration.

ABC-based contracts for the rendering surface and geometry primitive, plus
the external configuration source the controller reads every full pass.
"""

from .layout_surface import LayoutSurface, GeometryProvider
from .form_config import FormLayoutSettings, LayoutConfigSource

__all__ = [
    "LayoutSurface",
    "GeometryProvider",
    "FormLayoutSettings",
    "LayoutConfigSource",
]
