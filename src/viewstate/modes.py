"""Display and view modes, and the per-view-mode scaling table."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

logger = logging.getLogger("starscale.modes")


class DisplayMode(str, enum.Enum):
    """Spatial semantics of the layout (which transform branch runs)."""

    REALISTIC = "realistic"
    NAVIGATIONAL = "navigational"
    PROFILE = "profile"

    @classmethod
    def coerce(cls, value: DisplayMode | str) -> DisplayMode:
        """Parse a display mode, falling back to realistic for unknown input."""
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unknown display mode %r, using realistic", value)
            return cls.REALISTIC


class ViewMode(str, enum.Enum):
    """Presentation preset (which scaling constants apply)."""

    EXPLORATIONAL = "explorational"
    NAVIGATIONAL = "navigational"
    PROFILE = "profile"

    @classmethod
    def coerce(cls, value: ViewMode | str) -> ViewMode:
        """Parse a view mode, falling back to explorational for unknown input."""
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unknown view mode %r, using explorational", value)
            return cls.EXPLORATIONAL


@dataclass(frozen=True, slots=True)
class ViewModeScaling:
    star_scale: float
    planet_scale: float
    moon_scale: float
    orbital_scale: float
    star_shader_scale: float


VIEW_MODE_SCALING: dict[ViewMode, ViewModeScaling] = {
    ViewMode.EXPLORATIONAL: ViewModeScaling(
        star_scale=1.0, planet_scale=1.0, moon_scale=1.0,
        orbital_scale=200.0, star_shader_scale=1.0,
    ),
    ViewMode.NAVIGATIONAL: ViewModeScaling(
        star_scale=4.0, planet_scale=3.0, moon_scale=2.0,
        orbital_scale=300.0, star_shader_scale=0.5,
    ),
    ViewMode.PROFILE: ViewModeScaling(
        star_scale=6.0, planet_scale=4.0, moon_scale=3.0,
        orbital_scale=400.0, star_shader_scale=1.0,
    ),
}


def get_view_mode_scaling(mode: ViewMode | str) -> ViewModeScaling:
    return VIEW_MODE_SCALING[ViewMode.coerce(mode)]
