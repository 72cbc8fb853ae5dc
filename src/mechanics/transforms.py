"""Display-mode transforms from solver output to render-space coordinates.

- realistic:     solver position scaled by ORBITAL_SCALE
- navigational:  equidistant rings (``base * (index + 1)``) in the orbit's own
                 direction, globally rescaled so the outermost ring lands where
                 the outermost realistic orbit would
- profile:       the same equidistant radii plus an ORBITAL_SCALE offset, laid
                 out as fixed slots along the +X lane

Profile mode has one coordinate space: the lane slot returned here.  Only the
focal body's direct orbiters get the lane offset; deeper levels (moons) sit at
their plain equidistant radius from their parent on the same axis.  Object
placement and camera framing (:func:`profile_framing`) both derive from it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from config import settings
from viewstate.modes import DisplayMode


# --------------------------------------------------------------------------- #
#  Equidistant radii
# --------------------------------------------------------------------------- #
def base_spacing(orbital_scale: float) -> float:
    return orbital_scale * settings.equidistant_spacing_ratio


def equidistant_scaling_factor(
    orbital_scale: float,
    sibling_count: int,
    system_max_realistic_radius: float,
) -> float:
    """systemMaxRealisticRadius / maxEquidistantRadius, or 1.0 when degenerate."""
    if sibling_count <= 0 or not system_max_realistic_radius > 0.0:
        return 1.0
    max_equidistant = base_spacing(orbital_scale) * sibling_count
    factor = system_max_realistic_radius / max_equidistant
    if not math.isfinite(factor) or factor <= 0.0:
        return 1.0
    return factor


def equidistant_radius(
    index: int,
    orbital_scale: float,
    sibling_count: int = 0,
    system_max_realistic_radius: float = 0.0,
) -> float:
    """Radius of ring ``index`` (0-based) in the navigational layout.

    With no siblings (or no realistic extent) the unscaled ``base * (index + 1)``
    is returned, which is always finite and positive.
    """
    factor = equidistant_scaling_factor(orbital_scale, sibling_count, system_max_realistic_radius)
    return base_spacing(orbital_scale) * (index + 1) * factor


def profile_radius(
    index: int,
    orbital_scale: float,
    sibling_count: int = 0,
    system_max_realistic_radius: float = 0.0,
) -> float:
    """Lane slot of object ``index`` in profile mode (equidistant + offset)."""
    return equidistant_radius(index, orbital_scale, sibling_count,
                              system_max_realistic_radius) + orbital_scale


# --------------------------------------------------------------------------- #
#  Per-object transform
# --------------------------------------------------------------------------- #
def transform_position(
    raw_position: np.ndarray,
    object_index: int,
    display_mode: DisplayMode,
    orbital_scale: float,
    system_max_realistic_radius: float,
    sibling_count: int = 0,
    focal_lane: bool = True,
) -> np.ndarray:
    """Map a parent-centred solver position into render space.

    Parameters
    ----------
    raw_position : (3,) solver output in AU-equivalent units
    object_index : rank of the object among its siblings (0 = innermost)
    display_mode : selects the transform branch
    orbital_scale : active ViewModeScaling.orbital_scale
    system_max_realistic_radius : outermost sibling's realistic radius, render units
    sibling_count : number of siblings sharing the parent (0 = no rescale)
    focal_lane : profile mode only; False places the object on the parent's
        lane at the plain equidistant radius, without the lane offset
    """
    raw = np.asarray(raw_position, dtype=np.float64)
    mode = DisplayMode(display_mode)

    if mode is DisplayMode.REALISTIC:
        return raw * orbital_scale

    if mode is DisplayMode.NAVIGATIONAL:
        radius = equidistant_radius(object_index, orbital_scale, sibling_count,
                                    system_max_realistic_radius)
        # Keep the orbital phase, flatten onto the reference plane
        angle = math.atan2(raw[2], raw[0]) if (raw[0] or raw[2]) else 0.0
        return np.array([radius * math.cos(angle), 0.0, radius * math.sin(angle)])

    if focal_lane:
        radius = profile_radius(object_index, orbital_scale, sibling_count,
                                system_max_realistic_radius)
    else:
        radius = equidistant_radius(object_index, orbital_scale, sibling_count,
                                    system_max_realistic_radius)
    return np.array([radius, 0.0, 0.0])


# --------------------------------------------------------------------------- #
#  Profile framing
# --------------------------------------------------------------------------- #
@dataclass(frozen=True, slots=True)
class ProfileFraming:
    center_x: float  # lane midpoint between the focal body and the last slot
    span: float  # distance from the focal body (x = 0) to the last slot


def profile_framing(
    count: int,
    orbital_scale: float,
    system_max_realistic_radius: float = 0.0,
) -> ProfileFraming:
    """Camera framing for a focal body and ``count`` objects in its lane."""
    if count <= 0:
        return ProfileFraming(center_x=0.0, span=0.0)
    last = profile_radius(count - 1, orbital_scale, count, system_max_realistic_radius)
    return ProfileFraming(center_x=last / 2.0, span=last)
