"""Stellar zone boundaries: habitable zone, snow (frost) line, sublimation zone.

All radii are in AU for a luminosity given in solar units, and every
boundary scales as sqrt(L): 100x the luminosity moves each zone 10x outward.
Binary systems sum the component luminosities (flux superposition at large
separation); binary orbital dynamics are not modelled.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace

from stellar.luminosity import get_luminosity_for_spectral_type
from viewstate.modes import ViewMode

logger = logging.getLogger("starscale.zones")

# --------------------------------------------------------------------------- #
#  Coefficients (AU per sqrt(L/L_sun))
# --------------------------------------------------------------------------- #
HZ_INNER_COEFF = 0.95
HZ_OUTER_COEFF = 1.37
SNOW_LINE_COEFF = 2.7
SUBLIMATION_COEFF = 0.034  # refractory dust near 1500 K


class ZoneType(str, enum.Enum):
    HABITABLE = "habitable"
    FROSTLINE = "frostline"
    SUBLIMATION = "sublimation"


@dataclass(frozen=True, slots=True)
class ZoneResult:
    type: ZoneType
    inner_radius: float
    outer_radius: float | None = None  # None for line-type zones

    @property
    def is_line(self) -> bool:
        return self.outer_radius is None


# Overlay opacity per view mode
ZONE_OPACITY: dict[ViewMode, dict[ZoneType, float]] = {
    ViewMode.EXPLORATIONAL: {
        ZoneType.HABITABLE: 0.15, ZoneType.FROSTLINE: 0.3, ZoneType.SUBLIMATION: 0.25,
    },
    ViewMode.NAVIGATIONAL: {
        ZoneType.HABITABLE: 0.25, ZoneType.FROSTLINE: 0.5, ZoneType.SUBLIMATION: 0.4,
    },
    ViewMode.PROFILE: {
        ZoneType.HABITABLE: 0.2, ZoneType.FROSTLINE: 0.4, ZoneType.SUBLIMATION: 0.35,
    },
}


def _sqrt_luminosity(luminosity: float) -> float:
    if not math.isfinite(luminosity) or luminosity <= 0.0:
        raise ValueError(f"Luminosity must be a positive finite number, got {luminosity}")
    return math.sqrt(luminosity)


def habitable_zone_inner(luminosity: float) -> float:
    return HZ_INNER_COEFF * _sqrt_luminosity(luminosity)


def habitable_zone_outer(luminosity: float) -> float:
    return HZ_OUTER_COEFF * _sqrt_luminosity(luminosity)


def snow_line(luminosity: float) -> float:
    return SNOW_LINE_COEFF * _sqrt_luminosity(luminosity)


def sublimation_radius(luminosity: float) -> float:
    return SUBLIMATION_COEFF * _sqrt_luminosity(luminosity)


def compute_zones(luminosity: float, include_sublimation: bool = False) -> tuple[ZoneResult, ...]:
    """Zone set for a star (or combined stars) of the given luminosity.

    Order: habitable, frostline, then sublimation when requested.
    """
    zones = [
        ZoneResult(ZoneType.HABITABLE, habitable_zone_inner(luminosity),
                   habitable_zone_outer(luminosity)),
        ZoneResult(ZoneType.FROSTLINE, snow_line(luminosity)),
    ]
    if include_sublimation:
        zones.append(ZoneResult(ZoneType.SUBLIMATION, 0.0, sublimation_radius(luminosity)))
    logger.debug("Zones for L=%.4g: %s", luminosity, zones)
    return tuple(zones)


def zones_for_spectral_type(spectral_type: str, include_sublimation: bool = False) -> tuple[ZoneResult, ...]:
    return compute_zones(get_luminosity_for_spectral_type(spectral_type), include_sublimation)


def binary_zones(
    spectral_type_a: str,
    spectral_type_b: str,
    include_sublimation: bool = False,
) -> tuple[ZoneResult, ...]:
    total = (get_luminosity_for_spectral_type(spectral_type_a)
             + get_luminosity_for_spectral_type(spectral_type_b))
    return compute_zones(total, include_sublimation)


def scale_zones(zones: tuple[ZoneResult, ...], orbital_scale: float) -> tuple[ZoneResult, ...]:
    """Convert zone radii from AU into render units."""
    return tuple(
        replace(
            z,
            inner_radius=z.inner_radius * orbital_scale,
            outer_radius=None if z.outer_radius is None else z.outer_radius * orbital_scale,
        )
        for z in zones
    )


def zone_opacity(view_mode: ViewMode | str, zone_type: ZoneType) -> float:
    return ZONE_OPACITY[ViewMode.coerce(view_mode)][zone_type]
