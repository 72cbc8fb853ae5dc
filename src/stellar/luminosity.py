"""Spectral-type luminosity table (L / L_sun) and spectral-type inference."""

from __future__ import annotations

import logging
import re

from catalog.bodies import CelestialBody

logger = logging.getLogger("starscale.luminosity")


class UnknownSpectralTypeError(ValueError):
    """Raised for spectral codes missing from the luminosity table."""

    def __init__(self, spectral_type: object):
        self.spectral_type = spectral_type
        super().__init__(
            f"Unknown spectral type: {spectral_type!r}. "
            f"Known types: {', '.join(SPECTRAL_TYPE_LUMINOSITY)}"
        )


SPECTRAL_TYPE_LUMINOSITY: dict[str, float] = {
    "O5": 100_000.0,
    "B0": 20_000.0,
    "B5": 800.0,
    "A0": 80.0,
    "A5": 25.0,
    "F0": 6.0,
    "F8": 1.5,
    "G2": 1.0,  # Sun
    "K0": 0.6,
    "K5": 0.2,
    "M0": 0.08,
    "M5": 0.01,
    "M8": 0.001,
}

# Class letter + subclass digit, optional Yerkes luminosity class (V, IV, III, ...)
_SPECTRAL_CODE = re.compile(r"^\s*([OBAFGKM]\d)\s*(?:Ia|Ib|I{1,3}|IV|V|VI)?\s*$")

# Lower temperature bound (K) of each class, hottest first
TEMPERATURE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (30_000.0, "O5"),
    (10_000.0, "B5"),
    (7_500.0, "A5"),
    (6_000.0, "F8"),
    (5_200.0, "G2"),
    (3_700.0, "K5"),
)
COOLEST_TYPE = "M5"


def normalize_spectral_type(spectral_type: str) -> str:
    """Strip the luminosity class, e.g. ``'G2V'`` -> ``'G2'``."""
    if not isinstance(spectral_type, str):
        raise UnknownSpectralTypeError(spectral_type)
    match = _SPECTRAL_CODE.match(spectral_type)
    if match is None:
        raise UnknownSpectralTypeError(spectral_type)
    return match.group(1)


def get_luminosity_for_spectral_type(spectral_type: str) -> float:
    code = normalize_spectral_type(spectral_type)
    try:
        return SPECTRAL_TYPE_LUMINOSITY[code]
    except KeyError:
        raise UnknownSpectralTypeError(spectral_type) from None


def infer_spectral_type(temperature_k: float) -> str:
    """Map an effective temperature onto the nearest tabulated spectral type."""
    for threshold, code in TEMPERATURE_THRESHOLDS:
        if temperature_k > threshold:
            return code
    return COOLEST_TYPE


def spectral_type_for(star: CelestialBody) -> str:
    """Spectral type of a star: explicit code first, then its temperature."""
    if star.spectral_type:
        return star.spectral_type
    if star.temperature:
        temperature = float(star.temperature)
        inferred = infer_spectral_type(temperature)
        logger.debug("Inferred spectral type %s for '%s' from %.0f K",
                     inferred, star.id, temperature)
        return inferred
    raise UnknownSpectralTypeError(None)
