"""Celestial body model: orbital elements, the body tree and its flat registry.

Distances are in AU-equivalent scene units before view-mode scaling, radii in
the same units, orbital periods in seconds.  Bodies are immutable for the
lifetime of a loaded system.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Iterator

SECONDS_PER_DAY = 86_400.0


class InvalidOrbitalElementsError(ValueError):
    """Raised when orbital elements are non-finite or out of range."""

    def __init__(self, field: str, value: object, body_id: str | None = None, reason: str = ""):
        self.field = field
        self.value = value
        self.body_id = body_id
        where = f" for body '{body_id}'" if body_id else ""
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid orbital element {field}={value!r}{where}{detail}")


class UnknownBodyCategoryError(ValueError):
    """Raised when a catalog record names a body category outside the closed set."""

    def __init__(self, category: str, body_id: str | None = None):
        self.category = category
        self.body_id = body_id
        where = f" for body '{body_id}'" if body_id else ""
        super().__init__(
            f"Unknown body category '{category}'{where}. "
            f"Expected one of: {', '.join(c.value for c in BodyCategory)}"
        )


class BodyCategory(str, enum.Enum):
    STAR = "star"
    TERRESTRIAL = "terrestrial"
    GAS_GIANT = "gas_giant"
    SPECIAL = "special"  # barycenters, belts, rings, compact objects

    @classmethod
    def parse(cls, value: str, body_id: str | None = None) -> BodyCategory:
        try:
            return cls(value)
        except ValueError:
            raise UnknownBodyCategoryError(value, body_id) from None


@dataclass(frozen=True, slots=True)
class OrbitalElements:
    semi_major_axis: float  # > 0
    eccentricity: float  # [0, 1)
    inclination_deg: float
    orbital_period: float  # seconds, > 0
    parent_id: str

    @property
    def period_days(self) -> float:
        return self.orbital_period / SECONDS_PER_DAY


@dataclass(frozen=True, slots=True)
class CelestialBody:
    id: str
    name: str
    category: BodyCategory
    radius: float
    orbit: OrbitalElements | None = None
    children: tuple[CelestialBody, ...] = ()
    spectral_type: str | None = None
    temperature: float | None = None  # K
    properties: dict = field(default_factory=dict, compare=False, hash=False)

    @property
    def is_star(self) -> bool:
        return self.category is BodyCategory.STAR


def validate_elements(elements: OrbitalElements, body_id: str | None = None) -> OrbitalElements:
    """Check the solver preconditions; the solver itself never re-validates.

    Returns the elements unchanged so the call can be used inline.
    """
    for name in ("semi_major_axis", "eccentricity", "inclination_deg", "orbital_period"):
        value = getattr(elements, name)
        if not math.isfinite(value):
            raise InvalidOrbitalElementsError(name, value, body_id, "must be finite")
    if elements.semi_major_axis <= 0.0:
        raise InvalidOrbitalElementsError(
            "semi_major_axis", elements.semi_major_axis, body_id, "must be > 0"
        )
    if not 0.0 <= elements.eccentricity < 1.0:
        raise InvalidOrbitalElementsError(
            "eccentricity", elements.eccentricity, body_id, "closed orbits need 0 <= e < 1"
        )
    if elements.orbital_period <= 0.0:
        raise InvalidOrbitalElementsError(
            "orbital_period", elements.orbital_period, body_id, "must be > 0"
        )
    return elements


def flatten(root: CelestialBody) -> Iterator[CelestialBody]:
    """Yield every body depth-first, parents before their children."""
    stack = [root]
    while stack:
        body = stack.pop()
        yield body
        stack.extend(reversed(body.children))


def build_registry(root: CelestialBody) -> dict[str, CelestialBody]:
    """Flat id -> body lookup used for rendering hookup."""
    return {b.id: b for b in flatten(root)}
