"""Typed adapter from loaded catalog records to an immutable body tree.

Reading catalog files is the loader's job; this module receives the decoded
records (one dict per object) and turns them into validated
:class:`~catalog.bodies.CelestialBody` trees.  Record layout::

    {
        "id": "earth",
        "name": "Earth",
        "classification": "planet",
        "geometry_type": "terrestrial",
        "properties": {"radius": 0.0000426, "temperature": 288},
        "orbit": {
            "parent": "sol",
            "semi_major_axis": 1.0,
            "eccentricity": 0.0167,
            "inclination": 0.0,
            "orbital_period": 365.25,   # days
        },
    }
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from pydantic import BaseModel, Field, ValidationError, field_validator

from catalog.bodies import (
    SECONDS_PER_DAY,
    BodyCategory,
    CelestialBody,
    InvalidOrbitalElementsError,
    OrbitalElements,
    UnknownBodyCategoryError,
    build_registry,
)

logger = logging.getLogger("starscale.catalog")


class CatalogStructureError(ValueError):
    """Raised when records do not form a single rooted tree."""


# Geometry types known to the renderer, collapsed onto the closed category set.
GEOMETRY_CATEGORIES: dict[str, BodyCategory] = {
    "star": BodyCategory.STAR,
    "terrestrial": BodyCategory.TERRESTRIAL,
    "rocky": BodyCategory.TERRESTRIAL,
    "gas_giant": BodyCategory.GAS_GIANT,
    "compact": BodyCategory.SPECIAL,
    "ring": BodyCategory.SPECIAL,
    "belt": BodyCategory.SPECIAL,
    "none": BodyCategory.SPECIAL,
}


# --------------------------------------------------------------------------- #
#  Pydantic record models
# --------------------------------------------------------------------------- #

class OrbitRecord(BaseModel):
    parent: str
    semi_major_axis: float = Field(gt=0)
    eccentricity: float = Field(default=0.0, ge=0, lt=1)
    inclination: float = Field(default=0.0, description="Degrees")
    orbital_period: float = Field(gt=0, description="Days")

    @field_validator("semi_major_axis", "eccentricity", "inclination", "orbital_period")
    @classmethod
    def check_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"must be finite, got {v}")
        return v


class BodyRecord(BaseModel):
    id: str = Field(min_length=1)
    name: str = ""
    classification: str
    geometry_type: str = "none"
    properties: dict[str, Any] = Field(default_factory=dict)
    orbit: dict[str, Any] | None = None

    def category(self) -> BodyCategory:
        if self.classification == "star":
            return BodyCategory.STAR
        if self.classification == "barycenter":
            return BodyCategory.SPECIAL
        try:
            return GEOMETRY_CATEGORIES[self.geometry_type]
        except KeyError:
            raise UnknownBodyCategoryError(self.geometry_type, self.id) from None

    def elements(self) -> OrbitalElements | None:
        if self.orbit is None:
            return None
        try:
            orbit = OrbitRecord.model_validate(self.orbit)
        except ValidationError as exc:
            err = exc.errors()[0]
            loc = str(err["loc"][0]) if err["loc"] else "orbit"
            raise InvalidOrbitalElementsError(
                loc, err.get("input"), self.id, err["msg"]
            ) from exc
        return OrbitalElements(
            semi_major_axis=orbit.semi_major_axis,
            eccentricity=orbit.eccentricity,
            inclination_deg=orbit.inclination,
            orbital_period=orbit.orbital_period * SECONDS_PER_DAY,
            parent_id=orbit.parent,
        )


# --------------------------------------------------------------------------- #
#  System assembly
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class SystemCatalog:
    root: CelestialBody
    registry: dict[str, CelestialBody] = field(repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.registry)

    def __contains__(self, body_id: str) -> bool:
        return body_id in self.registry

    def get(self, body_id: str) -> CelestialBody:
        return self.registry[body_id]

    @property
    def stars(self) -> list[CelestialBody]:
        return [b for b in self.registry.values() if b.is_star]


def parse_system(objects: Iterable[dict]) -> SystemCatalog:
    """Validate catalog records and assemble them into a rooted body tree.

    Raises
    ------
    UnknownBodyCategoryError
        A record's geometry type is outside the known set.
    InvalidOrbitalElementsError
        An orbit is non-finite, open (e >= 1) or has a non-positive axis/period.
    CatalogStructureError
        Duplicate ids, unknown parents, no root, several roots, or bodies
        cut off from the root by an orbit cycle.
    """
    records: dict[str, BodyRecord] = {}
    for raw in objects:
        try:
            record = BodyRecord.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Rejected catalog record %r: %s", raw.get("id"), exc)
            raise CatalogStructureError(f"Malformed catalog record: {exc}") from exc
        if record.id in records:
            raise CatalogStructureError(f"Duplicate body id '{record.id}'")
        records[record.id] = record

    elements: dict[str, OrbitalElements | None] = {}
    for record in records.values():
        try:
            elements[record.id] = record.elements()
        except InvalidOrbitalElementsError as exc:
            logger.warning("Rejected orbit: %s", exc)
            raise

    roots = [rid for rid, el in elements.items() if el is None]
    if len(roots) != 1:
        raise CatalogStructureError(
            f"Expected exactly one body without an orbit, found {len(roots)}: {roots}"
        )

    children: dict[str, list[str]] = {rid: [] for rid in records}
    for rid, el in elements.items():
        if el is None:
            continue
        if el.parent_id not in records:
            raise CatalogStructureError(f"Body '{rid}' orbits unknown parent '{el.parent_id}'")
        children[el.parent_id].append(rid)

    def build(rid: str) -> CelestialBody:
        record = records[rid]
        props = record.properties
        return CelestialBody(
            id=rid,
            name=record.name or rid,
            category=record.category(),
            radius=float(props.get("radius", 0.0)),
            orbit=elements[rid],
            children=tuple(build(cid) for cid in children[rid]),
            spectral_type=props.get("spectral_type"),
            temperature=props.get("color_temperature") or props.get("temperature"),
            properties=dict(props),
        )

    root = build(roots[0])
    registry = build_registry(root)
    if len(registry) != len(records):
        orphans = sorted(set(records) - set(registry))
        raise CatalogStructureError(f"Bodies unreachable from root '{root.id}' (orbit cycle?): {orphans}")

    logger.debug("Parsed system rooted at '%s' with %d bodies", root.id, len(registry))
    return SystemCatalog(root=root, registry=registry)
