"""Tests for catalog record parsing and orbital element validation."""

import copy
import math

import pytest

from catalog.bodies import (
    SECONDS_PER_DAY,
    BodyCategory,
    InvalidOrbitalElementsError,
    OrbitalElements,
    UnknownBodyCategoryError,
    flatten,
    validate_elements,
)
from catalog.records import CatalogStructureError, parse_system


def _find(records, body_id):
    return next(r for r in records if r["id"] == body_id)


# --------------------------------------------------------------------------- #
#  Tree assembly
# --------------------------------------------------------------------------- #

def test_parse_builds_tree(sol):
    assert sol.root.id == "sol"
    assert len(sol) == 5
    assert "luna" in sol
    assert [c.id for c in sol.root.children] == ["mercury", "earth", "jupiter"]
    assert [c.id for c in sol.get("earth").children] == ["luna"]


def test_categories(sol):
    assert sol.root.category is BodyCategory.STAR
    assert sol.get("luna").category is BodyCategory.TERRESTRIAL
    assert sol.get("jupiter").category is BodyCategory.GAS_GIANT
    assert [s.id for s in sol.stars] == ["sol"]


def test_star_properties(sol):
    assert sol.root.spectral_type == "G2V"
    assert sol.root.temperature == 5778
    assert sol.root.radius == pytest.approx(0.00465)


def test_period_converted_to_seconds(sol):
    orbit = sol.get("earth").orbit
    assert orbit.orbital_period == pytest.approx(365.25 * SECONDS_PER_DAY)
    assert orbit.period_days == pytest.approx(365.25)
    assert orbit.parent_id == "sol"


def test_flatten_visits_parents_first(sol):
    order = [b.id for b in flatten(sol.root)]
    assert order[0] == "sol"
    assert order.index("earth") < order.index("luna")
    assert sorted(order) == sorted(sol.registry)


def test_barycenter_root_is_special(sol_records):
    sol_records[0] = {"id": "sol", "name": "Barycenter", "classification": "barycenter"}
    catalog = parse_system(sol_records)
    assert catalog.root.category is BodyCategory.SPECIAL
    assert catalog.stars == []


def test_catalog_is_hashable(sol_records):
    a = parse_system(sol_records)
    b = parse_system(copy.deepcopy(sol_records))
    assert a == b
    assert hash(a) == hash(b)


# --------------------------------------------------------------------------- #
#  Rejections
# --------------------------------------------------------------------------- #

def test_unknown_geometry_type(sol_records):
    _find(sol_records, "jupiter")["geometry_type"] = "ice_giant"
    with pytest.raises(UnknownBodyCategoryError) as exc_info:
        parse_system(sol_records)
    assert exc_info.value.category == "ice_giant"
    assert exc_info.value.body_id == "jupiter"


@pytest.mark.parametrize("field, value", [
    ("eccentricity", 1.0),
    ("eccentricity", -0.1),
    ("semi_major_axis", 0.0),
    ("orbital_period", -3.0),
    ("inclination", math.nan),
])
def test_invalid_orbit_rejected(sol_records, field, value):
    _find(sol_records, "mercury")["orbit"][field] = value
    with pytest.raises(InvalidOrbitalElementsError) as exc_info:
        parse_system(sol_records)
    assert exc_info.value.field == field
    assert exc_info.value.body_id == "mercury"


def test_unknown_parent(sol_records):
    _find(sol_records, "luna")["orbit"]["parent"] = "mars"
    with pytest.raises(CatalogStructureError, match="unknown parent"):
        parse_system(sol_records)


def test_two_roots(sol_records):
    del _find(sol_records, "jupiter")["orbit"]
    with pytest.raises(CatalogStructureError, match="exactly one"):
        parse_system(sol_records)


def test_duplicate_id(sol_records):
    sol_records.append(copy.deepcopy(_find(sol_records, "earth")))
    with pytest.raises(CatalogStructureError, match="Duplicate"):
        parse_system(sol_records)


def test_orbit_cycle_is_unreachable(sol_records):
    _find(sol_records, "earth")["orbit"]["parent"] = "luna"
    with pytest.raises(CatalogStructureError, match="unreachable"):
        parse_system(sol_records)


def test_malformed_record(sol_records):
    del _find(sol_records, "earth")["classification"]
    with pytest.raises(CatalogStructureError, match="Malformed"):
        parse_system(sol_records)


# --------------------------------------------------------------------------- #
#  Element validation
# --------------------------------------------------------------------------- #

def test_validate_elements_passes_through():
    el = OrbitalElements(1.0, 0.5, 10.0, 3.0e7, "sol")
    assert validate_elements(el) is el


@pytest.mark.parametrize("kwargs, field", [
    ({"semi_major_axis": math.inf}, "semi_major_axis"),
    ({"eccentricity": math.nan}, "eccentricity"),
    ({"eccentricity": 1.2}, "eccentricity"),
    ({"orbital_period": 0.0}, "orbital_period"),
    ({"semi_major_axis": -1.0}, "semi_major_axis"),
])
def test_validate_elements_rejects(kwargs, field):
    base = {"semi_major_axis": 1.0, "eccentricity": 0.1, "inclination_deg": 0.0,
            "orbital_period": 3.0e7, "parent_id": "sol"}
    base.update(kwargs)
    with pytest.raises(InvalidOrbitalElementsError) as exc_info:
        validate_elements(OrbitalElements(**base), body_id="x")
    assert exc_info.value.field == field
