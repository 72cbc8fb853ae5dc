"""Shared fixtures: a small Sol-like system in AU / days."""

from __future__ import annotations

import pytest

from catalog.records import SystemCatalog, parse_system


def _planet(body_id, parent, a, e, inc, period_days, radius, geometry="terrestrial"):
    return {
        "id": body_id,
        "name": body_id.title(),
        "classification": "moon" if parent != "sol" else "planet",
        "geometry_type": geometry,
        "properties": {"radius": radius},
        "orbit": {
            "parent": parent,
            "semi_major_axis": a,
            "eccentricity": e,
            "inclination": inc,
            "orbital_period": period_days,
        },
    }


@pytest.fixture
def sol_records() -> list[dict]:
    return [
        {
            "id": "sol",
            "name": "Sol",
            "classification": "star",
            "geometry_type": "star",
            "properties": {"radius": 0.00465, "spectral_type": "G2V", "temperature": 5778},
        },
        _planet("mercury", "sol", 0.387, 0.2056, 7.0, 87.97, 1.63e-5),
        _planet("earth", "sol", 1.0, 0.0167, 0.0, 365.25, 4.26e-5),
        _planet("luna", "earth", 0.00257, 0.0549, 5.145, 27.32, 1.16e-5, geometry="rocky"),
        _planet("jupiter", "sol", 5.2, 0.0489, 1.3, 4332.59, 4.78e-4, geometry="gas_giant"),
    ]


@pytest.fixture
def sol(sol_records) -> SystemCatalog:
    return parse_system(sol_records)
