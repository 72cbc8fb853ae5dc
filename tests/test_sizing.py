"""Tests for per-body visual sizes and view-mode-aware render parameters."""

import pytest

from catalog.records import parse_system
from rendering.parameters import derive_render_parameters
from scene.sizing import SizeClass, compute_visual_sizes, render_parameters_for
from viewstate.modes import ViewMode, get_view_mode_scaling
from viewstate.store import INITIAL_STATE, set_view_mode


def test_size_classes(sol):
    sizes = compute_visual_sizes(sol, INITIAL_STATE)
    assert sizes["sol"].size_class is SizeClass.STAR
    assert sizes["earth"].size_class is SizeClass.PLANET
    assert sizes["jupiter"].size_class is SizeClass.PLANET
    assert sizes["luna"].size_class is SizeClass.MOON
    assert set(sizes) == set(sol.registry)


@pytest.mark.parametrize("view_mode", list(ViewMode))
def test_visual_radii_follow_view_mode(sol, view_mode):
    scaling = get_view_mode_scaling(view_mode)
    sizes = compute_visual_sizes(sol, set_view_mode(INITIAL_STATE, view_mode))

    orbital = scaling.orbital_scale
    assert sizes["sol"].radius == pytest.approx(0.00465 * orbital * scaling.star_scale)
    assert sizes["earth"].radius == pytest.approx(4.26e-5 * orbital * scaling.planet_scale)
    assert sizes["luna"].radius == pytest.approx(1.16e-5 * orbital * scaling.moon_scale)
    assert sizes["sol"].shader_scale == scaling.star_shader_scale
    assert sizes["earth"].shader_scale == 1.0


def test_planets_of_a_barycenter(sol_records):
    sol_records[0] = {"id": "sol", "name": "Barycenter", "classification": "barycenter"}
    sizes = compute_visual_sizes(parse_system(sol_records), INITIAL_STATE)
    assert sizes["sol"].size_class is SizeClass.OTHER
    assert sizes["sol"].radius == 0.0
    assert sizes["earth"].size_class is SizeClass.PLANET
    assert sizes["luna"].size_class is SizeClass.MOON


def test_render_parameters_use_visual_radius(sol):
    state = set_view_mode(INITIAL_STATE, "profile")
    params = render_parameters_for(sol, state, "luna", camera_distance=0.5)
    radius = 1.16e-5 * 400.0 * 3.0
    assert params == derive_render_parameters(radius, 0.5)
    assert params.grid_spacing == pytest.approx(2.0 * radius)


def test_render_parameters_change_with_view_mode(sol):
    explorational = render_parameters_for(sol, INITIAL_STATE, "sol", 50.0)
    profile = render_parameters_for(sol, set_view_mode(INITIAL_STATE, "profile"), "sol", 50.0)
    assert profile.grid_spacing > explorational.grid_spacing
