"""Per-body visual sizes under the active view mode.

Catalog radii share the AU-equivalent units of the orbits, so a body's render
radius is ``radius * ORBITAL_SCALE * class_scale``, where the class scale is
the view mode's STAR_SCALE, PLANET_SCALE or MOON_SCALE.  Stars additionally
carry STAR_SHADER_SCALE for their surface shader.

Size classes come from the tree: bodies orbiting a star or a barycenter are
planets, bodies orbiting a planet are moons.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from catalog.bodies import BodyCategory, CelestialBody
from catalog.records import SystemCatalog
from rendering.parameters import RenderParameters, derive_render_parameters
from viewstate.modes import ViewModeScaling
from viewstate.store import ModeState


class SizeClass(str, enum.Enum):
    STAR = "star"
    PLANET = "planet"
    MOON = "moon"
    OTHER = "other"  # barycenters, belts, rings


@dataclass(frozen=True, slots=True)
class VisualSize:
    size_class: SizeClass
    radius: float  # render units
    shader_scale: float


def size_class(body: CelestialBody, parent: CelestialBody | None = None) -> SizeClass:
    if body.is_star:
        return SizeClass.STAR
    if body.category is BodyCategory.SPECIAL:
        return SizeClass.OTHER
    if parent is None or parent.is_star or parent.category is BodyCategory.SPECIAL:
        return SizeClass.PLANET
    return SizeClass.MOON


def class_scale(cls: SizeClass, scaling: ViewModeScaling) -> float:
    if cls is SizeClass.STAR:
        return scaling.star_scale
    if cls is SizeClass.PLANET:
        return scaling.planet_scale
    if cls is SizeClass.MOON:
        return scaling.moon_scale
    return 1.0


def visual_size(
    body: CelestialBody,
    parent: CelestialBody | None,
    scaling: ViewModeScaling,
) -> VisualSize:
    cls = size_class(body, parent)
    return VisualSize(
        size_class=cls,
        radius=body.radius * scaling.orbital_scale * class_scale(cls, scaling),
        shader_scale=scaling.star_shader_scale if cls is SizeClass.STAR else 1.0,
    )


def compute_visual_sizes(catalog: SystemCatalog, state: ModeState) -> dict[str, VisualSize]:
    """``{body_id: VisualSize}`` for every body under the state's view mode."""
    scaling = state.scaling
    sizes = {catalog.root.id: visual_size(catalog.root, None, scaling)}
    stack = [catalog.root]
    while stack:
        parent = stack.pop()
        for child in parent.children:
            sizes[child.id] = visual_size(child, parent, scaling)
            stack.append(child)
    return sizes


def render_parameters_for(
    catalog: SystemCatalog,
    state: ModeState,
    body_id: str,
    camera_distance: float,
) -> RenderParameters:
    """Render parameters for a focused body, sized for the active view mode."""
    sizes = compute_visual_sizes(catalog, state)
    return derive_render_parameters(sizes[body_id].radius, camera_distance)
