"""Per-frame evaluation of a loaded system under the active modes.

Solves every orbiting body relative to its parent, maps it through the
display-mode transform, and accumulates parent offsets down the tree.
Bodies are independent given their parent's position, so a frame is a pure
function of (catalog, time, mode state).
"""

from __future__ import annotations

import numpy as np

from catalog.bodies import CelestialBody
from catalog.records import SystemCatalog
from mechanics.kepler import solve_position
from mechanics.timescale import adaptive_time_multiplier
from mechanics.transforms import transform_position
from scene.cache import FrameCache
from stellar.luminosity import get_luminosity_for_spectral_type, spectral_type_for
from stellar.zones import ZoneResult, compute_zones, scale_zones
from viewstate.store import ModeState


def orbiting_children(body: CelestialBody) -> list[CelestialBody]:
    """Children with orbits, ranked innermost first (rank = transform index)."""
    return sorted(
        (c for c in body.children if c.orbit is not None),
        key=lambda c: c.orbit.semi_major_axis,
    )


def _evaluate(
    catalog: SystemCatalog,
    time_s: float,
    state: ModeState,
    adaptive_time: bool,
) -> dict[str, np.ndarray]:
    orbital_scale = state.scaling.orbital_scale
    positions: dict[str, np.ndarray] = {catalog.root.id: np.zeros(3)}

    stack = [catalog.root]
    while stack:
        parent = stack.pop()
        parent_pos = positions[parent.id]
        ranked = orbiting_children(parent)
        if not ranked:
            continue
        group_max = ranked[-1].orbit.semi_major_axis * orbital_scale

        for index, child in enumerate(ranked):
            t = time_s
            if adaptive_time:
                t *= adaptive_time_multiplier(child.orbit).multiplier
            raw = solve_position(child.orbit, t)
            offset = transform_position(raw, index, state.mode, orbital_scale,
                                        group_max, len(ranked),
                                        focal_lane=parent is catalog.root)
            positions[child.id] = parent_pos + offset
            stack.append(child)

    return positions


def compute_frame(
    catalog: SystemCatalog,
    time_s: float,
    state: ModeState,
    cache: FrameCache | None = None,
    adaptive_time: bool = False,
) -> dict[str, np.ndarray]:
    """Render-space position of every body at ``time_s``.

    Returns ``{body_id: (3,) position}``; the root sits at the origin.
    With a ``cache`` the result is memoized for the current mode pair.
    """
    if cache is None:
        return _evaluate(catalog, time_s, state, adaptive_time)
    key = ("frame", catalog, float(time_s), adaptive_time)
    return cache.get_or_compute(
        state, key, lambda: _evaluate(catalog, time_s, state, adaptive_time)
    )


def system_zones(
    catalog: SystemCatalog,
    state: ModeState,
    include_sublimation: bool = False,
) -> tuple[ZoneResult, ...]:
    """Zone overlays around the system root, in render units.

    Uses the first star, or the combined luminosity of the first two for
    binaries.  Returns an empty tuple for systems without stars.
    """
    stars = catalog.stars
    if not stars:
        return ()
    luminosity = sum(get_luminosity_for_spectral_type(spectral_type_for(s)) for s in stars[:2])
    zones = compute_zones(luminosity, include_sublimation)
    return scale_zones(zones, state.scaling.orbital_scale)
