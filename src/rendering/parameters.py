"""Scale-adaptive camera and shader parameters.

Object sizes span ~1e-4 (moons) to ~1e1 (stars) render units, so fixed
near planes and grid spacings either clip small bodies or lose depth
precision.  Everything here is derived per frame from the focused object's
radius and the current camera distance.
"""

from __future__ import annotations

from dataclasses import dataclass

from config import settings

# Near-plane and minimum-distance ratios of the camera distance
NORMAL_NEAR_RATIO = 0.10
NORMAL_MIN_DISTANCE_RATIO = 0.50
TINY_NEAR_RATIO = 0.01
TINY_MIN_DISTANCE_RATIO = 0.10

# Shader ratios of the object radius
GRID_SPACING_RATIO = 2.0
DEPTH_THRESHOLD_RATIO = 0.65


@dataclass(frozen=True, slots=True)
class RenderParameters:
    grid_spacing: float
    depth_threshold: float
    near_plane: float
    min_camera_distance: float


def is_tiny(camera_distance: float) -> bool:
    return camera_distance < settings.tiny_object_threshold


def camera_limits(camera_distance: float) -> tuple[float, float]:
    """(near_plane, min_camera_distance) for a camera distance.

    The tiny regime drops the absolute near floor: at those distances the
    floor would sit beyond the camera and the minimum distance.
    """
    if is_tiny(camera_distance):
        return (camera_distance * TINY_NEAR_RATIO,
                camera_distance * TINY_MIN_DISTANCE_RATIO)
    return (max(camera_distance * NORMAL_NEAR_RATIO, settings.near_plane_floor),
            camera_distance * NORMAL_MIN_DISTANCE_RATIO)


def grid_spacing(object_radius: float) -> float:
    return max(object_radius * GRID_SPACING_RATIO, settings.grid_spacing_floor)


def depth_threshold(object_radius: float) -> float:
    return max(object_radius * DEPTH_THRESHOLD_RATIO, settings.depth_threshold_floor)


def derive_render_parameters(object_radius: float, camera_distance: float) -> RenderParameters:
    """Per-frame render parameters for the focused object.

    ``camera_distance`` must be positive; the caller never configures the
    camera inside the returned near plane.
    """
    near, min_distance = camera_limits(camera_distance)
    return RenderParameters(
        grid_spacing=grid_spacing(object_radius),
        depth_threshold=depth_threshold(object_radius),
        near_plane=near,
        min_camera_distance=min_distance,
    )
