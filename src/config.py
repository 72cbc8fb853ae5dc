from __future__ import annotations

import logging

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Kepler solver
    kepler_max_iterations: int = 8
    kepler_tolerance: float = 1e-9

    # Equidistant layout: baseSpacing = ORBITAL_SCALE * ratio
    equidistant_spacing_ratio: float = 0.5

    # Scale-adaptive rendering
    tiny_object_threshold: float = 0.001
    near_plane_floor: float = 1e-5
    grid_spacing_floor: float = 0.001
    depth_threshold_floor: float = 0.0001

    # Orbit line sampling
    orbit_path_segments: int = 128

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "STARSCALE_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install the starscale log format on the root logger."""
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
