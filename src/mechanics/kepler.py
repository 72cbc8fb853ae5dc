"""Keplerian orbital position solver: parent-centred positions from elements.

Closed two-body ellipses only (0 <= e < 1).  The orbital plane is X/Z with
+Y up; inclination rotates the plane about the ascending-node axis (+X).
Distances come out in the same units as the semi-major axis, time is in
seconds.  Inner loops are JIT-compiled with Numba.

Callers validate elements (``catalog.bodies.validate_elements``) before
solving; nothing here re-checks them.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit

from catalog.bodies import OrbitalElements
from config import settings


# --------------------------------------------------------------------------- #
#  Constants
# --------------------------------------------------------------------------- #
TWO_PI = 2.0 * math.pi


# --------------------------------------------------------------------------- #
#  Anomalies
# --------------------------------------------------------------------------- #
@njit(cache=True)
def mean_anomaly(time_s: float, period_s: float) -> float:
    """M = 2*pi * (t mod P) / P, always in [0, 2*pi) even for negative t."""
    phase = time_s - period_s * math.floor(time_s / period_s)
    return TWO_PI * phase / period_s


@njit(cache=True)
def solve_kepler(M: float, ecc: float, max_iterations: int = 8, tol: float = 1e-9) -> float:
    """Solve Kepler's equation M = E - e*sin(E) for E via Newton-Raphson.

    Stops after ``max_iterations`` or once the residual drops below ``tol``,
    whichever comes first, so the cost is bounded even as e -> 1.
    For e = 0 the initial guess is already exact.
    """
    E = M if ecc < 0.8 else math.pi
    for _ in range(max_iterations):
        f = E - ecc * math.sin(E) - M
        if abs(f) < tol:
            break
        E -= f / (1.0 - ecc * math.cos(E))
    return E


@njit(cache=True)
def true_anomaly(E: float, ecc: float) -> float:
    return 2.0 * math.atan2(
        math.sqrt(1.0 + ecc) * math.sin(E / 2.0),
        math.sqrt(1.0 - ecc) * math.cos(E / 2.0),
    )


# --------------------------------------------------------------------------- #
#  Positions
# --------------------------------------------------------------------------- #
@njit(cache=True)
def _place(a: float, ecc: float, inc_rad: float, E: float) -> tuple:
    nu = true_anomaly(E, ecc)
    r = a * (1.0 - ecc * math.cos(E))
    x = r * math.cos(nu)
    z_flat = r * math.sin(nu)
    # Rotate about the node axis (+X)
    return x, z_flat * math.sin(inc_rad), z_flat * math.cos(inc_rad)


@njit(cache=True)
def _position(a: float, ecc: float, inc_deg: float, period_s: float, time_s: float,
              max_iterations: int, tol: float) -> np.ndarray:
    M = mean_anomaly(time_s, period_s)
    E = solve_kepler(M, ecc, max_iterations, tol)
    x, y, z = _place(a, ecc, math.radians(inc_deg), E)
    out = np.empty(3)
    out[0] = x
    out[1] = y
    out[2] = z
    return out


@njit(cache=True)
def _positions(a: np.ndarray, ecc: np.ndarray, inc_deg: np.ndarray, period_s: np.ndarray,
               time_s: float, max_iterations: int, tol: float) -> np.ndarray:
    n = a.shape[0]
    out = np.empty((n, 3))
    for k in range(n):
        M = mean_anomaly(time_s, period_s[k])
        E = solve_kepler(M, ecc[k], max_iterations, tol)
        x, y, z = _place(a[k], ecc[k], math.radians(inc_deg[k]), E)
        out[k, 0] = x
        out[k, 1] = y
        out[k, 2] = z
    return out


@njit(cache=True)
def _ellipse(a: float, ecc: float, inc_deg: float, segments: int) -> np.ndarray:
    out = np.empty((segments + 1, 3))
    inc_rad = math.radians(inc_deg)
    for k in range(segments):
        E = TWO_PI * k / segments
        x, y, z = _place(a, ecc, inc_rad, E)
        out[k, 0] = x
        out[k, 1] = y
        out[k, 2] = z
    for j in range(3):
        out[segments, j] = out[0, j]
    return out


def solve_position(elements: OrbitalElements, time_s: float) -> np.ndarray:
    """Parent-centred (3,) position of a body at ``time_s`` seconds."""
    return _position(
        elements.semi_major_axis,
        elements.eccentricity,
        elements.inclination_deg,
        elements.orbital_period,
        float(time_s),
        settings.kepler_max_iterations,
        settings.kepler_tolerance,
    )


def solve_positions(
    a: np.ndarray,
    ecc: np.ndarray,
    inc_deg: np.ndarray,
    period_s: np.ndarray,
    time_s: float,
) -> np.ndarray:
    """Batch form of :func:`solve_position`; rows are independent.

    Parameters
    ----------
    a, ecc, inc_deg, period_s : (N,) element arrays
    time_s : shared evaluation time in seconds

    Returns
    -------
    (N, 3) parent-centred positions
    """
    return _positions(
        np.ascontiguousarray(a, dtype=np.float64),
        np.ascontiguousarray(ecc, dtype=np.float64),
        np.ascontiguousarray(inc_deg, dtype=np.float64),
        np.ascontiguousarray(period_s, dtype=np.float64),
        float(time_s),
        settings.kepler_max_iterations,
        settings.kepler_tolerance,
    )


def orbit_path(elements: OrbitalElements, segments: int | None = None) -> np.ndarray:
    """Sample the full ellipse for orbit-line rendering.

    Returns ``segments + 1`` points; the last repeats the first so the line closes.
    """
    if segments is None:
        segments = settings.orbit_path_segments
    if segments < 3:
        raise ValueError(f"orbit_path needs at least 3 segments, got {segments}")
    return _ellipse(
        elements.semi_major_axis,
        elements.eccentricity,
        elements.inclination_deg,
        int(segments),
    )
