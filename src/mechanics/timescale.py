"""Adaptive time multipliers so slow outer orbits still visibly move."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from catalog.bodies import OrbitalElements


class TimeCategory(str, enum.Enum):
    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"


@dataclass(frozen=True, slots=True)
class AdaptiveTimeSettings:
    fast_threshold_days: float = 30.0  # moons
    medium_threshold_days: float = 365.0  # inner planets
    fast_multiplier: float = 1.0
    medium_multiplier: float = 5.0
    slow_multiplier: float = 20.0


DEFAULT_ADAPTIVE_SETTINGS = AdaptiveTimeSettings()


@dataclass(frozen=True, slots=True)
class AdaptiveTimeResult:
    multiplier: float
    category: TimeCategory
    is_adaptive: bool
    reason: str


def adaptive_time_multiplier(
    elements: OrbitalElements | None,
    cfg: AdaptiveTimeSettings = DEFAULT_ADAPTIVE_SETTINGS,
) -> AdaptiveTimeResult:
    if elements is None:
        return AdaptiveTimeResult(1.0, TimeCategory.FAST, False, "No orbital data available")

    period = elements.period_days
    if period <= cfg.fast_threshold_days:
        category, multiplier = TimeCategory.FAST, cfg.fast_multiplier
    elif period <= cfg.medium_threshold_days:
        category, multiplier = TimeCategory.MEDIUM, cfg.medium_multiplier
    else:
        category, multiplier = TimeCategory.SLOW, cfg.slow_multiplier

    return AdaptiveTimeResult(
        multiplier=multiplier,
        category=category,
        is_adaptive=True,
        reason=f"{period:.1f} day period -> {category.value} object",
    )


def format_orbital_period(period_days: float) -> str:
    if period_days < 1:
        return f"{period_days * 24:.1f}h"
    if period_days < 30:
        return f"{period_days:.1f}d"
    if period_days < 365:
        return f"{period_days / 30.44:.1f}m"
    return f"{period_days / 365.25:.1f}y"
