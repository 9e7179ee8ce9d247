"""
Configuration for the concorde_efb engine.

Aircraft constants and fuel policy defaults are module-level frozen
dataclasses. Heuristic choices that differ between historical revisions of
the planner are exposed as named strategies on PlannerSettings, which can be
overridden from the environment.
"""

import os
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Type, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar('E', bound=Enum)

# Flight level limits
MIN_CRUISE_FL = 0
MAX_CRUISE_FL = 590
NON_RVSM_MIN_FL = 410
NON_RVSM_STEP = 40


class SnapTieBreak(Enum):
    """Which ladder level wins when a FL is equidistant from two levels."""

    LOWER = "lower"
    HIGHER = "higher"


class DirectionStrategy(Enum):
    """
    How eastbound/westbound is inferred from departure and arrival.

    BEARING: initial great-circle bearing < 180 is eastbound.
    LONGITUDE_DELTA: sign of the shortest-path longitude difference.
    """

    BEARING = "bearing"
    LONGITUDE_DELTA = "longitude_delta"


class RecommendObjective(Enum):
    """
    Objective used to recommend a cruise level.

    CRUISE_DURATION: highest level whose cruise phase meets the minimum.
    FUEL: lowest trip fuel among levels meeting the minimum.
    """

    CRUISE_DURATION = "cruise_duration"
    FUEL = "fuel"


class LandingCalibration(Enum):
    """Reference landing weight used to scale VLS."""

    STANDARD = 100000.0
    ALTERNATE = 105000.0


@dataclass(frozen=True)
class AircraftLimits:
    """Weights, speeds, fuel and runway figures for one aircraft type."""

    name: str = "Concorde"
    mtow_kg: float = 185066.0
    mlw_kg: float = 111130.0
    fuel_capacity_kg: float = 95681.0
    oew_kg: float = 78700.0
    pax_full_count: int = 100
    pax_mass_kg: float = 95.0
    cruise_mach: float = 2.04
    cruise_tas_kt: float = 1164.0
    burn_kg_per_nm: float = 24.45
    climb_factor: float = 1.7
    descent_factor: float = 0.5
    reheat_minutes_cap: int = 25
    # round(11800 ft * 0.3048)
    min_takeoff_m_at_mtow: float = 3597.0
    min_landing_m_at_mlw: float = 2200.0


CONCORDE = AircraftLimits()


@dataclass(frozen=True)
class FuelPolicy:
    """Default reserve policy applied when a plan request leaves it unset."""

    taxi_kg: float = 2500.0
    contingency_pct: float = 5.0
    final_reserve_kg: float = 3600.0
    trim_tank_kg: float = 0.0


DEFAULT_FUEL_POLICY = FuelPolicy()


@dataclass(frozen=True)
class PlannerSettings:
    """
    Tunable behaviour of the planner.

    Attributes:
        snap_tie_break: Tie-break when snapping to the Non-RVSM ladder
        direction_strategy: Eastbound/westbound inference rule
        recommend_objective: Cruise level recommendation objective
        landing_calibration: Reference weight set for landing speeds
        min_cruise_minutes: Minimum cruise phase for a recommended level
        target_cruise_minutes: Preferred cruise phase, reported when not met
        cache_dir: Directory for downloaded reference CSV files
        http_timeout: Timeout in seconds for source adapters
    """

    snap_tie_break: SnapTieBreak = SnapTieBreak.LOWER
    direction_strategy: DirectionStrategy = DirectionStrategy.BEARING
    recommend_objective: RecommendObjective = RecommendObjective.CRUISE_DURATION
    landing_calibration: LandingCalibration = LandingCalibration.STANDARD
    min_cruise_minutes: float = 15.0
    target_cruise_minutes: float = 18.0
    cache_dir: Optional[str] = None
    http_timeout: int = 15

    def with_overrides(self, **changes) -> 'PlannerSettings':
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> 'PlannerSettings':
        """
        Build settings from CONCORDE_EFB_* environment variables.

        Unknown strategy names are logged and the default is kept.
        """
        defaults = cls()
        timeout = defaults.http_timeout
        raw_timeout = os.getenv("CONCORDE_EFB_HTTP_TIMEOUT")
        if raw_timeout:
            try:
                timeout = int(raw_timeout)
            except ValueError:
                logger.warning(f"Ignoring invalid CONCORDE_EFB_HTTP_TIMEOUT={raw_timeout!r}")

        return cls(
            snap_tie_break=_enum_from_env(
                "CONCORDE_EFB_SNAP_TIE_BREAK", SnapTieBreak, defaults.snap_tie_break),
            direction_strategy=_enum_from_env(
                "CONCORDE_EFB_DIRECTION_STRATEGY", DirectionStrategy, defaults.direction_strategy),
            recommend_objective=_enum_from_env(
                "CONCORDE_EFB_RECOMMEND_OBJECTIVE", RecommendObjective, defaults.recommend_objective),
            landing_calibration=_enum_from_env(
                "CONCORDE_EFB_LANDING_CALIBRATION", LandingCalibration, defaults.landing_calibration),
            cache_dir=os.getenv("CONCORDE_EFB_CACHE_DIR", defaults.cache_dir),
            http_timeout=timeout,
        )


def get_log_level() -> str:
    """Log level for command line tools."""
    return os.getenv("CONCORDE_EFB_LOG_LEVEL", "INFO").upper()


def _enum_from_env(name: str, enum_cls: Type[E], default: E) -> E:
    value = os.getenv(name)
    if not value:
        return default
    key = value.strip().upper()
    if key in enum_cls.__members__:
        return enum_cls[key]
    for member in enum_cls:
        if str(member.value).lower() == value.strip().lower():
            return member
    logger.warning(f"Ignoring unknown {name}={value!r}, using {default.name}")
    return default
