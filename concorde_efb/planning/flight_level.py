"""
Flight level compliance.

Above FL410 Concorde flew Non-RVSM levels with 2000 ft separation:
eastbound 410, 450, 490, ... and westbound 430, 470, 510, ... up to the
cruise ceiling. Below FL410 any integer level is accepted.
"""

import logging
from typing import List, Optional, Tuple, Union

from ..config import (
    CONCORDE,
    MAX_CRUISE_FL,
    MIN_CRUISE_FL,
    NON_RVSM_MIN_FL,
    NON_RVSM_STEP,
    AircraftLimits,
    DirectionStrategy,
    RecommendObjective,
    SnapTieBreak,
)
from ..exceptions import InvalidInputError
from ..models.flight_level import (
    CruiseFLRecommendation,
    Direction,
    FlightLevelCheck,
    FlightLevelViolation,
)
from ..models.navpoint import NavPoint, initial_bearing_deg
from ..utils.numbers import clamp, is_finite_number, round_half_up
from .fuel import trip_fuel_for_distance
from .profile import build_profile

logger = logging.getLogger(__name__)

# Candidate levels below the Non-RVSM band considered for recommendations
LOW_CANDIDATES = tuple(range(250, 400, 10))

DirectionLike = Union[Direction, str]


def clamp_fl(value: float) -> int:
    """
    Round to the nearest integer level and clamp into [0, MAX_CRUISE_FL].

    Non-numeric or non-finite input clamps to 0.
    """
    if not is_finite_number(value):
        return MIN_CRUISE_FL
    return int(clamp(round_half_up(value), MIN_CRUISE_FL, MAX_CRUISE_FL))


def non_rvsm_ladder(direction: DirectionLike, max_fl: int = MAX_CRUISE_FL) -> List[int]:
    """
    Valid Non-RVSM levels for a direction of flight.

    Examples:
        >>> non_rvsm_ladder("E")
        [410, 450, 490, 530, 570]
        >>> non_rvsm_ladder(Direction.WEST)
        [430, 470, 510, 550, 590]
    """
    start = NON_RVSM_MIN_FL if _coerce(direction) is Direction.EAST else NON_RVSM_MIN_FL + NON_RVSM_STEP // 2
    return list(range(start, max_fl + 1, NON_RVSM_STEP))


def _coerce(direction: DirectionLike) -> Direction:
    try:
        return Direction.coerce(direction)
    except ValueError as e:
        raise InvalidInputError(str(e), details=direction) from e


def _nearest(fl: float, ladder: List[int], count: int, tie_break: SnapTieBreak) -> List[int]:
    sign = -1 if tie_break is SnapTieBreak.HIGHER else 1
    return sorted(ladder, key=lambda level: (abs(level - fl), sign * level))[:count]


def validate_fl(fl: float, direction: DirectionLike) -> FlightLevelCheck:
    """
    Check a cruise level against the ceiling and the Non-RVSM ladder.

    A level above the ceiling is reported as ABOVE_CEILING even when it is
    also off the ladder. Off-ladder levels get the two nearest ladder levels
    as suggestions, closest first and the lower one on a tie.

    Args:
        fl: Flight level to check
        direction: Direction of flight ("E"/"W" or Direction)

    Returns:
        FlightLevelCheck; ok is True when compliant
    """
    if not is_finite_number(fl):
        raise InvalidInputError("Flight level must be a finite number", details=fl)
    ladder = non_rvsm_ladder(direction)
    if fl > MAX_CRUISE_FL:
        return FlightLevelCheck(
            fl=fl,
            violation=FlightLevelViolation.ABOVE_CEILING,
            suggestions=[max(ladder)],
        )
    if fl >= NON_RVSM_MIN_FL and fl not in ladder:
        return FlightLevelCheck(
            fl=fl,
            violation=FlightLevelViolation.NON_RVSM,
            suggestions=_nearest(fl, ladder, 2, SnapTieBreak.LOWER),
        )
    return FlightLevelCheck(fl=fl)


def snap_fl(fl: float, direction: DirectionLike, tie_break: SnapTieBreak = SnapTieBreak.LOWER) -> float:
    """
    Snap a level at or above FL410 to the nearest ladder level.

    Levels below FL410 are returned unchanged. Levels above the ceiling
    snap to the highest ladder level.
    """
    if not is_finite_number(fl):
        raise InvalidInputError("Flight level must be a finite number", details=fl)
    if fl < NON_RVSM_MIN_FL:
        return fl
    return _nearest(fl, non_rvsm_ladder(direction), 1, tie_break)[0]


def infer_direction(
    dep: Optional[NavPoint],
    arr: Optional[NavPoint],
    strategy: DirectionStrategy = DirectionStrategy.BEARING,
) -> Optional[Direction]:
    """
    Eastbound or westbound from departure to arrival.

    BEARING: initial bearing < 180 is eastbound.
    LONGITUDE_DELTA: shortest-path longitude difference >= 0 is eastbound.

    Returns:
        Direction, or None when either endpoint is missing
    """
    if dep is None or arr is None:
        return None
    if strategy is DirectionStrategy.LONGITUDE_DELTA:
        delta = ((arr.longitude - dep.longitude + 540.0) % 360.0) - 180.0
        return Direction.EAST if delta >= 0 else Direction.WEST
    return Direction.EAST if initial_bearing_deg(dep, arr) < 180.0 else Direction.WEST


def normalize_cruise_fl(
    requested: float,
    direction: Optional[DirectionLike],
    tie_break: SnapTieBreak = SnapTieBreak.LOWER,
) -> Tuple[int, List[str]]:
    """
    Turn a user-entered level into a compliant one.

    The level is clamped, then snapped onto the ladder when it is at or
    above FL410 and the direction is known.

    Returns:
        Tuple of (final level, notices describing each adjustment)
    """
    notices = []
    if not is_finite_number(requested):
        raise InvalidInputError("Requested flight level must be a finite number", details=requested)
    fl = clamp_fl(requested)
    if requested < MIN_CRUISE_FL or requested > MAX_CRUISE_FL:
        notices.append(f"Clamped to FL{fl} (allowed FL{MIN_CRUISE_FL}-FL{MAX_CRUISE_FL}).")
    if direction is not None and fl >= NON_RVSM_MIN_FL:
        direction = _coerce(direction)
        snapped = int(snap_fl(fl, direction, tie_break))
        if snapped != fl:
            notices.append(f"Adjusted to Non-RVSM FL{snapped} ({direction.label}).")
            fl = snapped
    return fl, notices


def recommend_cruise_fl(
    distance_nm: float,
    direction: DirectionLike,
    min_cruise_minutes: float = 15.0,
    target_cruise_minutes: float = 18.0,
    objective: RecommendObjective = RecommendObjective.CRUISE_DURATION,
    aircraft: AircraftLimits = CONCORDE,
) -> CruiseFLRecommendation:
    """
    Recommend a cruise level for a trip.

    Candidates are FL250-FL390 in steps of 10 plus the direction's Non-RVSM
    ladder. With CRUISE_DURATION the highest candidate whose cruise phase
    lasts at least min_cruise_minutes wins; with FUEL the candidate with the
    lowest trip fuel among those meeting the minimum wins. When no
    candidate meets the minimum, the one with the longest cruise phase is
    returned with meets_minimum False.

    Args:
        distance_nm: Planned distance
        direction: Direction of flight
        min_cruise_minutes: Shortest acceptable cruise phase
        target_cruise_minutes: Preferred cruise phase, mentioned in the note when not reached
        objective: Selection rule
        aircraft: Aircraft figures (cruise TAS, burn)

    Returns:
        CruiseFLRecommendation whose level is always ladder-compliant
    """
    if not is_finite_number(distance_nm):
        raise InvalidInputError("Distance must be a finite number", details=distance_nm)
    direction = _coerce(direction)
    distance = max(distance_nm, 0.0)
    candidates = sorted(set(LOW_CANDIDATES) | set(non_rvsm_ladder(direction)), reverse=True)

    minutes = {}
    for fl in candidates:
        profile = build_profile(distance, fl, aircraft.cruise_tas_kt)
        minutes[fl] = profile.cruise.time_h * 60.0

    qualifying = [fl for fl in candidates if minutes[fl] >= min_cruise_minutes]
    if not qualifying:
        best = max(candidates, key=lambda fl: (minutes[fl], -fl))
        logger.debug(f"No level gives {min_cruise_minutes} min cruise over {distance:.0f} NM, using FL{best}")
        return CruiseFLRecommendation(
            fl=best,
            cruise_minutes=minutes[best],
            meets_minimum=False,
            note=(
                f"FL{best} gives the longest cruise ({minutes[best]:.0f} min), "
                f"below the {min_cruise_minutes:.0f} min minimum."
            ),
        )

    if objective is RecommendObjective.FUEL:
        best = min(
            qualifying,
            key=lambda fl: (trip_fuel_for_distance(distance, fl, aircraft=aircraft), -fl),
        )
        note = f"FL{best} minimises trip fuel ({direction.label})."
    else:
        best = qualifying[0]
        note = f"FL{best} is the highest level with at least {min_cruise_minutes:.0f} min cruise ({direction.label})."

    if minutes[best] < target_cruise_minutes:
        note += f" Cruise {minutes[best]:.0f} min is under the {target_cruise_minutes:.0f} min target."
    return CruiseFLRecommendation(fl=best, cruise_minutes=minutes[best], meets_minimum=True, note=note)
