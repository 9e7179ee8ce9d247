"""
Fuel calculations: trip fuel from a flight profile, block fuel with
reserves, reheat time against its cap, endurance and tank capacity.
"""

import math
import logging
from typing import Optional

from ..config import CONCORDE, AircraftLimits
from ..models.profile import (
    EnduranceCheck,
    FlightLegProfile,
    FuelBreakdown,
    FuelCapacityCheck,
    ReheatSummary,
)
from ..utils.numbers import round_half_up
from .profile import altitude_burn_factor, build_profile

logger = logging.getLogger(__name__)


def trip_fuel_kg(
    legs: FlightLegProfile,
    burn_kg_per_nm: float,
    climb_factor: float = CONCORDE.climb_factor,
    descent_factor: float = CONCORDE.descent_factor,
) -> float:
    """
    Trip fuel for a profile.

    Climb burns climb_factor times the cruise rate, descent descent_factor
    times. The result is never negative.
    """
    climb_kg = legs.climb.dist_nm * burn_kg_per_nm * climb_factor
    cruise_kg = legs.cruise.dist_nm * burn_kg_per_nm
    descent_kg = legs.descent.dist_nm * burn_kg_per_nm * descent_factor
    return max(climb_kg + cruise_kg + descent_kg, 0.0)


def trip_fuel_for_distance(
    distance_nm: float,
    fl: float,
    burn_kg_per_nm: Optional[float] = None,
    aircraft: AircraftLimits = CONCORDE,
) -> float:
    """
    Trip fuel for a distance flown at a cruise level.

    The base burn per NM is scaled by altitude_burn_factor(fl), so higher
    levels are cheaper for the same distance.
    """
    base = aircraft.burn_kg_per_nm if burn_kg_per_nm is None else burn_kg_per_nm
    legs = build_profile(distance_nm, fl, aircraft.cruise_tas_kt)
    return trip_fuel_kg(
        legs,
        base * altitude_burn_factor(fl),
        climb_factor=aircraft.climb_factor,
        descent_factor=aircraft.descent_factor,
    )


def block_fuel(
    trip_kg: float,
    taxi_kg: float = 0.0,
    contingency_pct: float = 0.0,
    final_reserve_kg: float = 0.0,
    alternate_nm: float = 0.0,
    burn_kg_per_nm: float = CONCORDE.burn_kg_per_nm,
) -> FuelBreakdown:
    """
    Block fuel and its components.

    Args:
        trip_kg: Trip fuel
        taxi_kg: Taxi fuel
        contingency_pct: Contingency as a percentage of trip fuel (negative counts as 0)
        final_reserve_kg: Final reserve fuel
        alternate_nm: Distance destination to alternate (negative counts as 0)
        burn_kg_per_nm: Burn rate used for the alternate leg

    Returns:
        FuelBreakdown with block_kg the sum of all components
    """
    taxi = taxi_kg or 0.0
    final_reserve = final_reserve_kg or 0.0
    contingency = trip_kg * max(contingency_pct or 0.0, 0.0) / 100.0
    alternate = max(alternate_nm or 0.0, 0.0) * burn_kg_per_nm
    return FuelBreakdown(
        trip_kg=trip_kg,
        taxi_kg=taxi,
        contingency_kg=contingency,
        final_reserve_kg=final_reserve,
        alternate_kg=alternate,
        block_kg=trip_kg + taxi + contingency + final_reserve + alternate,
    )


def reheat_guard(climb_time_hours: float, cap_minutes: int = CONCORDE.reheat_minutes_cap) -> ReheatSummary:
    """Compare the climb (reheat) time, rounded to whole minutes, against its cap."""
    requested = round_half_up(climb_time_hours * 60.0)
    return ReheatSummary(
        requested_minutes=requested,
        cap_minutes=cap_minutes,
        within_cap=requested <= cap_minutes,
    )


def average_burn_kg_per_hour(
    trip_kg: float,
    ete_hours: float,
    fl: float,
    aircraft: AircraftLimits = CONCORDE,
) -> float:
    """
    Average hourly burn over the trip.

    Falls back to the cruise burn (per NM, scaled for altitude, times TAS)
    when the flight time is zero.
    """
    if ete_hours > 0:
        return trip_kg / ete_hours
    return aircraft.burn_kg_per_nm * altitude_burn_factor(fl) * aircraft.cruise_tas_kt


def endurance_check(
    fuel_kg: float,
    burn_kg_per_hour: float,
    ete_hours: float,
    breakdown: FuelBreakdown,
) -> EnduranceCheck:
    """
    Airborne endurance against flight time plus reserve time.

    Reserve time is the contingency, final reserve and alternate fuel burned
    at the same hourly rate. The check is advisory; a non-positive burn
    gives zero endurance and meets=False rather than an error.

    Args:
        fuel_kg: Fuel available once airborne (total less taxi)
        burn_kg_per_hour: Average hourly burn
        ete_hours: Estimated time en route
        breakdown: Fuel breakdown providing the reserve components
    """
    if burn_kg_per_hour <= 0:
        logger.debug(f"Endurance check with non-positive burn {burn_kg_per_hour}")
        return EnduranceCheck(endurance_hours=0.0, reserve_hours=0.0, required_hours=ete_hours, meets=False)
    endurance = max(fuel_kg, 0.0) / burn_kg_per_hour
    reserve = breakdown.reserve_kg / burn_kg_per_hour
    required = ete_hours + reserve
    return EnduranceCheck(
        endurance_hours=endurance,
        reserve_hours=reserve,
        required_hours=required,
        meets=endurance >= required or math.isclose(endurance, required),
    )


def fuel_capacity_check(total_fuel_kg: float, capacity_kg: float = CONCORDE.fuel_capacity_kg) -> FuelCapacityCheck:
    """Total fuel required (block plus trim) against the tank capacity."""
    return FuelCapacityCheck(
        total_kg=total_fuel_kg,
        capacity_kg=capacity_kg,
        within_capacity=total_fuel_kg <= capacity_kg,
        excess_kg=max(total_fuel_kg - capacity_kg, 0.0),
    )
