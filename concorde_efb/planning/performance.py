"""
Runway performance: weight-scaled V-speeds and runway length feasibility.

Required lengths scale from a published figure at MTOW (take-off) or MLW
(landing). These are planning estimates, not certified performance data.
"""

import math
import logging
from typing import Iterable, Optional

from ..config import CONCORDE, AircraftLimits, LandingCalibration
from ..models.airport import Airport
from ..models.performance import LandingSpeeds, RunwayFeasibility, TakeoffSpeeds
from ..models.runway import Runway
from ..utils.numbers import clamp, is_finite_number, round_half_up

logger = logging.getLogger(__name__)

TAKEOFF_REFERENCE_KG = 170000.0
TAKEOFF_BASE_KT = (180, 195, 220)
TAKEOFF_FLOOR_KT = (160, 170, 190)

VLS_BASE_KT = 175
VLS_FLOOR_KT = 170
VAPP_OFFSET_KT = 15
VAPP_FLOOR_KT = 185


def weight_scale(actual: float, reference: float) -> float:
    """sqrt(actual / reference), or 1 when either weight is non-finite or not positive."""
    if not is_finite_number(actual) or actual <= 0:
        return 1.0
    if not is_finite_number(reference) or reference <= 0:
        return 1.0
    return math.sqrt(actual / reference)


def takeoff_speeds(tow_kg: float) -> TakeoffSpeeds:
    """V1, VR and V2 scaled from the 170 t reference weight, each floored."""
    scale = weight_scale(tow_kg, TAKEOFF_REFERENCE_KG)
    v1, vr, v2 = (
        max(floor, round_half_up(base * scale))
        for base, floor in zip(TAKEOFF_BASE_KT, TAKEOFF_FLOOR_KT)
    )
    return TakeoffSpeeds(v1=v1, vr=vr, v2=v2)


def landing_speeds(lw_kg: float, calibration: LandingCalibration = LandingCalibration.STANDARD) -> LandingSpeeds:
    """
    VLS scaled from the calibration reference weight, VAPP = VLS + 15.

    Args:
        lw_kg: Landing weight
        calibration: Reference weight set (STANDARD 100 t, ALTERNATE 105 t)
    """
    vls = max(VLS_FLOOR_KT, round_half_up(VLS_BASE_KT * weight_scale(lw_kg, calibration.value)))
    vapp = max(VAPP_FLOOR_KT, vls + VAPP_OFFSET_KT)
    return LandingSpeeds(vls=vls, vapp=vapp)


def takeoff_feasible(runway_length_m: float, tow_kg: float, aircraft: AircraftLimits = CONCORDE) -> RunwayFeasibility:
    """
    Estimated take-off run against the available length.

    required = requirement at MTOW * clamp(TOW / MTOW, 0.5, 1.2)
    """
    ratio = clamp(tow_kg / aircraft.mtow_kg, 0.5, 1.2)
    required = aircraft.min_takeoff_m_at_mtow * ratio
    return RunwayFeasibility(
        required_length_m_est=required,
        runway_length_m=runway_length_m,
        feasible=runway_length_m >= required,
    )


def landing_feasible(runway_length_m: float, lw_kg: float, aircraft: AircraftLimits = CONCORDE) -> RunwayFeasibility:
    """
    Estimated landing distance against the available length.

    required = requirement at MLW * clamp(LW / MLW, 0.6, 1.3) ** 1.15.
    A missing or zero landing weight is taken as MLW.
    """
    weight = lw_kg if is_finite_number(lw_kg) and lw_kg else aircraft.mlw_kg
    ratio = clamp(weight / aircraft.mlw_kg, 0.6, 1.3)
    required = aircraft.min_landing_m_at_mlw * ratio ** 1.15
    return RunwayFeasibility(
        required_length_m_est=required,
        runway_length_m=runway_length_m,
        feasible=runway_length_m >= required,
    )


def pick_longest_runway(runways: Optional[Iterable[Runway]]) -> Optional[Runway]:
    """Longest runway by length_m; the first one wins on equal lengths."""
    best = None
    for runway in runways or ():
        if best is None or (runway.length_m or 0) > (best.length_m or 0):
            best = runway
    return best


def find_runway(airport: Optional[Airport], runway_id: Optional[str] = None) -> Optional[Runway]:
    """
    Runway by designator, falling back to the longest runway.

    Returns:
        Runway, or None when the airport is unknown or has no runways
    """
    if airport is None:
        return None
    if runway_id:
        runway = airport.get_runway(runway_id)
        if runway is not None:
            return runway
        logger.info(f"Runway {runway_id} not found at {airport.ident}, using longest runway")
    return pick_longest_runway(airport.runways)


def takeoff_weight_kg(
    total_fuel_kg: float,
    pax_count: Optional[int] = None,
    pax_mass_kg: Optional[float] = None,
    aircraft: AircraftLimits = CONCORDE,
) -> float:
    """
    Take-off weight: OEW + payload + fuel, capped at MTOW.

    Payload defaults to a full cabin at the standard passenger mass.
    """
    count = aircraft.pax_full_count if pax_count is None else pax_count
    mass = aircraft.pax_mass_kg if pax_mass_kg is None else pax_mass_kg
    payload = max(count, 0) * max(mass, 0.0)
    return min(aircraft.oew_kg + payload + max(total_fuel_kg, 0.0), aircraft.mtow_kg)


def landing_weight_kg(tow_kg: float, trip_kg: float) -> float:
    """Take-off weight less trip fuel, never negative."""
    return max(tow_kg - trip_kg, 0.0)
