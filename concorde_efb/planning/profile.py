"""Climb, cruise and descent legs of a flight."""

import math
import logging

from ..config import CONCORDE
from ..exceptions import InvalidInputError
from ..models.profile import FlightLeg, FlightLegProfile
from ..utils.numbers import clamp, is_finite_number

logger = logging.getLogger(__name__)


def estimate_climb(alt_ft: float, avg_fpm: float = 2500.0, avg_gs_kt: float = 450.0) -> FlightLeg:
    """
    Climb leg to a cruise altitude.

    time_h = altitude / max(avg_fpm, 100) / 60, dist_nm = time_h * max(avg_gs_kt, 200).
    Negative altitudes count as 0.
    """
    time_h = max(alt_ft, 0.0) / max(avg_fpm, 100.0) / 60.0
    return FlightLeg(time_h=time_h, dist_nm=time_h * max(avg_gs_kt, 200.0))


def estimate_descent(alt_ft: float, avg_gs_kt: float = 420.0, buffer_nm: float = 30.0) -> FlightLeg:
    """
    Descent leg from a cruise altitude.

    3 NM per 1000 ft plus a fixed buffer for the approach.
    """
    dist_nm = max(alt_ft, 0.0) / 300.0 + buffer_nm
    return FlightLeg(time_h=dist_nm / max(avg_gs_kt, 200.0), dist_nm=dist_nm)


def cruise_time_hours(distance_nm: float, tas_kt: float = CONCORDE.cruise_tas_kt) -> float:
    """
    Time to fly a distance at a true airspeed, no wind.

    Raises:
        InvalidInputError: If tas_kt is not positive
    """
    if not is_finite_number(tas_kt) or tas_kt <= 0:
        raise InvalidInputError("TAS must be positive", details=tas_kt)
    return distance_nm / tas_kt


def altitude_burn_factor(fl: float) -> float:
    """
    Fuel burn multiplier for a cruise level.

    1.2 at FL450 falling linearly to 1.0 at FL600. The level is clamped to
    [300, 650] first; non-finite levels are treated as FL580. This is a
    calibration heuristic, not a performance model.
    """
    level = fl if is_finite_number(fl) else 580.0
    level = clamp(level, 300.0, 650.0)
    fraction = clamp((level - 450.0) / (600.0 - 450.0), 0.0, 1.0)
    return 1.2 - 0.2 * fraction


def build_profile(distance_nm: float, fl: float, tas_kt: float = CONCORDE.cruise_tas_kt) -> FlightLegProfile:
    """
    Split a planned distance into climb, cruise and descent.

    Climb and descent are sized from the cruise altitude alone, so on short
    trips they can exceed the planned distance; the cruise leg is then 0.

    Args:
        distance_nm: Planned distance
        fl: Cruise flight level
        tas_kt: Cruise true airspeed

    Returns:
        FlightLegProfile
    """
    if not is_finite_number(distance_nm):
        raise InvalidInputError("Distance must be a finite number", details=distance_nm)
    alt_ft = fl * 100.0
    climb = estimate_climb(alt_ft)
    descent = estimate_descent(alt_ft)
    cruise_nm = max(distance_nm - climb.dist_nm - descent.dist_nm, 0.0)
    cruise = FlightLeg(time_h=cruise_time_hours(cruise_nm, tas_kt), dist_nm=cruise_nm)
    if math.isclose(cruise_nm, 0.0):
        logger.debug(f"No cruise phase at FL{fl:g} over {distance_nm:.0f} NM")
    return FlightLegProfile(climb=climb, cruise=cruise, descent=descent)
