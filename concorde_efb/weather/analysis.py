"""Weather analysis: flight categories and runway wind components."""

from math import cos, sin, radians
from typing import Optional, Dict

from ..utils.numbers import round_to
from .models import FlightCategory, WindComponentSummary

KM_PER_SM = 1.609344


def flight_category(
    visibility_km: Optional[float],
    ceiling_ft: Optional[float],
    cavok: bool = False,
) -> FlightCategory:
    """
    Determine flight category from ceiling and visibility.

    Uses FAA thresholds; the worst condition (ceiling or visibility)
    determines the category.

    Args:
        visibility_km: Prevailing visibility in km, None if unknown
        ceiling_ft: Lowest BKN/OVC/VV layer in ft, None if no ceiling
        cavok: CAVOK reported

    Returns:
        FlightCategory, UNKNOWN if there is no data at all
    """
    # CAVOK implies VFR
    if cavok:
        return FlightCategory.VFR

    if visibility_km is None and ceiling_ft is None:
        return FlightCategory.UNKNOWN

    vis_cat = None
    if visibility_km is not None:
        vis_sm = visibility_km / KM_PER_SM
        if vis_sm < 1:
            vis_cat = FlightCategory.LIFR
        elif vis_sm < 3:
            vis_cat = FlightCategory.IFR
        elif vis_sm <= 5:
            vis_cat = FlightCategory.MVFR
        else:
            vis_cat = FlightCategory.VFR

    ceil_cat = None
    if ceiling_ft is not None:
        if ceiling_ft < 500:
            ceil_cat = FlightCategory.LIFR
        elif ceiling_ft < 1000:
            ceil_cat = FlightCategory.IFR
        elif ceiling_ft <= 3000:
            ceil_cat = FlightCategory.MVFR
        else:
            ceil_cat = FlightCategory.VFR

    # Return the worst (lowest) category
    if vis_cat is not None and ceil_cat is not None:
        return min(vis_cat, ceil_cat)
    return vis_cat if vis_cat is not None else ceil_cat


def wind_components(
    dir_deg: Optional[float],
    speed_kt: Optional[float],
    runway_heading_deg: float,
) -> WindComponentSummary:
    """
    Headwind and crosswind for a runway.

    theta = (wind direction - runway heading) mod 360;
    headwind = speed * cos(theta), crosswind = |speed * sin(theta)|.
    A positive signed crosswind means wind from the right.

    Args:
        dir_deg: Wind direction in degrees true, None for variable/unknown
        speed_kt: Wind speed in knots, None if unknown
        runway_heading_deg: Runway heading in degrees

    Returns:
        WindComponentSummary; all fields None when direction or speed is unknown
    """
    if dir_deg is None or speed_kt is None or runway_heading_deg is None:
        return WindComponentSummary()

    theta = radians((dir_deg - runway_heading_deg) % 360)
    headwind = round_to(speed_kt * cos(theta), 0.1)
    signed_cross = round_to(speed_kt * sin(theta), 0.1)

    if signed_cross > 0:
        side = "R"
    elif signed_cross < 0:
        side = "L"
    else:
        side = None

    return WindComponentSummary(
        headwind_kt=headwind,
        crosswind_kt=abs(signed_cross),
        crosswind_dir=side,
    )


def wind_components_for_runways(
    dir_deg: Optional[float],
    speed_kt: Optional[float],
    runways: Dict[str, float],
) -> Dict[str, WindComponentSummary]:
    """
    Calculate wind components for multiple runways.

    Args:
        dir_deg: Wind direction in degrees
        speed_kt: Wind speed in knots
        runways: Dict mapping runway ident to heading, e.g. {"27L": 270, "09R": 90}

    Returns:
        Dict mapping runway ident to WindComponentSummary
    """
    return {
        ident: wind_components(dir_deg, speed_kt, heading)
        for ident, heading in runways.items()
    }


def best_runway_for_wind(
    dir_deg: Optional[float],
    speed_kt: Optional[float],
    runways: Dict[str, float],
) -> Optional[str]:
    """Runway ident with the largest headwind component, None if wind is unknown."""
    components = wind_components_for_runways(dir_deg, speed_kt, runways)
    known = [(ident, c) for ident, c in components.items() if c.headwind_kt is not None]
    if not known:
        return None
    return max(known, key=lambda item: item[1].headwind_kt)[0]
