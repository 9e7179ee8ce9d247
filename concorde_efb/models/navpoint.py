#!/usr/bin/env python3

import math
from typing import Optional, Tuple, Union
from dataclasses import dataclass

from ..exceptions import InvalidInputError

EARTH_RADIUS_KM = 6371.0088
NM_PER_KM = 0.539957
M_PER_FT = 0.3048


@dataclass(frozen=True)
class NavPoint:
    """
    A geographic coordinate with an optional label.

    All coordinates are stored in decimal degrees:
    - Latitude: -90 to +90 degrees (negative for South, positive for North)
    - Longitude: conceptually wraps at +/-180 degrees

    Distances are in nautical miles, derived from the mean Earth radius
    (6371.0088 km) and 0.539957 NM per km.
    Bearings are in degrees (0-360, where 0/360 is North, 90 is East, etc.)
    """

    latitude: float  # Decimal degrees, -90 to +90
    longitude: float  # Decimal degrees
    name: Optional[str] = None  # Optional identifier for the point

    def __post_init__(self):
        """Validate coordinates after initialization."""
        for label, value in (('latitude', self.latitude), ('longitude', self.longitude)):
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidInputError(f"{label} must be a finite number", details=value)
        if not -90 <= self.latitude <= 90:
            raise InvalidInputError(f"Latitude must be between -90 and 90 degrees, got {self.latitude}")

    def distance_to(self, other: 'NavPoint') -> float:
        """Great-circle distance to another point in nautical miles."""
        return distance_nm(self, other)

    def bearing_to(self, other: 'NavPoint') -> float:
        """Initial great-circle bearing to another point in degrees [0, 360)."""
        return initial_bearing_deg(self, other)

    def haversine_distance(self, other: 'NavPoint') -> Tuple[float, float]:
        """
        Calculate the bearing and distance to another NavPoint.

        Returns:
            Tuple of (bearing in degrees, distance in nautical miles)
        """
        return initial_bearing_deg(self, other), distance_nm(self, other)

    def __str__(self) -> str:
        """String representation of the NavPoint."""
        name_str = f"{self.name} " if self.name else ""
        return f"{name_str}({self.latitude}, {self.longitude})"


def great_circle_nm(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine great-circle distance between two coordinates.

    Args:
        lat1, lon1: First point in decimal degrees
        lat2, lon2: Second point in decimal degrees

    Returns:
        Distance in nautical miles
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push a slightly above 1 for antipodal points
    a = min(1.0, a)
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a)) * NM_PER_KM


def distance_nm(a: NavPoint, b: NavPoint) -> float:
    """Great-circle distance between two NavPoints in nautical miles."""
    return great_circle_nm(a.latitude, a.longitude, b.latitude, b.longitude)


def initial_bearing_deg(a: NavPoint, b: NavPoint) -> float:
    """
    Forward azimuth from a to b.

    Returns:
        Bearing in degrees, normalized to [0, 360)
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dlambda = math.radians(b.longitude - a.longitude)

    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # -0.0 % 360 and tiny negatives can land exactly on 360.0
    return 0.0 if bearing >= 360.0 else bearing


def ft_to_m(value: Union[float, int, str, None]) -> float:
    """
    Convert feet to metres.

    Accepts numbers or numeric strings; blank or missing values count as 0.
    Non-numeric strings give NaN so callers can detect them with math.isfinite.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) * M_PER_FT
    text = str(value if value is not None else '').strip()
    if not text:
        return 0.0
    try:
        return float(text) * M_PER_FT
    except ValueError:
        return math.nan
