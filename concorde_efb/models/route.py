"""Route resolution data models."""

from dataclasses import dataclass, field
from typing import List, Optional

from .flight_level import Direction
from .navpoint import NavPoint


@dataclass(frozen=True)
class RoutePoint:
    """
    A resolved point along a route.

    Attributes:
        label: Token the point was resolved from
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        kind: How it was resolved ("latlon", "airport" or "navaid")
    """
    label: str
    latitude: float
    longitude: float
    kind: str = "navaid"

    @property
    def navpoint(self) -> NavPoint:
        """Get NavPoint for distance calculations."""
        return NavPoint(latitude=self.latitude, longitude=self.longitude, name=self.label)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            'label': self.label,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'kind': self.kind,
        }


@dataclass(frozen=True)
class RecognizedTokens:
    """Route tokens that did not become points."""
    procedures: List[str] = field(default_factory=list)
    airways: List[str] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'procedures': list(self.procedures),
            'airways': list(self.airways),
            'unresolved': list(self.unresolved),
        }


@dataclass(frozen=True)
class RouteResolution:
    """Points and classified tokens of one route string evaluation."""
    points: List[RoutePoint] = field(default_factory=list)
    recognized: RecognizedTokens = field(default_factory=RecognizedTokens)

    def to_dict(self) -> dict:
        return {
            'points': [p.to_dict() for p in self.points],
            'recognized': self.recognized.to_dict(),
        }


@dataclass(frozen=True)
class RouteResult:
    """
    Routed distance between two airports.

    Attributes:
        resolution: Resolved points and classified tokens
        direct_nm: Great-circle distance departure to arrival
        raw_nm: Sum of legs through the resolved points
        distance_nm: raw_nm inflated by the detour factor
        detour_factor: Fractional inflation applied (0 when none)
        direction: Direction hint for flight level selection
    """
    resolution: RouteResolution
    direct_nm: float
    raw_nm: float
    distance_nm: float
    detour_factor: float = 0.0
    direction: Optional[Direction] = None

    @property
    def approximate(self) -> bool:
        """True when the distance is an estimate rather than point-to-point geometry."""
        return self.detour_factor > 0

    def summary(self) -> str:
        """Notice text describing how the distance was obtained."""
        recognized = self.resolution.recognized
        parts = [f"Route distance {round(self.distance_nm):,} NM."]
        if recognized.procedures:
            parts.append(f"{len(recognized.procedures)} procedure tokens ignored.")
        if recognized.airways:
            parts.append(f"{len(recognized.airways)} airway tokens ignored.")
        if recognized.unresolved:
            parts.append(
                f"{len(recognized.unresolved)} unresolved tokens ignored "
                "(likely fixes/waypoints not in the database)."
            )
        if self.approximate:
            parts.append(
                f"Distance is approximate: +{self.detour_factor * 100:.0f}% added for airways/procedures."
            )
        return " ".join(parts)

    def to_dict(self) -> dict:
        return {
            'resolution': self.resolution.to_dict(),
            'direct_nm': self.direct_nm,
            'raw_nm': self.raw_nm,
            'distance_nm': self.distance_nm,
            'detour_factor': self.detour_factor,
            'approximate': self.approximate,
            'direction': self.direction.value if self.direction else None,
        }
