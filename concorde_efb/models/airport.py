from dataclasses import dataclass, field
from typing import Optional, Tuple

from .navpoint import NavPoint
from .runway import Runway


@dataclass(frozen=True)
class Airport:
    """
    Airport reference record.

    Loaded once from the reference database and never modified afterwards,
    so runways are kept as a tuple.
    """

    ident: str
    name: str
    latitude: float
    longitude: float
    elevation_ft: Optional[float] = None
    runways: Tuple[Runway, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.runways, tuple):
            object.__setattr__(self, 'runways', tuple(self.runways))

    @property
    def navpoint(self) -> NavPoint:
        """NavPoint for distance and bearing calculations."""
        return NavPoint(latitude=self.latitude, longitude=self.longitude, name=self.ident)

    def get_runway(self, runway_id: str) -> Optional[Runway]:
        """Find a runway by designator (case-insensitive)."""
        wanted = (runway_id or '').strip().upper()
        for runway in self.runways:
            if runway.id.upper() == wanted:
                return runway
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'ident': self.ident,
            'name': self.name,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'elevation_ft': self.elevation_ft,
            'runways': [r.to_dict() for r in self.runways],
        }

    def __repr__(self):
        return f"Airport(ident='{self.ident}', runways={len(self.runways)})"
