from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Runway:
    """
    One landing direction of a runway.

    Attributes:
        id: Runway designator as published (e.g. "27L")
        heading_deg: True heading in degrees
        length_m: Usable length in metres (0 when unknown)
        elevation_ft: Threshold elevation, if known
    """

    id: str
    heading_deg: float = 0.0
    length_m: float = 0.0
    elevation_ft: Optional[float] = None

    def __post_init__(self):
        if self.length_m is None or self.length_m < 0:
            object.__setattr__(self, 'length_m', 0.0)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'heading_deg': self.heading_deg,
            'length_m': self.length_m,
            'elevation_ft': self.elevation_ft,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Runway':
        """Create instance from dictionary."""
        known_fields = {field for field in cls.__dataclass_fields__}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        # Convert numeric fields from strings if needed
        for field in ('heading_deg', 'length_m', 'elevation_ft'):
            value = filtered_data.get(field)
            if value is not None:
                try:
                    filtered_data[field] = float(value)
                except (ValueError, TypeError):
                    filtered_data[field] = None if field == 'elevation_ft' else 0.0

        return cls(**filtered_data)

    def __str__(self):
        return f"Runway {self.id} ({self.length_m:.0f}m, HDG {self.heading_deg:.0f})"
