"""Weather data models."""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional


class FlightCategory(Enum):
    """
    FAA flight category based on ceiling and visibility.

    Ordered from worst to best: LIFR < IFR < MVFR < VFR.
    UNKNOWN is used when neither visibility nor ceiling can be read and
    sorts below every known category.

    Thresholds (ceiling OR visibility, whichever is worse):
        LIFR:  visibility < 1 SM  or  ceiling < 500 ft
        IFR:   1 <= vis < 3 SM    or  500 <= ceiling < 1000 ft
        MVFR:  3 <= vis <= 5 SM   or  1000 <= ceiling <= 3000 ft
        VFR:   visibility > 5 SM  and ceiling > 3000 ft
    """

    UNKNOWN = "UNKNOWN"
    LIFR = "LIFR"
    IFR = "IFR"
    MVFR = "MVFR"
    VFR = "VFR"

    @property
    def order(self) -> int:
        """Numeric ordering from worst (0) to best (3), -1 for UNKNOWN."""
        return _CATEGORY_ORDER[self]

    def __lt__(self, other: 'FlightCategory') -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.order < other.order

    def __le__(self, other: 'FlightCategory') -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.order <= other.order

    def __gt__(self, other: 'FlightCategory') -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.order > other.order

    def __ge__(self, other: 'FlightCategory') -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.order >= other.order


_CATEGORY_ORDER = {
    FlightCategory.UNKNOWN: -1,
    FlightCategory.LIFR: 0,
    FlightCategory.IFR: 1,
    FlightCategory.MVFR: 2,
    FlightCategory.VFR: 3,
}


@dataclass(frozen=True)
class WindReport:
    """
    Surface wind from a METAR.

    dir_deg is None for variable (VRB) wind; every field is None when no
    wind group was found.
    """

    dir_deg: Optional[int] = None
    speed_kt: Optional[int] = None
    gust_kt: Optional[int] = None

    @property
    def variable(self) -> bool:
        return self.dir_deg is None and self.speed_kt is not None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class WindComponentSummary:
    """
    Wind components relative to a runway, in knots rounded to 0.1.

    Positive headwind means wind from ahead. crosswind_kt is the magnitude;
    crosswind_dir is "R" or "L" for the side the wind comes from, None when
    there is no crosswind or the inputs were missing.
    """

    headwind_kt: Optional[float] = None
    crosswind_kt: Optional[float] = None
    crosswind_dir: Optional[str] = None

    @property
    def tailwind(self) -> bool:
        return self.headwind_kt is not None and self.headwind_kt < 0

    def within_limits(self, max_crosswind_kt: float = 20.0, max_tailwind_kt: float = 10.0) -> bool:
        """
        Check if wind components are within limits.

        Unknown components are treated as within limits.
        """
        if self.crosswind_kt is not None and self.crosswind_kt > max_crosswind_kt:
            return False
        if self.headwind_kt is not None and self.headwind_kt < 0 and abs(self.headwind_kt) > max_tailwind_kt:
            return False
        return True

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MetarReport:
    """
    Decoded METAR.

    Every field is optional; a report decoded from garbage has only
    raw_text set and an UNKNOWN flight category.
    """

    raw_text: str = ""
    station: Optional[str] = None
    wind: WindReport = WindReport()
    visibility_km: Optional[float] = None
    ceiling_ft: Optional[int] = None
    temperature_c: Optional[int] = None
    dewpoint_c: Optional[int] = None
    qnh_hpa: Optional[int] = None
    weather: Optional[str] = None
    cavok: bool = False
    flight_category: FlightCategory = FlightCategory.UNKNOWN

    def to_dict(self) -> dict:
        return {
            'raw_text': self.raw_text,
            'station': self.station,
            'wind': self.wind.to_dict(),
            'visibility_km': self.visibility_km,
            'ceiling_ft': self.ceiling_ft,
            'temperature_c': self.temperature_c,
            'dewpoint_c': self.dewpoint_c,
            'qnh_hpa': self.qnh_hpa,
            'weather': self.weather,
            'cavok': self.cavok,
            'flight_category': self.flight_category.value,
        }
