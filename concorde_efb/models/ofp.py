"""Normalized fields extracted from a third-party OFP (operational flight plan)."""

from dataclasses import dataclass, fields
from typing import Optional


@dataclass(frozen=True)
class OFPExtract:
    """
    Canonical OFP fields.

    Every field is optional and left as None when it could not be
    recovered; nothing is defaulted.
    """

    origin_icao: Optional[str] = None
    dest_icao: Optional[str] = None
    dep_runway: Optional[str] = None
    arr_runway: Optional[str] = None
    alternate_icao: Optional[str] = None
    route: Optional[str] = None
    distance_nm: Optional[float] = None
    cruise_fl: Optional[int] = None
    dep_metar: Optional[str] = None
    arr_metar: Optional[str] = None
    call_sign: Optional[str] = None
    registration: Optional[str] = None
    pax_count: Optional[int] = None
    pax_weight_kg: Optional[float] = None

    @property
    def has_key_fields(self) -> bool:
        """At least one of origin, destination, route or distance is known."""
        return any(v is not None for v in (self.origin_icao, self.dest_icao, self.route, self.distance_nm))

    def recovered_fields(self):
        """Names of the fields that were recovered."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    def to_dict(self) -> dict:
        """Serialize the recovered fields only."""
        return {name: getattr(self, name) for name in self.recovered_fields()}
