from dataclasses import dataclass

from .navpoint import NavPoint


@dataclass(frozen=True)
class Navaid:
    """
    Radio navigation aid or named fix.

    Idents are not unique worldwide; the reference data keeps every
    candidate for an ident and the route resolver picks one.
    """

    ident: str
    latitude: float
    longitude: float
    type: str = "NAVAID"
    name: str = ""

    @property
    def navpoint(self) -> NavPoint:
        return NavPoint(latitude=self.latitude, longitude=self.longitude, name=self.ident)

    def to_dict(self) -> dict:
        return {
            'ident': self.ident,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'type': self.type,
            'name': self.name,
        }
