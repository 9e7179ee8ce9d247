"""Takeoff and landing performance records."""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class TakeoffSpeeds:
    """Takeoff speeds in knots IAS."""

    v1: int
    vr: int
    v2: int

    def to_dict(self) -> dict:
        return {'V1': self.v1, 'VR': self.vr, 'V2': self.v2}


@dataclass(frozen=True)
class LandingSpeeds:
    """Landing speeds in knots IAS."""

    vls: int
    vapp: int

    def to_dict(self) -> dict:
        return {'VLS': self.vls, 'VAPP': self.vapp}


@dataclass(frozen=True)
class RunwayFeasibility:
    """Estimated runway requirement against the available length, in metres."""

    required_length_m_est: float
    runway_length_m: float
    feasible: bool

    @property
    def deficit_m(self) -> float:
        """How much runway is missing (0 when feasible)."""
        return max(self.required_length_m_est - self.runway_length_m, 0.0)

    def reason(self) -> str:
        if self.feasible:
            return ""
        return (
            f"Requires ~{self.required_length_m_est:,.0f} m, "
            f"available {self.runway_length_m:,.0f} m (short by {self.deficit_m:,.0f} m)"
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data['deficit_m'] = self.deficit_m
        return data
