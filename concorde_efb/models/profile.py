"""Flight profile and fuel result records."""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class FlightLeg:
    """One phase of flight: duration in hours and ground distance in NM."""

    time_h: float = 0.0
    dist_nm: float = 0.0


@dataclass(frozen=True)
class FlightLegProfile:
    """Climb, cruise and descent legs of a flight."""

    climb: FlightLeg
    cruise: FlightLeg
    descent: FlightLeg

    @property
    def total_time_h(self) -> float:
        return self.climb.time_h + self.cruise.time_h + self.descent.time_h

    @property
    def total_dist_nm(self) -> float:
        return self.climb.dist_nm + self.cruise.dist_nm + self.descent.dist_nm

    def to_dict(self) -> dict:
        data = asdict(self)
        data['total_time_h'] = self.total_time_h
        return data


@dataclass(frozen=True)
class FuelBreakdown:
    """
    Block fuel and its components, all in kg.

    block_kg is the sum of the other components.
    """

    trip_kg: float
    taxi_kg: float
    contingency_kg: float
    final_reserve_kg: float
    alternate_kg: float
    block_kg: float

    @property
    def reserve_kg(self) -> float:
        """Fuel carried beyond trip and taxi."""
        return self.contingency_kg + self.final_reserve_kg + self.alternate_kg

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ReheatSummary:
    """Requested reheat (climb) minutes against the structural cap."""

    requested_minutes: int
    cap_minutes: int
    within_cap: bool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EnduranceCheck:
    """Airborne endurance against flight time plus reserves, in hours."""

    endurance_hours: float
    reserve_hours: float
    required_hours: float
    meets: bool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class FuelCapacityCheck:
    """Total fuel required against tank capacity, in kg."""

    total_kg: float
    capacity_kg: float
    within_capacity: bool
    excess_kg: float

    def to_dict(self) -> dict:
        return asdict(self)
