"""
Flight level records: direction of flight, compliance check results and
cruise level recommendations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class Direction(Enum):
    """Direction of flight used to pick the Non-RVSM level ladder."""

    EAST = "E"
    WEST = "W"

    @property
    def label(self) -> str:
        return "Eastbound" if self is Direction.EAST else "Westbound"

    @classmethod
    def coerce(cls, value: Union['Direction', str]) -> 'Direction':
        """
        Accept a Direction or a string such as "E", "w", "east", "Westbound".

        Raises:
            ValueError: If the value does not name a direction
        """
        if isinstance(value, Direction):
            return value
        text = str(value).strip().upper()
        if text.startswith("E"):
            return cls.EAST
        if text.startswith("W"):
            return cls.WEST
        raise ValueError(f"Unknown direction: {value!r}")


class FlightLevelViolation(Enum):
    """Why a flight level failed validation."""

    NON_RVSM = "NonRvsmViolation"
    ABOVE_CEILING = "AboveCeiling"


@dataclass(frozen=True)
class FlightLevelCheck:
    """
    Result of validating a cruise flight level.

    Attributes:
        fl: The level that was checked
        violation: None when the level is compliant
        suggestions: Nearest compliant ladder levels, closest first
    """

    fl: float
    violation: Optional[FlightLevelViolation] = None
    suggestions: List[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.violation is None

    def __str__(self) -> str:
        if self.ok:
            return f"FL{self.fl:g} valid"
        hint = ", ".join(f"FL{s}" for s in self.suggestions)
        return f"FL{self.fl:g} {self.violation.value}" + (f" (try {hint})" if hint else "")


@dataclass(frozen=True)
class CruiseFLRecommendation:
    """
    Recommended cruise level for a distance and direction.

    Attributes:
        fl: Recommended level, always compliant for the direction
        cruise_minutes: Length of the cruise phase at that level
        meets_minimum: Whether the cruise phase reaches the minimum duration
        note: Human readable explanation
    """

    fl: int
    cruise_minutes: float
    meets_minimum: bool
    note: str = ""

    def to_dict(self) -> dict:
        return {
            'fl': self.fl,
            'cruise_minutes': self.cruise_minutes,
            'meets_minimum': self.meets_minimum,
            'note': self.note,
        }
