"""
Exception hierarchy for the concorde_efb engine.

Caller-controlled numeric parameters that are out of domain raise
InvalidInputError. Functions that read external text (METAR lines, route
strings) never raise; the OFP normalizer raises ExtractionError only when
nothing usable can be recovered.
"""

from typing import Any


class PlannerError(Exception):
    """Base class for all engine errors."""

    def __init__(self, message: str, details: Any = None):
        """
        Initialize the error.

        Args:
            message: Error message
            details: Optional additional details (offending value, payload keys...)
        """
        super().__init__(message)
        self.details = details

    def __str__(self) -> str:
        if self.details is not None:
            return f"{super().__str__()} (details: {self.details})"
        return super().__str__()


class InvalidInputError(PlannerError, ValueError):
    """A caller passed a value outside the function's domain."""


class ExtractionError(PlannerError):
    """An OFP payload yielded none of the key fields."""


class SourceError(PlannerError):
    """An external data source could not be read."""
