"""Data models for the concorde_efb engine: geodesy, reference data and result records."""

from .navpoint import NavPoint, great_circle_nm, distance_nm, initial_bearing_deg, ft_to_m
from .runway import Runway
from .airport import Airport
from .navaid import Navaid
from .reference import ReferenceData
from .flight_level import Direction, FlightLevelViolation, FlightLevelCheck, CruiseFLRecommendation
from .route import RoutePoint, RecognizedTokens, RouteResolution, RouteResult
from .profile import (
    FlightLeg,
    FlightLegProfile,
    FuelBreakdown,
    ReheatSummary,
    EnduranceCheck,
    FuelCapacityCheck,
)
from .performance import TakeoffSpeeds, LandingSpeeds, RunwayFeasibility
from .ofp import OFPExtract

__all__ = [
    'NavPoint', 'great_circle_nm', 'distance_nm', 'initial_bearing_deg', 'ft_to_m',
    'Runway', 'Airport', 'Navaid', 'ReferenceData',
    'Direction', 'FlightLevelViolation', 'FlightLevelCheck', 'CruiseFLRecommendation',
    'RoutePoint', 'RecognizedTokens', 'RouteResolution', 'RouteResult',
    'FlightLeg', 'FlightLegProfile', 'FuelBreakdown', 'ReheatSummary', 'EnduranceCheck', 'FuelCapacityCheck',
    'TakeoffSpeeds', 'LandingSpeeds', 'RunwayFeasibility',
    'OFPExtract',
]
