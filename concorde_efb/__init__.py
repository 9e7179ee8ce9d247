"""
Concorde flight planning calculation engine.

Pure functions that turn route strings, cruise levels, payload and
weather into flight-plan figures: routed distance, climb/cruise/descent
legs, trip and block fuel, Non-RVSM level compliance, V-speeds and runway
feasibility.

The main public API includes:
- FlightPlanner / PlanRequest: Full planning chain producing a FlightPlan
- RouteResolver: Route string resolution against ReferenceData
- ReferenceData: Read-only airport and navaid indices
- decode_metar: METAR decoding
- extract_ofp: OFP import normalization
"""

__version__ = '0.1.0'

from .exceptions import PlannerError, InvalidInputError, ExtractionError, SourceError
from .config import CONCORDE, DEFAULT_FUEL_POLICY, AircraftLimits, FuelPolicy, PlannerSettings
from .models import NavPoint, Airport, Runway, Navaid, ReferenceData, Direction
from .planning import FlightPlanner, PlanRequest, FlightPlan, RouteResolver
from .weather import decode_metar
from .ofp import extract_ofp

__all__ = [
    'PlannerError',
    'InvalidInputError',
    'ExtractionError',
    'SourceError',
    'CONCORDE',
    'DEFAULT_FUEL_POLICY',
    'AircraftLimits',
    'FuelPolicy',
    'PlannerSettings',
    'NavPoint',
    'Airport',
    'Runway',
    'Navaid',
    'ReferenceData',
    'Direction',
    'FlightPlanner',
    'PlanRequest',
    'FlightPlan',
    'RouteResolver',
    'decode_metar',
    'extract_ofp',
]
