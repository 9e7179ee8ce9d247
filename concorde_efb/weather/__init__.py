"""METAR decoding and runway wind analysis."""

from .models import FlightCategory, WindReport, WindComponentSummary, MetarReport
from .analysis import flight_category, wind_components, wind_components_for_runways, best_runway_for_wind
from .metar import (
    tokenize_metar,
    parse_metar,
    parse_station,
    parse_wind,
    parse_qnh,
    parse_temperature_c,
    parse_dewpoint_c,
    parse_visibility_km,
    parse_ceiling_ft,
    parse_weather_summary,
    parse_flight_category,
    decode_metar,
)

__all__ = [
    'FlightCategory', 'WindReport', 'WindComponentSummary', 'MetarReport',
    'flight_category', 'wind_components', 'wind_components_for_runways', 'best_runway_for_wind',
    'tokenize_metar', 'parse_metar', 'parse_station', 'parse_wind', 'parse_qnh', 'parse_temperature_c',
    'parse_dewpoint_c', 'parse_visibility_km', 'parse_ceiling_ft', 'parse_weather_summary',
    'parse_flight_category', 'decode_metar',
]
