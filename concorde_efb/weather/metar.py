"""
METAR decoding.

Decoding is done by the metar_taf_parser library; this module feeds it a
cleaned line and turns the parsed Metar into the units the planner works
in (km, ft, hPa). The surface wind keeps its own regex so the wind group
is read the same way whatever the rest of the line looks like.

Every function is total: malformed or empty input gives None (or
FlightCategory.UNKNOWN), never an exception.

Example:
    report = decode_metar("METAR LFPG 211230Z 24015G25KT 9999 FEW040 18/09 Q1015")
    report.wind.speed_kt   # 15
    report.flight_category # FlightCategory.VFR
"""

import re
import logging
from typing import List, Optional

from metar_taf_parser.model.enum import CloudQuantity
from metar_taf_parser.parser.parser import MetarParser

from .analysis import flight_category, KM_PER_SM
from .models import FlightCategory, MetarReport, WindReport

logger = logging.getLogger(__name__)

# Scanning stops at remarks and trend groups
_STOP_TOKENS = {"RMK", "TEMPO", "BECMG", "NOSIG"}
_REPORT_PREFIXES = {"METAR", "SPECI", "COR"}

_WIND_RE = re.compile(r"^(VRB|\d{3})(\d{2})(G(\d{2}))?KT$")
_STATION_RE = re.compile(r"^[A-Z]{4}$")

_INTENSITY = {"-": "light", "+": "heavy", "VC": "in the vicinity", "RE": "recent"}
_DESCRIPTORS = {
    "MI": "shallow", "PR": "partial", "BC": "patches of", "DR": "low drifting",
    "BL": "blowing", "SH": "showers of", "TS": "thunderstorm", "FZ": "freezing",
}
# Descriptors that stand alone, as in VCSH or TS
_DESCRIPTOR_ONLY = {"TS": "thunderstorm", "SH": "showers"}
_PHENOMENA = {
    "DZ": "drizzle", "RA": "rain", "SN": "snow", "SG": "snow grains",
    "IC": "ice crystals", "PL": "ice pellets", "GR": "hail", "GS": "small hail",
    "UP": "unknown precipitation", "BR": "mist", "FG": "fog", "FU": "smoke",
    "VA": "volcanic ash", "DU": "dust", "SA": "sand", "HZ": "haze",
    "PY": "spray", "PO": "dust whirls", "SQ": "squalls", "FC": "funnel cloud",
    "SS": "sandstorm", "DS": "duststorm", "TS": "thunderstorm",
}
_NO_WEATHER = "no significant weather"


def tokenize_metar(raw: Optional[str]) -> List[str]:
    """
    Split a METAR line into upper-case tokens.

    Tokens after RMK or a trend group (TEMPO, BECMG, NOSIG) are dropped.
    """
    if not raw or not isinstance(raw, str):
        return []
    tokens = []
    for token in raw.strip().upper().split():
        if token in _STOP_TOKENS:
            break
        tokens.append(token.rstrip("="))
    return [t for t in tokens if t]


def parse_metar(raw: Optional[str]):
    """
    Run metar_taf_parser over the observation part of a METAR line.

    The METAR/SPECI/COR prefixes are removed since the parser expects the
    station first.

    Returns:
        metar_taf_parser Metar, or None for empty, NIL or unparseable input
    """
    tokens = tokenize_metar(raw)
    while tokens and tokens[0] in _REPORT_PREFIXES:
        tokens.pop(0)
    if not tokens or "NIL" in tokens:
        return None
    text = " ".join(tokens)
    try:
        return MetarParser().parse(text)
    except Exception as e:
        logger.debug(f"Failed to parse METAR: {text[:80]} - {e}")
        return None


def parse_station(raw: Optional[str]) -> Optional[str]:
    """Station ICAO, None when the line does not start with a 4-letter code."""
    return _station(parse_metar(raw))


def parse_wind(raw: Optional[str]) -> WindReport:
    """
    Parse the surface wind group (dddssKT, dddssGggKT, VRBssKT).

    Returns:
        WindReport; dir_deg is None for VRB, all fields None when no group matches
    """
    for token in tokenize_metar(raw):
        match = _WIND_RE.match(token)
        if not match:
            continue
        direction = None if match.group(1) == "VRB" else int(match.group(1))
        gust = int(match.group(4)) if match.group(4) else None
        return WindReport(dir_deg=direction, speed_kt=int(match.group(2)), gust_kt=gust)
    return WindReport()


def parse_qnh(raw: Optional[str]) -> Optional[int]:
    """
    Altimeter setting in hPa.

    Qnnnn is read as hPa; the parser converts Annnn (inches of mercury) to hPa.
    """
    return _qnh(parse_metar(raw))


def parse_temperature_c(raw: Optional[str]) -> Optional[int]:
    """Air temperature in degrees C from the TT/DD group."""
    return _integer(getattr(parse_metar(raw), 'temperature', None))


def parse_dewpoint_c(raw: Optional[str]) -> Optional[int]:
    """Dew point in degrees C from the TT/DD group, None when missing."""
    return _integer(getattr(parse_metar(raw), 'dew_point', None))


def parse_visibility_km(raw: Optional[str]) -> Optional[float]:
    """
    Prevailing visibility in km.

    CAVOK and 9999 read as 10 km; statute miles including fractions and
    mixed numbers ("1 1/2SM") are converted.
    """
    return _visibility_km(parse_metar(raw))


def parse_ceiling_ft(raw: Optional[str]) -> Optional[int]:
    """
    Ceiling in feet: the lowest BKN, OVC or VV layer.

    Returns:
        Ceiling in feet, or None if no ceiling is reported
    """
    return _ceiling_ft(parse_metar(raw))


def parse_weather_summary(raw: Optional[str]) -> Optional[str]:
    """
    Plain-language present weather, e.g. "light rain, mist".

    Returns "no significant weather" for CAVOK/NSW and None when no weather
    group is present.
    """
    return _weather_summary(parse_metar(raw), tokenize_metar(raw))


def parse_flight_category(raw: Optional[str]) -> FlightCategory:
    """Flight category from visibility and ceiling, UNKNOWN when neither is readable."""
    parsed = parse_metar(raw)
    return flight_category(_visibility_km(parsed), _ceiling_ft(parsed), cavok=_cavok(parsed))


def decode_metar(raw: Optional[str]) -> MetarReport:
    """
    Decode every supported field of a METAR line.

    Args:
        raw: Raw METAR text (may include a "METAR"/"SPECI" prefix)

    Returns:
        MetarReport; unreadable fields are None
    """
    text = raw.strip() if isinstance(raw, str) else ""
    parsed = parse_metar(text)
    if text and parsed is None:
        logger.debug(f"Nothing to decode in METAR: {text[:80]!r}")
    visibility = _visibility_km(parsed)
    ceiling = _ceiling_ft(parsed)
    cavok = _cavok(parsed)
    return MetarReport(
        raw_text=text,
        station=_station(parsed),
        wind=parse_wind(text),
        visibility_km=visibility,
        ceiling_ft=ceiling,
        temperature_c=_integer(getattr(parsed, 'temperature', None)),
        dewpoint_c=_integer(getattr(parsed, 'dew_point', None)),
        qnh_hpa=_qnh(parsed),
        weather=_weather_summary(parsed, tokenize_metar(text)),
        cavok=cavok,
        flight_category=flight_category(visibility, ceiling, cavok=cavok),
    )


# --- Field extraction from a parsed Metar ---

def _integer(value) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _cavok(parsed) -> bool:
    return bool(getattr(parsed, 'cavok', False))


def _station(parsed) -> Optional[str]:
    station = getattr(parsed, 'station', None)
    if not station or not _STATION_RE.match(station):
        return None
    return station


def _qnh(parsed) -> Optional[int]:
    return _integer(getattr(parsed, 'altimeter', None))


def _visibility_km(parsed) -> Optional[float]:
    if parsed is None:
        return None
    if _cavok(parsed):
        return 10.0
    visibility = getattr(parsed, 'visibility', None)
    return distance_to_km(getattr(visibility, 'distance', None))


def distance_to_km(distance: Optional[str]) -> Optional[float]:
    """
    Convert a parser visibility distance to km, rounded to 0.01.

    Handles "> 10km", "800m", "4000", "10SM", "1 1/2SM", "M1/4SM" and
    "P6SM". Ten km or more reads as 10.0; unreadable values give None.

    Examples:
        >>> distance_to_km("> 10km")
        10.0
        >>> distance_to_km("1 1/2SM")
        2.41
    """
    if distance is None:
        return None
    text = str(distance).replace(">", "").replace("<", "").strip().upper()
    if not text:
        return None

    km = None
    if text.endswith("SM"):
        miles = _safe_parse_fraction(text[:-2])
        if miles is not None:
            km = miles * KM_PER_SM
    elif text.endswith("KM"):
        km = _safe_parse_fraction(text[:-2])
    else:
        metres = _safe_parse_fraction(text[:-1] if text.endswith("M") else text)
        if metres is not None:
            # 9999 means 10 km or more
            km = 10.0 if metres >= 9999 else metres / 1000.0
    if km is None:
        return None
    return round(km, 2)


def _safe_parse_fraction(text: str) -> Optional[float]:
    """
    Parse "1", "0.5", "1/2" or "2 1/2", ignoring an M (less than) or
    P (more than) prefix. None when unparseable or the denominator is 0.
    """
    text = text.strip()
    if text[:1] in ("M", "P"):
        text = text[1:].strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        pass

    parts = text.split()
    if len(parts) == 2:
        whole = _safe_parse_fraction(parts[0])
        fraction = _parse_simple_fraction(parts[1])
        if whole is None or fraction is None:
            return None
        return whole + fraction
    return _parse_simple_fraction(text)


def _parse_simple_fraction(text: str) -> Optional[float]:
    parts = text.split("/")
    if len(parts) != 2:
        return None
    try:
        numerator = float(parts[0])
        denominator = float(parts[1])
    except ValueError:
        return None
    if denominator == 0:
        logger.debug(f"Ignoring visibility with zero denominator: {text}")
        return None
    return numerator / denominator


def _ceiling_ft(parsed) -> Optional[int]:
    if parsed is None:
        return None
    heights = []
    for cloud in getattr(parsed, 'clouds', None) or []:
        height = getattr(cloud, 'height', None)
        if getattr(cloud, 'quantity', None) in (CloudQuantity.BKN, CloudQuantity.OVC) and height is not None:
            heights.append(int(height))
    vertical = getattr(parsed, 'vertical_visibility', None)
    if vertical is not None:
        heights.append(int(vertical))
    return min(heights) if heights else None


def _code(value) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, 'value', value)


def _describe_weather(condition) -> Optional[str]:
    intensity = _code(getattr(condition, 'intensity', None))
    descriptor = _code(getattr(condition, 'descriptive', None))
    codes = [_code(p) for p in getattr(condition, 'phenomenons', None) or []]
    # A descriptor is never repeated as a phenomenon (TSRA is not "thunderstorm thunderstorm rain")
    names = [_PHENOMENA[c] for c in codes if c in _PHENOMENA and c != descriptor]
    if not names and descriptor not in _DESCRIPTOR_ONLY:
        return None
    words = []
    if descriptor in _DESCRIPTORS:
        words.append(_DESCRIPTORS[descriptor] if names else _DESCRIPTOR_ONLY[descriptor])
    if names:
        words.append(" and ".join(names))
    if intensity == "VC":
        # "in the vicinity" reads after the phenomenon
        words.append(_INTENSITY[intensity])
    elif intensity in _INTENSITY:
        words.insert(0, _INTENSITY[intensity])
    return " ".join(words)


def _weather_summary(parsed, tokens: List[str]) -> Optional[str]:
    if parsed is None:
        return None
    phrases = []
    for condition in getattr(parsed, 'weather_conditions', None) or []:
        phrase = _describe_weather(condition)
        if phrase:
            phrases.append(phrase)
    if phrases:
        return ", ".join(phrases)
    if _cavok(parsed) or "NSW" in tokens:
        return _NO_WEATHER
    return None
