"""
OFP import normalizer.

Flight-planning services change their JSON field names between versions, so
every canonical field has an ordered list of dotted paths (SimBrief layout
first) followed by a deep search on leaf key names anywhere in the payload.
The first candidate value that survives the field's cleaner wins.

Example:
    extract = extract_ofp(simbrief_json)
    print(extract.origin_icao, extract.dest_icao, extract.cruise_fl)
"""

import re
import json
import logging
from collections import deque
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence, Union

from ..exceptions import ExtractionError
from ..models.ofp import OFPExtract
from ..utils.numbers import is_finite_number, round_half_up

logger = logging.getLogger(__name__)

KG_PER_LB = 0.45359237
# Passenger weights above this are taken to be in pounds
PAX_WEIGHT_LB_THRESHOLD = 150.0

ICAO_RE = re.compile(r"^[A-Z]{4}$")
RUNWAY_RE = re.compile(r"^(\d{1,2})([LRC]?)$")
IDENT_RE = re.compile(r"^[A-Z0-9-]{2,10}$")
NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
FL_RE = re.compile(r"^FL\s*(\d{2,3})$")

FIELD_PATHS = {
    'origin_icao': ['origin.icao_code', 'origin.icao', 'departure.icao'],
    'dest_icao': ['destination.icao_code', 'destination.icao', 'arrival.icao'],
    'dep_runway': ['origin.plan_rwy', 'origin.runway', 'departure.runway'],
    'arr_runway': ['destination.plan_rwy', 'destination.runway', 'arrival.runway'],
    'alternate_icao': ['alternate.icao_code', 'alternate.icao'],
    'route': ['general.route', 'atc.route', 'route'],
    'distance_nm': ['general.route_distance', 'general.air_distance', 'general.gc_distance'],
    'cruise_fl': ['general.initial_altitude', 'general.cruise_altitude'],
    'dep_metar': ['weather.orig_metar', 'origin.metar'],
    'arr_metar': ['weather.dest_metar', 'destination.metar'],
    'call_sign': ['atc.callsign', 'general.icao_airline_callsign'],
    'registration': ['aircraft.reg', 'aircraft.registration'],
    'pax_count': ['weights.pax_count', 'general.passengers'],
    'pax_weight_kg': ['weights.pax_weight', 'weights.pax_mass'],
}

DEEP_KEYS = {
    'origin_icao': ['origin_icao', 'originIcao', 'dep_icao', 'depIcao', 'orig_icao'],
    'dest_icao': ['dest_icao', 'destIcao', 'arr_icao', 'arrIcao', 'destination_icao'],
    'dep_runway': ['dep_runway', 'depRunway', 'dep_rwy', 'takeoff_runway'],
    'arr_runway': ['arr_runway', 'arrRunway', 'arr_rwy', 'landing_runway'],
    'alternate_icao': ['alternate_icao', 'alternateIcao', 'altn_icao', 'alt_icao'],
    'route': ['route', 'route_string', 'routeText', 'route_text'],
    'distance_nm': ['route_distance', 'distance_nm', 'distanceNm', 'air_distance', 'gc_distance', 'distance'],
    'cruise_fl': ['initial_altitude', 'cruise_fl', 'cruiseFL', 'cruise_altitude', 'cruise_level', 'fl'],
    'dep_metar': ['orig_metar', 'dep_metar', 'depMetar', 'origin_metar'],
    'arr_metar': ['dest_metar', 'arr_metar', 'arrMetar', 'destination_metar'],
    'call_sign': ['callsign', 'call_sign', 'callSign', 'atc_callsign'],
    'registration': ['reg', 'registration', 'tail', 'aircraft_reg'],
    'pax_count': ['pax_count', 'paxCount', 'passengers', 'pax'],
    'pax_weight_kg': ['pax_weight', 'paxWeight', 'pax_weight_kg', 'pax_mass'],
}


def _get_path(payload: Mapping, path: str) -> Any:
    node: Any = payload
    for part in path.split('.'):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


def _deep_values(payload: Any, keys: Sequence[str]) -> Iterator[Any]:
    """Values stored under any of keys, breadth first through dicts and lists."""
    wanted = set(keys)
    queue = deque([payload])
    while queue:
        node = queue.popleft()
        if isinstance(node, Mapping):
            for key, value in node.items():
                if key in wanted:
                    yield value
                if isinstance(value, (Mapping, list)):
                    queue.append(value)
        elif isinstance(node, list):
            queue.extend(item for item in node if isinstance(item, (Mapping, list)))


def _candidates(payload: Mapping, field: str) -> Iterator[Any]:
    for path in FIELD_PATHS[field]:
        value = _get_path(payload, path)
        if value is not None:
            yield value
    yield from _deep_values(payload, DEEP_KEYS[field])


def _text(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, str)):
        text = str(value).strip()
        return text or None
    return None


def clean_icao(value: Any) -> Optional[str]:
    text = _text(value)
    if text is None:
        return None
    text = text.upper()
    return text if ICAO_RE.match(text) else None


def clean_runway(value: Any) -> Optional[str]:
    """Runway designator, zero padded: "9l" -> "09L"."""
    text = _text(value)
    if text is None:
        return None
    match = RUNWAY_RE.match(re.sub(r"^RWY?", "", text.upper()))
    if not match or not 1 <= int(match.group(1)) <= 36:
        return None
    return f"{int(match.group(1)):02d}{match.group(2)}"


def clean_ident(value: Any) -> Optional[str]:
    """Callsign or registration: letters, digits and dashes, 2 to 10 characters."""
    text = _text(value)
    if text is None:
        return None
    text = text.upper().replace(" ", "")
    return text if IDENT_RE.match(text) else None


def clean_number(value: Any) -> Optional[float]:
    """First number in a value ("3,214 nm" -> 3214.0)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if is_finite_number(value) else None
    text = _text(value)
    if text is None:
        return None
    match = NUMBER_RE.search(text.replace(",", ""))
    return float(match.group(0)) if match else None


def clean_cruise_fl(value: Any) -> Optional[int]:
    """
    Cruise level from "FL580", a bare altitude in feet (>= 1000) or a bare FL.

    Examples: "FL580" -> 580, 58000 -> 580, "550" -> 550
    """
    text = _text(value)
    if text is None:
        return None
    match = FL_RE.match(text.upper())
    if match:
        return int(match.group(1))
    number = clean_number(value)
    if number is None or number <= 0:
        return None
    if number >= 1000:
        return round_half_up(number / 100.0)
    return round_half_up(number)


def clean_metar(value: Any) -> Optional[str]:
    """First non-empty line of a METAR text."""
    text = _text(value)
    if text is None:
        return None
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return None


def clean_route(value: Any) -> Optional[str]:
    text = _text(value)
    if text is None:
        return None
    return " ".join(text.upper().split())


def clean_pax_count(value: Any) -> Optional[int]:
    number = clean_number(value)
    if number is None or number < 0:
        return None
    return int(number)


def clean_pax_weight(value: Any) -> Optional[float]:
    """Passenger mass in kg; values above 150 are taken to be pounds."""
    number = clean_number(value)
    if number is None or number <= 0:
        return None
    if number > PAX_WEIGHT_LB_THRESHOLD:
        return round(number * KG_PER_LB, 1)
    return number


CLEANERS = {
    'origin_icao': clean_icao,
    'dest_icao': clean_icao,
    'dep_runway': clean_runway,
    'arr_runway': clean_runway,
    'alternate_icao': clean_icao,
    'route': clean_route,
    'distance_nm': clean_number,
    'cruise_fl': clean_cruise_fl,
    'dep_metar': clean_metar,
    'arr_metar': clean_metar,
    'call_sign': clean_ident,
    'registration': clean_ident,
    'pax_count': clean_pax_count,
    'pax_weight_kg': clean_pax_weight,
}


def _first(payload: Mapping, field: str, cleaner: Callable[[Any], Any]) -> Any:
    for candidate in _candidates(payload, field):
        cleaned = cleaner(candidate)
        if cleaned is not None:
            return cleaned
    logger.debug(f"OFP field {field} not found")
    return None


def synthesize_route(
    route: Optional[str],
    origin: Optional[str],
    dest: Optional[str],
    dep_runway: Optional[str] = None,
    arr_runway: Optional[str] = None,
) -> Optional[str]:
    """
    Make sure a route starts with ORIGIN[/RWY] and ends with DEST[/RWY].

    Existing endpoint tokens (with or without a runway) are left alone.
    """
    if not route:
        return route
    tokens = route.split()
    if origin and tokens[0].split("/")[0] != origin:
        tokens.insert(0, f"{origin}/{dep_runway}" if dep_runway else origin)
    if dest and tokens[-1].split("/")[0] != dest:
        tokens.append(f"{dest}/{arr_runway}" if arr_runway else dest)
    return " ".join(tokens)


def extract_ofp(payload: Union[Mapping, str, bytes]) -> OFPExtract:
    """
    Normalize an OFP payload into canonical fields.

    Args:
        payload: Parsed JSON object, or JSON text

    Returns:
        OFPExtract with every recoverable field set

    Raises:
        ExtractionError: If the payload is not a JSON object, or none of
            origin, destination, route and distance could be recovered
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise ExtractionError("OFP payload is not valid JSON", details=str(e)) from e
    if not isinstance(payload, Mapping):
        raise ExtractionError("OFP payload must be a JSON object", details=type(payload).__name__)

    values = {field: _first(payload, field, cleaner) for field, cleaner in CLEANERS.items()}
    values['route'] = synthesize_route(
        values['route'],
        values['origin_icao'],
        values['dest_icao'],
        values['dep_runway'],
        values['arr_runway'],
    )
    extract = OFPExtract(**values)
    if not extract.has_key_fields:
        raise ExtractionError("No usable fields in OFP payload", details=list(payload.keys())[:20])

    logger.info(f"OFP extracted {len(extract.recovered_fields())} fields: "
                f"{extract.origin_icao or '?'}-{extract.dest_icao or '?'}")
    return extract
