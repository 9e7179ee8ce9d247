"""
Route string resolution.

A route string is tokenized, each token is classified (procedure, airway,
lat/lon pair, airport, navaid or unresolved) and the resolved points are
chained between departure and arrival to give a routed distance. Airways
and procedures are recognized but never expanded into geometry; when they
are all a route has, the distance is inflated by a small detour factor and
flagged as approximate.
"""

import re
import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..config import DirectionStrategy
from ..exceptions import InvalidInputError
from ..models.navaid import Navaid
from ..models.navpoint import NavPoint, distance_nm
from ..models.reference import ReferenceData
from ..models.route import RecognizedTokens, RoutePoint, RouteResolution, RouteResult
from .flight_level import infer_direction

logger = logging.getLogger(__name__)

LATLON_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")
AIRWAY_RE = re.compile(r"^[A-Z]{1,2}\d{1,3}$")
PROCEDURE_RE = re.compile(r"^(DCT|SID[A-Z0-9-]*|STAR[A-Z0-9-]*|VIA|VECTOR)$")
ICAO_RE = re.compile(r"^[A-Z]{4}$")

# ICAO/RWY (EGLL/27R) and FIX/speed-level (CPT/N1160F580) compounds
_RUNWAY_SUFFIX_RE = re.compile(r"^\d{1,2}[LRC]?$")
_SPEED_LEVEL_SUFFIX_RE = re.compile(r"^[NKM]\d{3,4}([FAMS]\d{3,4})?$")
_TRAILING_PUNCTUATION = ".,;:"

MAX_DETOUR_FACTOR = 0.18
AIRWAY_DETOUR = 0.01
PROCEDURE_DETOUR = 0.02


class TokenKind(Enum):
    PROCEDURE = "procedure"
    AIRWAY = "airway"
    LATLON = "latlon"
    AIRPORT = "airport"
    NAVAID = "navaid"
    UNRESOLVED = "unresolved"


def tokenize_route(route: Optional[str]) -> List[str]:
    """
    Split a route string into upper-case tokens.

    Trailing punctuation is stripped and compound tokens are collapsed to
    their point: "EGLL/27R" becomes "EGLL", "CPT/N1160F580" becomes "CPT".

    Examples:
        >>> tokenize_route("egll/27r CPT/N1160F580 DCT STU, KJFK")
        ['EGLL', 'CPT', 'DCT', 'STU', 'KJFK']
    """
    if not route or not isinstance(route, str):
        return []
    tokens = []
    for raw in route.split():
        token = raw.strip().upper().rstrip(_TRAILING_PUNCTUATION)
        if "/" in token:
            head, _, tail = token.partition("/")
            if head and (_RUNWAY_SUFFIX_RE.match(tail) or _SPEED_LEVEL_SUFFIX_RE.match(tail)):
                token = head
        if token:
            tokens.append(token)
    return tokens


def _corridor_detour(candidate: Navaid, dep: NavPoint, arr: NavPoint, direct: float) -> float:
    point = candidate.navpoint
    return distance_nm(dep, point) + distance_nm(point, arr) - direct


def pick_navaid(
    candidates: Sequence[Navaid],
    dep: Optional[NavPoint] = None,
    arr: Optional[NavPoint] = None,
) -> Optional[Navaid]:
    """
    Choose among navaids sharing an ident.

    With both endpoints known, the candidate adding the least distance to
    the direct route wins; otherwise the first candidate.
    """
    if not candidates:
        return None
    if dep is None or arr is None or len(candidates) == 1:
        return candidates[0]
    direct = distance_nm(dep, arr)
    return min(candidates, key=lambda c: _corridor_detour(c, dep, arr, direct))


def classify_token(
    token: str,
    reference: ReferenceData,
    dep: Optional[NavPoint] = None,
    arr: Optional[NavPoint] = None,
) -> Tuple[TokenKind, Optional[RoutePoint]]:
    """
    Classify one route token.

    Args:
        token: Upper-case token from tokenize_route()
        reference: Airport and navaid indices
        dep: Departure point, used to disambiguate navaids
        arr: Arrival point, used to disambiguate navaids

    Returns:
        Tuple of (kind, RoutePoint for point kinds else None)
    """
    if PROCEDURE_RE.match(token):
        return TokenKind.PROCEDURE, None
    if AIRWAY_RE.match(token):
        return TokenKind.AIRWAY, None

    match = LATLON_RE.match(token)
    if match:
        lat, lon = float(match.group(1)), float(match.group(2))
        if -90.0 <= lat <= 90.0:
            return TokenKind.LATLON, RoutePoint(label=token, latitude=lat, longitude=lon, kind="latlon")
        logger.debug(f"Latitude out of range in route token {token}")
        return TokenKind.UNRESOLVED, None

    if ICAO_RE.match(token):
        airport = reference.airport(token)
        if airport is not None:
            return TokenKind.AIRPORT, RoutePoint(
                label=token, latitude=airport.latitude, longitude=airport.longitude, kind="airport")

    navaid = pick_navaid(reference.navaid_candidates(token), dep, arr)
    if navaid is not None:
        return TokenKind.NAVAID, RoutePoint(
            label=token, latitude=navaid.latitude, longitude=navaid.longitude, kind="navaid")

    return TokenKind.UNRESOLVED, None


def route_distance_nm(dep: NavPoint, arr: NavPoint, points: Sequence[RoutePoint]) -> float:
    """Sum of great-circle legs over departure, the points in order, and arrival."""
    sequence = [dep] + [p.navpoint for p in points] + [arr]
    return sum(distance_nm(a, b) for a, b in zip(sequence, sequence[1:]))


def detour_factor(point_count: int, airway_count: int, procedure_count: int) -> float:
    """
    Fractional inflation for routes made of airways and procedures.

    Applies only when at most one point was resolved: 1% per airway plus 2%
    per procedure, capped at 18%.
    """
    if point_count > 1 or (airway_count == 0 and procedure_count == 0):
        return 0.0
    return min(MAX_DETOUR_FACTOR, AIRWAY_DETOUR * airway_count + PROCEDURE_DETOUR * procedure_count)


class RouteResolver:
    """
    Resolve route strings against reference data.

    Example:
        resolver = RouteResolver(reference)
        result = resolver.resolve("CPT DCT 50.0,-20.0", "EGLL", "KJFK")
        print(result.distance_nm, result.summary())
    """

    def __init__(self, reference: ReferenceData, direction_strategy: DirectionStrategy = DirectionStrategy.BEARING):
        self.reference = reference
        self.direction_strategy = direction_strategy

    def resolve_tokens(
        self,
        tokens: Sequence[str],
        dep: Optional[NavPoint] = None,
        arr: Optional[NavPoint] = None,
    ) -> RouteResolution:
        """Classify tokens in order, collecting points and recognized tokens."""
        points: List[RoutePoint] = []
        recognized = RecognizedTokens()
        buckets = {
            TokenKind.PROCEDURE: recognized.procedures,
            TokenKind.AIRWAY: recognized.airways,
            TokenKind.UNRESOLVED: recognized.unresolved,
        }
        for token in tokens:
            kind, point = classify_token(token, self.reference, dep, arr)
            if point is not None:
                points.append(point)
            else:
                buckets[kind].append(token)
        if recognized.unresolved:
            logger.debug(f"Unresolved route tokens: {' '.join(recognized.unresolved)}")
        return RouteResolution(points=points, recognized=recognized)

    def resolve(self, route: Optional[str], dep_icao: str, arr_icao: str) -> RouteResult:
        """
        Routed distance from departure to arrival through a route string.

        A leading departure or trailing arrival token is dropped since the
        endpoints are implicit.

        Raises:
            InvalidInputError: If the departure or arrival airport is unknown
        """
        dep_airport = self.reference.airport(dep_icao)
        arr_airport = self.reference.airport(arr_icao)
        if dep_airport is None or arr_airport is None:
            missing = [icao for icao, a in ((dep_icao, dep_airport), (arr_icao, arr_airport)) if a is None]
            raise InvalidInputError("Unknown departure/arrival airport", details=missing)
        dep, arr = dep_airport.navpoint, arr_airport.navpoint

        tokens = tokenize_route(route)
        if tokens and tokens[0] == dep_airport.ident.upper():
            tokens = tokens[1:]
        if tokens and tokens[-1] == arr_airport.ident.upper():
            tokens = tokens[:-1]

        resolution = self.resolve_tokens(tokens, dep, arr)
        recognized = resolution.recognized
        raw = route_distance_nm(dep, arr, resolution.points)
        factor = detour_factor(len(resolution.points), len(recognized.airways), len(recognized.procedures))
        result = RouteResult(
            resolution=resolution,
            direct_nm=distance_nm(dep, arr),
            raw_nm=raw,
            distance_nm=raw * (1.0 + factor),
            detour_factor=factor,
            direction=infer_direction(dep, arr, self.direction_strategy),
        )
        logger.info(f"{dep_airport.ident}-{arr_airport.ident}: {result.summary()}")
        return result
