"""Live METAR retrieval with a primary and a fallback provider."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetarFetchResult:
    """
    Outcome of a METAR fetch.

    Attributes:
        icao: Station requested
        ok: True when a METAR line was obtained
        raw: First line of the METAR text
        source: Provider that answered ("aviationweather" or "vatsim")
        error: Reason for failure when ok is False
    """

    icao: str
    ok: bool
    raw: Optional[str] = None
    source: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'icao': self.icao,
            'ok': self.ok,
            'raw': self.raw,
            'source': self.source,
            'error': self.error,
        }


class MetarSource:
    """
    Fetch the current raw METAR for an airport.

    aviationweather.gov is tried first and VATSIM second; the first
    non-empty line of the response is used. Failures are reported in the
    result, never raised.

    Example:
        source = MetarSource()
        result = source.fetch("EGLL")
        if result.ok:
            print(result.source, result.raw)
    """

    PROVIDERS: Tuple[Tuple[str, str], ...] = (
        ("aviationweather", "https://aviationweather.gov/api/data/metar?ids={icao}&format=raw"),
        ("vatsim", "https://metar.vatsim.net/{icao}"),
    )
    DEFAULT_TIMEOUT = 15
    USER_AGENT = "concorde-efb/1.0 (flight planning tool)"

    def __init__(self, session: Optional[requests.Session] = None, timeout: int = DEFAULT_TIMEOUT):
        """
        Args:
            session: Optional requests.Session for dependency injection (testing).
            timeout: HTTP request timeout in seconds.
        """
        self._session = session or requests.Session()
        self._timeout = timeout
        self._session.headers.setdefault("User-Agent", self.USER_AGENT)

    def _first_line(self, url: str) -> str:
        response = self._session.get(url, timeout=self._timeout)
        if response.status_code == 204:
            return ""
        response.raise_for_status()
        for line in (response.text or "").splitlines():
            if line.strip():
                return line.strip()
        return ""

    def fetch(self, icao: str) -> MetarFetchResult:
        """
        Fetch one station, primary provider first.

        Args:
            icao: ICAO airport code.

        Returns:
            MetarFetchResult; ok is False with an error message when every
            provider failed or returned nothing.
        """
        station = (icao or "").strip().upper()
        if not station:
            return MetarFetchResult(icao=station, ok=False, error="No ICAO code given")

        last_error = None
        for name, template in self.PROVIDERS:
            try:
                line = self._first_line(template.format(icao=station))
            except requests.RequestException as e:
                logger.warning(f"METAR fetch from {name} failed for {station}: {e}")
                last_error = f"METAR fetch failed for {station}: {e}"
                continue
            if line:
                logger.info(f"METAR for {station} from {name}")
                return MetarFetchResult(icao=station, ok=True, raw=line, source=name)
            logger.debug(f"No METAR text from {name} for {station}")
            last_error = None

        return MetarFetchResult(
            icao=station,
            ok=False,
            error=last_error or f"No METAR text returned for {station}",
        )

    def fetch_many(self, icaos: Iterable[str]) -> Dict[str, MetarFetchResult]:
        """Fetch several stations, keyed by upper-case ICAO."""
        results: Dict[str, MetarFetchResult] = {}
        for icao in self._clean(icaos):
            results[icao] = self.fetch(icao)
        return results

    @staticmethod
    def _clean(icaos: Iterable[str]) -> List[str]:
        seen = []
        for icao in icaos:
            code = (icao or "").strip().upper()
            if code and code not in seen:
                seen.append(code)
        return seen
