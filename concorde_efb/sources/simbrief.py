"""SimBrief OFP retrieval."""

import logging
from typing import Any, Dict, Optional

import requests

from ..exceptions import InvalidInputError, SourceError
from ..models.ofp import OFPExtract
from ..ofp.normalizer import extract_ofp

logger = logging.getLogger(__name__)


class SimBriefSource:
    """
    Fetch the latest OFP generated by a SimBrief user.

    Example:
        source = SimBriefSource()
        extract = source.fetch_extract(username="concorde_fan")
        print(extract.route)
    """

    API_URL = "https://www.simbrief.com/api/xml.fetcher.php"
    DEFAULT_TIMEOUT = 15

    def __init__(self, session: Optional[requests.Session] = None, timeout: int = DEFAULT_TIMEOUT):
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch_latest(self, username: Optional[str] = None, userid: Optional[str] = None) -> Dict[str, Any]:
        """
        Raw OFP JSON for a user.

        Args:
            username: SimBrief username
            userid: SimBrief numeric pilot id, used when given

        Raises:
            InvalidInputError: If neither username nor userid is given
            SourceError: If the request fails or the answer is not JSON
        """
        if userid:
            params = {'userid': str(userid).strip(), 'json': '1'}
        elif username:
            params = {'username': username.strip(), 'json': '1'}
        else:
            raise InvalidInputError("A SimBrief username or userid is required")

        try:
            response = self._session.get(self.API_URL, params=params, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise SourceError("SimBrief request failed", details=str(e)) from e
        except ValueError as e:
            raise SourceError("SimBrief returned invalid JSON", details=str(e)) from e

        status = (data.get('fetch') or {}).get('status') if isinstance(data, dict) else None
        if status and status.lower() != 'success':
            raise SourceError("SimBrief could not return an OFP", details=status)
        logger.info(f"SimBrief OFP fetched for {params.get('userid') or params.get('username')}")
        return data

    def fetch_extract(self, username: Optional[str] = None, userid: Optional[str] = None) -> OFPExtract:
        """Latest OFP normalized to canonical fields."""
        return extract_ofp(self.fetch_latest(username=username, userid=userid))
