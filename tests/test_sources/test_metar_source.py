"""Tests for MetarSource: aviationweather.gov first, VATSIM as fallback."""

from unittest.mock import MagicMock

import requests

from concorde_efb.sources.metar import MetarSource


class MockResponse:
    """Minimal mock for requests.Response."""

    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}")


def make_session(*responses):
    """Session answering successive GETs in order; exceptions are raised."""
    session = MagicMock()
    session.headers = {}
    session.get.side_effect = list(responses)
    return session


EGLL = "EGLL 121250Z 27015KT 9999 SCT030 15/08 Q1012"


class TestFetch:

    def test_primary_provider(self):
        session = make_session(MockResponse(EGLL + "\n"))
        result = MetarSource(session=session).fetch("egll")
        assert result.ok
        assert result.icao == "EGLL"
        assert result.raw == EGLL
        assert result.source == "aviationweather"
        assert session.get.call_count == 1
        assert "ids=EGLL" in session.get.call_args[0][0]

    def test_first_non_empty_line(self):
        session = make_session(MockResponse("\n\n" + EGLL + "\nEGLL 121220Z 27014KT\n"))
        assert MetarSource(session=session).fetch("EGLL").raw == EGLL

    def test_fallback_on_empty_primary(self):
        session = make_session(MockResponse("", 204), MockResponse(EGLL))
        result = MetarSource(session=session).fetch("EGLL")
        assert result.ok
        assert result.source == "vatsim"
        assert session.get.call_args[0][0] == "https://metar.vatsim.net/EGLL"

    def test_fallback_on_primary_error(self):
        session = make_session(requests.exceptions.ConnectionError("down"), MockResponse(EGLL))
        result = MetarSource(session=session).fetch("EGLL")
        assert result.ok
        assert result.source == "vatsim"

    def test_all_providers_fail(self):
        session = make_session(MockResponse("", 500), requests.exceptions.Timeout("slow"))
        result = MetarSource(session=session).fetch("EGLL")
        assert not result.ok
        assert result.raw is None
        assert "EGLL" in result.error

    def test_no_text_anywhere(self):
        session = make_session(MockResponse("", 204), MockResponse("   \n"))
        result = MetarSource(session=session).fetch("EGLL")
        assert not result.ok
        assert result.error == "No METAR text returned for EGLL"

    def test_blank_icao(self):
        session = make_session()
        result = MetarSource(session=session).fetch("  ")
        assert not result.ok
        assert result.error == "No ICAO code given"
        session.get.assert_not_called()

    def test_user_agent(self):
        session = make_session()
        MetarSource(session=session)
        assert session.headers["User-Agent"] == MetarSource.USER_AGENT


class TestFetchMany:

    def test_deduplicated_and_upper_cased(self):
        session = make_session(MockResponse(EGLL), MockResponse("KJFK 121251Z 31010KT 10SM A3012"))
        results = MetarSource(session=session).fetch_many(["egll", "EGLL", "kjfk", ""])
        assert list(results) == ["EGLL", "KJFK"]
        assert all(r.ok for r in results.values())
        assert results["KJFK"].to_dict()["source"] == "aviationweather"
