"""Tests for SimBriefSource."""

from unittest.mock import MagicMock

import pytest
import requests

from concorde_efb.exceptions import InvalidInputError, SourceError
from concorde_efb.models.ofp import OFPExtract
from concorde_efb.sources.simbrief import SimBriefSource

OFP = {
    'fetch': {'userid': '123456', 'status': 'Success'},
    'general': {'route': 'CPT UL9 STU', 'route_distance': '3214', 'initial_altitude': '58000'},
    'origin': {'icao_code': 'EGLL', 'plan_rwy': '27R'},
    'destination': {'icao_code': 'KJFK', 'plan_rwy': '04L'},
}


class MockResponse:
    """Minimal mock for requests.Response with a JSON body."""

    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON object could be decoded")
        return self.payload


def make_session(payload=None, status_code=200):
    session = MagicMock()
    session.get.return_value = MockResponse(payload, status_code)
    return session


class TestFetchLatest:

    def test_by_username(self):
        session = make_session(OFP)
        data = SimBriefSource(session=session).fetch_latest(username=' concorde_fan ')
        assert data['origin']['icao_code'] == 'EGLL'
        params = session.get.call_args[1]['params']
        assert params == {'username': 'concorde_fan', 'json': '1'}

    def test_userid_takes_precedence(self):
        session = make_session(OFP)
        SimBriefSource(session=session).fetch_latest(username='concorde_fan', userid=123456)
        assert session.get.call_args[1]['params'] == {'userid': '123456', 'json': '1'}

    def test_requires_user(self):
        with pytest.raises(InvalidInputError):
            SimBriefSource(session=make_session(OFP)).fetch_latest()

    def test_error_status(self):
        payload = {'fetch': {'status': 'Error: Unknown UserID'}}
        with pytest.raises(SourceError):
            SimBriefSource(session=make_session(payload)).fetch_latest(userid='1')

    def test_invalid_json(self):
        with pytest.raises(SourceError):
            SimBriefSource(session=make_session(None)).fetch_latest(userid='1')

    def test_http_error(self):
        with pytest.raises(SourceError):
            SimBriefSource(session=make_session(OFP, 503)).fetch_latest(userid='1')

    def test_connection_error(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("down")
        with pytest.raises(SourceError):
            SimBriefSource(session=session).fetch_latest(userid='1')


def test_fetch_extract():
    extract = SimBriefSource(session=make_session(OFP)).fetch_extract(username='concorde_fan')
    assert isinstance(extract, OFPExtract)
    assert extract.route == 'EGLL/27R CPT UL9 STU KJFK/04L'
    assert extract.cruise_fl == 580
