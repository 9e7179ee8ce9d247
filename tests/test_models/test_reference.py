import pytest

from concorde_efb.models.airport import Airport
from concorde_efb.models.navaid import Navaid
from concorde_efb.models.reference import ReferenceData
from concorde_efb.models.runway import Runway


def test_airport_lookup_is_case_insensitive(reference):
    assert reference.airport('egll').ident == 'EGLL'
    assert reference.airport(' KJFK ').name == 'John F Kennedy International Airport'
    assert reference.has_airport('lfpg')


def test_unknown_airport_returns_none(reference):
    assert reference.airport('ZZZZ') is None
    assert reference.airport(None) is None
    assert not reference.has_airport('')


def test_indices_are_read_only(reference):
    with pytest.raises(TypeError):
        reference.airports['XXXX'] = None
    with pytest.raises(TypeError):
        reference.navaids['XXX'] = ()


def test_navaid_candidates_keep_every_duplicate(reference):
    candidates = reference.navaid_candidates('cpt')
    assert isinstance(candidates, tuple)
    assert [n.name for n in candidates] == ['Cape Town', 'Compton']
    assert reference.navaid_candidates('NOPE') == ()


def test_first_airport_wins_for_duplicate_idents():
    first = Airport('EGLL', 'First', 51.0, 0.0)
    second = Airport('EGLL', 'Second', 52.0, 1.0)
    reference = ReferenceData.from_records(airports=[first, second])
    assert reference.airport('EGLL').name == 'First'
    assert len(reference) == 1


def test_repr(reference):
    assert repr(reference) == 'ReferenceData(airports=5, navaid_idents=3)'


def test_airport_get_runway(egll):
    assert egll.get_runway('27r').length_m == 3902
    assert egll.get_runway('36') is None
    assert egll.navpoint.name == 'EGLL'


def test_airport_runways_become_tuple():
    airport = Airport('TEST', 'Test', 0.0, 0.0, runways=[Runway('09', 90, 2000)])
    assert isinstance(airport.runways, tuple)
    assert airport.to_dict()['runways'][0]['id'] == '09'


def test_runway_negative_length_is_zero():
    assert Runway('09', 90, -5).length_m == 0.0
    assert Runway('09', 90, None).length_m == 0.0


def test_runway_from_dict_converts_strings():
    runway = Runway.from_dict({'id': '27L', 'heading_deg': '270', 'length_m': '3660', 'other': 'x'})
    assert runway.heading_deg == 270.0
    assert runway.length_m == 3660.0
    assert runway.elevation_ft is None


def test_navaid_navpoint():
    navaid = Navaid('CPT', 51.492, -1.2198)
    assert navaid.navpoint.latitude == 51.492
    assert navaid.to_dict()['type'] == 'NAVAID'
