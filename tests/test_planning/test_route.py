import pytest

from concorde_efb.exceptions import InvalidInputError
from concorde_efb.models.flight_level import Direction
from concorde_efb.models.navpoint import distance_nm
from concorde_efb.planning.route import (
    RouteResolver,
    TokenKind,
    classify_token,
    detour_factor,
    pick_navaid,
    tokenize_route,
)


class TestTokenize:

    def test_compound_tokens_collapse(self):
        assert tokenize_route("egll/27r CPT/N1160F580 DCT STU, KJFK/04L") == [
            'EGLL', 'CPT', 'DCT', 'STU', 'KJFK',
        ]

    def test_trailing_punctuation(self):
        assert tokenize_route("CPT; STU. BOS:") == ['CPT', 'STU', 'BOS']

    def test_other_slash_tokens_kept(self):
        assert tokenize_route("SID/ABC") == ['SID/ABC']

    @pytest.mark.parametrize('route', [None, '', '   ', 42])
    def test_empty(self, route):
        assert tokenize_route(route) == []


class TestClassify:

    def test_procedures_and_airways(self, reference):
        assert classify_token('DCT', reference) == (TokenKind.PROCEDURE, None)
        assert classify_token('SIDCPT2F', reference)[0] == TokenKind.PROCEDURE
        assert classify_token('UL9', reference) == (TokenKind.AIRWAY, None)
        assert classify_token('NAT', reference)[0] == TokenKind.UNRESOLVED

    def test_latlon(self, reference):
        kind, point = classify_token('51.5,-10.25', reference)
        assert kind == TokenKind.LATLON
        assert (point.latitude, point.longitude) == (51.5, -10.25)

    def test_latlon_out_of_range(self, reference):
        assert classify_token('95.0,10.0', reference) == (TokenKind.UNRESOLVED, None)

    def test_airport(self, reference):
        kind, point = classify_token('KBOS', reference)
        assert kind == TokenKind.AIRPORT
        assert point.kind == 'airport'

    def test_navaid_disambiguated_by_corridor(self, reference, egll, kjfk):
        kind, point = classify_token('CPT', reference, egll.navpoint, kjfk.navpoint)
        assert kind == TokenKind.NAVAID
        assert point.latitude == pytest.approx(51.4920)

    def test_navaid_first_candidate_without_endpoints(self, reference):
        _, point = classify_token('CPT', reference)
        assert point.latitude == pytest.approx(-33.9717)

    def test_pick_navaid_empty(self):
        assert pick_navaid([]) is None


class TestDetourFactor:

    def test_airways_and_procedures(self):
        assert detour_factor(0, 1, 2) == pytest.approx(0.05)

    def test_capped(self):
        assert detour_factor(1, 20, 0) == pytest.approx(0.18)

    def test_not_applied_with_geometry(self):
        assert detour_factor(2, 3, 3) == 0.0
        assert detour_factor(0, 0, 0) == 0.0


class TestRouteResolver:

    def test_route_through_points(self, reference, egll, kjfk):
        result = RouteResolver(reference).resolve("EGLL/27R CPT UL9 STU KJFK", 'EGLL', 'KJFK')
        labels = [p.label for p in result.resolution.points]
        assert labels == ['CPT', 'STU']
        assert result.resolution.recognized.airways == ['UL9']
        assert result.direct_nm == pytest.approx(distance_nm(egll.navpoint, kjfk.navpoint))
        assert result.distance_nm >= result.direct_nm
        assert not result.approximate
        assert result.direction == Direction.WEST

    def test_empty_route_is_direct(self, reference):
        result = RouteResolver(reference).resolve(None, 'egll', 'kjfk')
        assert result.distance_nm == pytest.approx(result.direct_nm)
        assert result.summary().startswith('Route distance ')

    def test_airways_only_route_is_approximate(self, reference):
        result = RouteResolver(reference).resolve("DCT UL9 DCT", 'EGLL', 'KJFK')
        assert result.approximate
        assert result.detour_factor == pytest.approx(0.05)
        assert result.distance_nm == pytest.approx(result.raw_nm * 1.05)
        summary = result.summary()
        assert '2 procedure tokens ignored.' in summary
        assert '1 airway tokens ignored.' in summary
        assert '+5% added for airways/procedures' in summary

    def test_unresolved_tokens(self, reference):
        result = RouteResolver(reference).resolve("CPT XYZZY 95.0,10.0 STU", 'EGLL', 'KJFK')
        assert result.resolution.recognized.unresolved == ['XYZZY', '95.0,10.0']
        assert '2 unresolved tokens ignored' in result.summary()

    def test_unknown_airport(self, reference):
        with pytest.raises(InvalidInputError):
            RouteResolver(reference).resolve("CPT", 'EGLL', 'ZZZZ')

    def test_to_dict(self, reference):
        data = RouteResolver(reference).resolve("CPT STU", 'EGLL', 'KJFK').to_dict()
        assert data['direction'] == 'W'
        assert len(data['resolution']['points']) == 2
