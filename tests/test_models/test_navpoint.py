import math
import pytest

from concorde_efb.exceptions import InvalidInputError
from concorde_efb.models.navpoint import (
    NavPoint,
    distance_nm,
    ft_to_m,
    great_circle_nm,
    initial_bearing_deg,
)

EGLL = NavPoint(51.4706, -0.4619, 'EGLL')
KJFK = NavPoint(40.6413, -73.7781, 'KJFK')


def test_egll_kjfk_distance_in_expected_range():
    distance = great_circle_nm(51.4706, -0.4619, 40.6413, -73.7781)
    assert 2500 <= distance <= 3500
    # Published great-circle distance is about 2,990 NM
    assert distance == pytest.approx(2995, abs=30)


def test_distance_is_symmetric():
    assert distance_nm(EGLL, KJFK) == pytest.approx(distance_nm(KJFK, EGLL))


def test_distance_to_self_is_zero():
    assert distance_nm(EGLL, EGLL) == 0.0
    assert EGLL.distance_to(EGLL) == 0.0


def test_antipodal_distance_does_not_fail():
    a = NavPoint(0.0, 0.0)
    b = NavPoint(0.0, 180.0)
    # Half the circumference: pi * 6371.0088 km in NM
    assert distance_nm(a, b) == pytest.approx(math.pi * 6371.0088 * 0.539957, rel=1e-9)


def test_one_degree_of_latitude_is_about_sixty_nm():
    assert great_circle_nm(0, 0, 1, 0) == pytest.approx(60.04, abs=0.05)


def test_initial_bearing_cardinal_directions():
    origin = NavPoint(0.0, 0.0)
    assert initial_bearing_deg(origin, NavPoint(1.0, 0.0)) == pytest.approx(0.0)
    assert initial_bearing_deg(origin, NavPoint(0.0, 1.0)) == pytest.approx(90.0)
    assert initial_bearing_deg(origin, NavPoint(-1.0, 0.0)) == pytest.approx(180.0)
    assert initial_bearing_deg(origin, NavPoint(0.0, -1.0)) == pytest.approx(270.0)


def test_initial_bearing_egll_to_kjfk_is_westbound():
    bearing = EGLL.bearing_to(KJFK)
    assert 0.0 <= bearing < 360.0
    assert bearing == pytest.approx(288, abs=3)


def test_haversine_distance_returns_bearing_and_distance():
    bearing, distance = EGLL.haversine_distance(KJFK)
    assert bearing == pytest.approx(initial_bearing_deg(EGLL, KJFK))
    assert distance == pytest.approx(distance_nm(EGLL, KJFK))


@pytest.mark.parametrize('lat, lon', [
    (float('nan'), 0.0),
    (0.0, float('inf')),
    (0.0, float('-inf')),
    ('51.0', 0.0),
    (None, 0.0),
])
def test_non_finite_coordinates_fail_fast(lat, lon):
    with pytest.raises(InvalidInputError):
        NavPoint(lat, lon)


def test_latitude_out_of_range():
    with pytest.raises(ValueError):
        NavPoint(91.0, 0.0)


def test_longitude_is_not_range_checked():
    point = NavPoint(10.0, 190.0)
    assert distance_nm(point, NavPoint(10.0, -170.0)) == pytest.approx(0.0, abs=1e-6)


def test_ft_to_m():
    assert ft_to_m(11800) == pytest.approx(3596.64, abs=0.01)
    assert ft_to_m("1000") == pytest.approx(304.8)
    assert ft_to_m("") == 0.0
    assert ft_to_m(None) == 0.0
    assert math.isnan(ft_to_m("abc"))


def test_str():
    assert str(NavPoint(1.5, 2.5, 'FIX')) == 'FIX (1.5, 2.5)'
    assert str(NavPoint(1.5, 2.5)) == '(1.5, 2.5)'
