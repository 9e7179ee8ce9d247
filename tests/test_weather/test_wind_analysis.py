"""Tests for flight categories and runway wind components."""

import pytest

from concorde_efb.weather.analysis import (
    best_runway_for_wind,
    flight_category,
    wind_components,
    wind_components_for_runways,
)
from concorde_efb.weather.models import FlightCategory, WindComponentSummary


class TestWindComponents:

    def test_pure_headwind(self):
        wc = wind_components(90, 20, 90)
        assert wc.headwind_kt == 20.0
        assert wc.crosswind_kt == 0.0
        assert wc.crosswind_dir is None

    def test_crosswind_from_right(self):
        wc = wind_components(180, 20, 90)
        assert wc.headwind_kt == 0.0
        assert wc.crosswind_kt == 20.0
        assert wc.crosswind_dir == 'R'

    def test_crosswind_from_left(self):
        wc = wind_components(0, 20, 90)
        assert wc.crosswind_kt == 20.0
        assert wc.crosswind_dir == 'L'

    def test_tailwind(self):
        wc = wind_components(270, 15, 90)
        assert wc.headwind_kt == -15.0
        assert wc.tailwind
        assert not wc.within_limits()

    def test_quartering_wind_rounded(self):
        wc = wind_components(300, 20, 270)
        assert wc.headwind_kt == pytest.approx(17.3)
        assert wc.crosswind_kt == pytest.approx(10.0)
        assert wc.crosswind_dir == 'R'

    @pytest.mark.parametrize('direction,speed', [(None, 10), (270, None), (None, None)])
    def test_missing_inputs(self, direction, speed):
        wc = wind_components(direction, speed, 90)
        assert wc == WindComponentSummary()
        assert wc.within_limits()

    def test_crosswind_limit(self):
        assert not wind_components(180, 25, 90).within_limits()
        assert wind_components(180, 25, 90).within_limits(max_crosswind_kt=30)

    def test_multiple_runways(self):
        components = wind_components_for_runways(270, 10, {'09': 90, '27': 270})
        assert components['27'].headwind_kt == 10.0
        assert components['09'].headwind_kt == -10.0

    def test_best_runway(self):
        assert best_runway_for_wind(250, 15, {'09L': 90, '27R': 270, '18': 180}) == '27R'
        assert best_runway_for_wind(None, 15, {'09L': 90}) is None


class TestFlightCategory:

    @pytest.mark.parametrize('visibility_km,ceiling_ft,expected', [
        (10.0, None, FlightCategory.VFR),
        (10.0, 5000, FlightCategory.VFR),
        (8.0, 2000, FlightCategory.MVFR),
        (2.0, None, FlightCategory.IFR),
        (10.0, 800, FlightCategory.IFR),
        (1.0, 5000, FlightCategory.LIFR),
        (None, 400, FlightCategory.LIFR),
        (None, None, FlightCategory.UNKNOWN),
    ])
    def test_bands(self, visibility_km, ceiling_ft, expected):
        assert flight_category(visibility_km, ceiling_ft) == expected

    def test_cavok_is_vfr(self):
        assert flight_category(None, None, cavok=True) == FlightCategory.VFR

    def test_ordering(self):
        assert FlightCategory.UNKNOWN < FlightCategory.LIFR < FlightCategory.IFR
        assert FlightCategory.MVFR < FlightCategory.VFR
        assert min(FlightCategory.VFR, FlightCategory.IFR) == FlightCategory.IFR
