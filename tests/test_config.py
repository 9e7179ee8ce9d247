import pytest

from concorde_efb.config import (
    CONCORDE,
    DirectionStrategy,
    LandingCalibration,
    PlannerSettings,
    RecommendObjective,
    SnapTieBreak,
    get_log_level,
)


def test_aircraft_figures():
    assert CONCORDE.mtow_kg == 185066
    assert CONCORDE.mlw_kg == 111130
    assert CONCORDE.fuel_capacity_kg == 95681
    assert CONCORDE.min_takeoff_m_at_mtow == round(11800 * 0.3048)


def test_default_settings():
    settings = PlannerSettings()
    assert settings.snap_tie_break is SnapTieBreak.LOWER
    assert settings.direction_strategy is DirectionStrategy.BEARING
    assert settings.recommend_objective is RecommendObjective.CRUISE_DURATION
    assert settings.landing_calibration is LandingCalibration.STANDARD


def test_with_overrides_returns_copy():
    settings = PlannerSettings()
    changed = settings.with_overrides(snap_tie_break=SnapTieBreak.HIGHER)
    assert changed.snap_tie_break is SnapTieBreak.HIGHER
    assert settings.snap_tie_break is SnapTieBreak.LOWER


def test_from_env(monkeypatch):
    monkeypatch.setenv('CONCORDE_EFB_SNAP_TIE_BREAK', 'higher')
    monkeypatch.setenv('CONCORDE_EFB_DIRECTION_STRATEGY', 'LONGITUDE_DELTA')
    monkeypatch.setenv('CONCORDE_EFB_RECOMMEND_OBJECTIVE', 'fuel')
    monkeypatch.setenv('CONCORDE_EFB_LANDING_CALIBRATION', 'alternate')
    monkeypatch.setenv('CONCORDE_EFB_CACHE_DIR', '/tmp/efb')
    monkeypatch.setenv('CONCORDE_EFB_HTTP_TIMEOUT', '5')
    settings = PlannerSettings.from_env()
    assert settings.snap_tie_break is SnapTieBreak.HIGHER
    assert settings.direction_strategy is DirectionStrategy.LONGITUDE_DELTA
    assert settings.recommend_objective is RecommendObjective.FUEL
    assert settings.landing_calibration is LandingCalibration.ALTERNATE
    assert settings.cache_dir == '/tmp/efb'
    assert settings.http_timeout == 5


def test_from_env_ignores_bad_values(monkeypatch):
    monkeypatch.setenv('CONCORDE_EFB_SNAP_TIE_BREAK', 'sideways')
    monkeypatch.setenv('CONCORDE_EFB_HTTP_TIMEOUT', 'soon')
    settings = PlannerSettings.from_env()
    assert settings.snap_tie_break is SnapTieBreak.LOWER
    assert settings.http_timeout == PlannerSettings().http_timeout


@pytest.mark.parametrize('value,expected', [(None, 'INFO'), ('debug', 'DEBUG')])
def test_log_level(monkeypatch, value, expected):
    if value is None:
        monkeypatch.delenv('CONCORDE_EFB_LOG_LEVEL', raising=False)
    else:
        monkeypatch.setenv('CONCORDE_EFB_LOG_LEVEL', value)
    assert get_log_level() == expected
