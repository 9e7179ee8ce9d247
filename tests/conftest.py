import pytest
from pathlib import Path

from concorde_efb.models.airport import Airport
from concorde_efb.models.navaid import Navaid
from concorde_efb.models.reference import ReferenceData
from concorde_efb.models.runway import Runway


@pytest.fixture
def test_cache_dir(tmp_path) -> Path:
    """Return a temporary directory for cache testing."""
    return tmp_path / 'cache'


@pytest.fixture
def egll() -> Airport:
    return Airport(
        ident='EGLL',
        name='London Heathrow Airport',
        latitude=51.4706,
        longitude=-0.461941,
        elevation_ft=83,
        runways=(
            Runway(id='09L', heading_deg=90, length_m=3902),
            Runway(id='27R', heading_deg=270, length_m=3902),
            Runway(id='09R', heading_deg=90, length_m=3660),
            Runway(id='27L', heading_deg=270, length_m=3660),
        ),
    )


@pytest.fixture
def kjfk() -> Airport:
    return Airport(
        ident='KJFK',
        name='John F Kennedy International Airport',
        latitude=40.6413,
        longitude=-73.7781,
        elevation_ft=13,
        runways=(
            Runway(id='04L', heading_deg=44, length_m=3682),
            Runway(id='22R', heading_deg=224, length_m=3682),
            Runway(id='13R', heading_deg=134, length_m=4423),
            Runway(id='31L', heading_deg=314, length_m=4423),
        ),
    )


@pytest.fixture
def lfpg() -> Airport:
    return Airport(
        ident='LFPG',
        name='Paris Charles de Gaulle Airport',
        latitude=49.0097,
        longitude=2.5479,
        elevation_ft=392,
        runways=(
            Runway(id='09L', heading_deg=88, length_m=2700),
            Runway(id='27R', heading_deg=268, length_m=2700),
            Runway(id='08L', heading_deg=88, length_m=4215),
            Runway(id='26R', heading_deg=268, length_m=4215),
        ),
    )


@pytest.fixture
def kbos() -> Airport:
    return Airport(
        ident='KBOS',
        name='Boston Logan International Airport',
        latitude=42.3656,
        longitude=-71.0096,
        elevation_ft=20,
        runways=(
            Runway(id='04R', heading_deg=35, length_m=3073),
            Runway(id='22L', heading_deg=215, length_m=3073),
        ),
    )


@pytest.fixture
def lfpn() -> Airport:
    """Small airfield whose runways are far too short for a Concorde."""
    return Airport(
        ident='LFPN',
        name='Toussus-le-Noble Airport',
        latitude=48.7519,
        longitude=2.1062,
        elevation_ft=538,
        runways=(
            Runway(id='07L', heading_deg=70, length_m=1100),
            Runway(id='25R', heading_deg=250, length_m=1100),
        ),
    )


@pytest.fixture
def navaids():
    """CPT exists twice: Compton in England and Cape Town in South Africa."""
    return [
        Navaid(ident='CPT', latitude=-33.9717, longitude=18.6019, type='VOR', name='Cape Town'),
        Navaid(ident='CPT', latitude=51.4920, longitude=-1.2198, type='VOR-DME', name='Compton'),
        Navaid(ident='STU', latitude=51.9967, longitude=-5.0364, type='VOR-DME', name='Strumble'),
        Navaid(ident='BOS', latitude=42.3574, longitude=-70.9895, type='VOR-DME', name='Boston'),
    ]


@pytest.fixture
def reference(egll, kjfk, lfpg, kbos, lfpn, navaids) -> ReferenceData:
    return ReferenceData.from_records(airports=[egll, kjfk, lfpg, kbos, lfpn], navaids=navaids)
