"""
OurAirports reference data loader.

Downloads airports.csv, runways.csv and navaids.csv from the OurAirports
data repository, caches them and turns them into a ReferenceData context.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd
import requests

from ..exceptions import SourceError
from ..models.airport import Airport
from ..models.navaid import Navaid
from ..models.navpoint import ft_to_m
from ..models.reference import ReferenceData
from ..models.runway import Runway
from ..utils.numbers import is_finite_number, round_half_up
from .cached import CachedSource

logger = logging.getLogger(__name__)

BASE_URL = "https://raw.githubusercontent.com/davidmegginson/ourairports-data/master"
ICAO_PATTERN = r"^[A-Z]{4}$"


def _number(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if is_finite_number(number) else None


def _with_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    """Rows with an ident and finite latitude/longitude, idents upper-cased."""
    df = df.copy()
    df['ident'] = df['ident'].astype(str).str.strip().str.upper()
    df['latitude_deg'] = pd.to_numeric(df['latitude_deg'], errors='coerce')
    df['longitude_deg'] = pd.to_numeric(df['longitude_deg'], errors='coerce')
    df = df[(df['ident'] != '') & df['latitude_deg'].notna() & df['longitude_deg'].notna()]
    return df[df['latitude_deg'].between(-90.0, 90.0)]


def _runway_length_m(row: pd.Series) -> float:
    length = _number(row.get('length_m'))
    if length is None or length <= 0:
        length = ft_to_m(row.get('length_ft'))
    return float(round_half_up(length)) if is_finite_number(length) and length > 0 else 0.0


def build_runways(runways_df: pd.DataFrame, idents) -> Dict[str, List[Runway]]:
    """
    Runways keyed by airport ident; both ends of each runway become entries.

    Length comes from length_m, or length_ft converted, rounded to the metre.
    """
    wanted = set(idents)
    result: Dict[str, List[Runway]] = {}
    for _, row in runways_df.iterrows():
        airport_ident = str(row.get('airport_ident', '')).strip().upper()
        if airport_ident not in wanted:
            continue
        length_m = _runway_length_m(row)
        for end in ('le', 'he'):
            end_ident = str(row.get(f'{end}_ident', '')).strip().upper()
            if not end_ident:
                continue
            heading = _number(row.get(f'{end}_heading_degT'))
            result.setdefault(airport_ident, []).append(Runway(
                id=end_ident,
                heading_deg=float(round_half_up(heading)) if heading is not None else 0.0,
                length_m=length_m,
                elevation_ft=_number(row.get(f'{end}_elevation_ft')),
            ))
    return result


def build_reference(
    airports_df: pd.DataFrame,
    runways_df: Optional[pd.DataFrame] = None,
    navaids_df: Optional[pd.DataFrame] = None,
) -> ReferenceData:
    """
    Build reference data from OurAirports frames.

    Only 4-letter airport idents with valid coordinates are kept; the first
    row wins for duplicate idents. Every navaid sharing an ident is kept.
    """
    airports_df = _with_coordinates(airports_df)
    airports_df = airports_df[airports_df['ident'].str.match(ICAO_PATTERN)]
    airports_df = airports_df.drop_duplicates(subset='ident', keep='first')

    runways = build_runways(runways_df, airports_df['ident']) if runways_df is not None else {}

    airports = []
    for _, row in airports_df.iterrows():
        ident = row['ident']
        airports.append(Airport(
            ident=ident,
            name=str(row.get('name') or ident),
            latitude=float(row['latitude_deg']),
            longitude=float(row['longitude_deg']),
            elevation_ft=_number(row.get('elevation_ft')),
            runways=tuple(runways.get(ident, ())),
        ))

    navaids = []
    if navaids_df is not None:
        for _, row in _with_coordinates(navaids_df).iterrows():
            navaids.append(Navaid(
                ident=row['ident'],
                latitude=float(row['latitude_deg']),
                longitude=float(row['longitude_deg']),
                type=str(row.get('type') or 'NAVAID'),
                name=str(row.get('name') or row['ident']),
            ))

    reference = ReferenceData.from_records(airports, navaids)
    logger.info(f"Built {reference!r}")
    return reference


class OurAirportsSource(CachedSource):
    """
    OurAirports CSV source.

    Example:
        source = OurAirportsSource("~/.cache/concorde_efb")
        reference = source.get_reference()
        reference.airport("EGLL").runways
    """

    DEFAULT_TIMEOUT = 30

    def __init__(self, cache_dir: str, session: Optional[requests.Session] = None,
                 timeout: int = DEFAULT_TIMEOUT, base_url: str = BASE_URL):
        """
        Args:
            cache_dir: Base directory for caching
            session: Optional requests.Session for dependency injection (testing)
            timeout: HTTP request timeout in seconds
            base_url: Location of the CSV files
        """
        super().__init__(cache_dir)
        self._session = session or requests.Session()
        self._timeout = timeout
        self.base_url = base_url.rstrip('/')

    def _download_csv(self, name: str) -> pd.DataFrame:
        url = f"{self.base_url}/{name}.csv"
        logger.info(f"Downloading {url}")
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SourceError(f"Failed to download {name}.csv", details=str(e)) from e
        return self.read_csv_text(response.text)

    def fetch_airports(self) -> pd.DataFrame:
        df = self._download_csv('airports')
        # Closed airports and heliports cannot take a Concorde
        if 'type' in df.columns:
            df = df[~df['type'].isin(['heliport', 'closed'])]
        return df

    def fetch_runways(self) -> pd.DataFrame:
        return self._download_csv('runways')

    def fetch_navaids(self) -> pd.DataFrame:
        return self._download_csv('navaids')

    def get_reference(self, max_age_days: int = 30, include_navaids: bool = True) -> ReferenceData:
        """
        Reference data from cache, downloading missing or expired files.

        Raises:
            SourceError: If a file has to be downloaded and cannot be
        """
        airports = self.get_data('airports', 'csv', max_age_days=max_age_days)
        runways = self.get_data('runways', 'csv', max_age_days=max_age_days)
        navaids = self.get_data('navaids', 'csv', max_age_days=max_age_days) if include_navaids else None
        return build_reference(airports, runways, navaids)
