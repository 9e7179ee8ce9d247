"""
Read-only reference data context.

The airport and navaid indices are built once by a loader (see
concorde_efb.sources.ourairports) and handed explicitly to whatever needs
them. Nothing in the engine mutates or caches them.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .airport import Airport
from .navaid import Navaid

logger = logging.getLogger(__name__)


class ReferenceData:
    """
    Airport and navaid indices keyed by upper-case ident.

    Examples:
        >>> ref = ReferenceData.from_records(airports=[egll, kjfk], navaids=[cpt])
        >>> ref.airport("egll").name
        'London Heathrow'
    """

    def __init__(
        self,
        airports: Optional[Mapping[str, Airport]] = None,
        navaids: Optional[Mapping[str, Sequence[Navaid]]] = None,
    ):
        self._airports: Mapping[str, Airport] = MappingProxyType(
            {k.upper(): v for k, v in (airports or {}).items()}
        )
        self._navaids: Mapping[str, Tuple[Navaid, ...]] = MappingProxyType(
            {k.upper(): tuple(v) for k, v in (navaids or {}).items()}
        )

    @classmethod
    def from_records(
        cls,
        airports: Iterable[Airport] = (),
        navaids: Iterable[Navaid] = (),
    ) -> 'ReferenceData':
        """Build indices from flat record lists; the first airport per ident wins."""
        airport_index: Dict[str, Airport] = {}
        for airport in airports:
            airport_index.setdefault(airport.ident.upper(), airport)

        navaid_index: Dict[str, list] = {}
        for navaid in navaids:
            navaid_index.setdefault(navaid.ident.upper(), []).append(navaid)

        logger.debug(f"Reference data: {len(airport_index)} airports, {len(navaid_index)} navaid idents")
        return cls(airport_index, navaid_index)

    @property
    def airports(self) -> Mapping[str, Airport]:
        return self._airports

    @property
    def navaids(self) -> Mapping[str, Tuple[Navaid, ...]]:
        return self._navaids

    def airport(self, icao: Optional[str]) -> Optional[Airport]:
        """Look up an airport by ICAO code, None when unknown."""
        if not icao:
            return None
        return self._airports.get(icao.strip().upper())

    def has_airport(self, icao: Optional[str]) -> bool:
        return self.airport(icao) is not None

    def navaid_candidates(self, ident: Optional[str]) -> Tuple[Navaid, ...]:
        """All navaids sharing an ident (empty tuple when unknown)."""
        if not ident:
            return ()
        return self._navaids.get(ident.strip().upper(), ())

    def __len__(self) -> int:
        return len(self._airports)

    def __repr__(self) -> str:
        return f"ReferenceData(airports={len(self._airports)}, navaid_idents={len(self._navaids)})"
