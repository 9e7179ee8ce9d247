"""
External data sources.

These adapters fetch reference data, METARs and OFPs over HTTP; the
planning engine only consumes what they return.
"""

from .cached import CachedSource
from .ourairports import OurAirportsSource, build_reference, build_runways
from .metar import MetarSource, MetarFetchResult
from .simbrief import SimBriefSource

__all__ = [
    'CachedSource',
    'OurAirportsSource',
    'build_reference',
    'build_runways',
    'MetarSource',
    'MetarFetchResult',
    'SimBriefSource',
]
