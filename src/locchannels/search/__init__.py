"""
Search backend abstraction and the loc.gov implementation.
"""

from .params import SearchOptions, SearchParams, UrlQueryHelper
from .results import FacetValue, SearchResults
from .manager import ResultsManager, UnknownSourceError
from .loc import LocRecordDriver, LocSearchResults

__all__ = [
    'SearchOptions',
    'SearchParams',
    'UrlQueryHelper',
    'FacetValue',
    'SearchResults',
    'ResultsManager',
    'UnknownSourceError',
    'LocRecordDriver',
    'LocSearchResults'
]
