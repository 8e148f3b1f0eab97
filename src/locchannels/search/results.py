"""
Search results base class.

A results object owns a SearchParams instance, runs the search against its
backend and exposes records and facet counts. Channel building clones a
results object, narrows the clone with one filter and re-runs it.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .params import SearchParams, UrlQueryHelper
from ..record import RecordDriver


@dataclass(frozen=True)
class FacetValue:
    """One value of a facet field as shown to the user."""
    value: str
    display_text: str
    count: int = 0
    is_applied: bool = False


class SearchResults:
    """Backend-independent search results behaviour."""

    def __init__(self, params: SearchParams, logger: Optional[logging.Logger] = None):
        self.params = params
        self.logger = logger or logging.getLogger(__name__)
        self.results: List[RecordDriver] = []
        self.result_total = 0
        # field -> [(value, count), ...] in backend order
        self.raw_facets: Dict[str, List[Tuple[str, int]]] = {}
        self.search_performed = False

    def get_params(self) -> SearchParams:
        return self.params

    def clone(self) -> 'SearchResults':
        """
        Copy this object for an independent search.

        Parameters and filters are copied; the backend connection is shared.
        Records and facets of the copy are cleared until it is searched.
        """
        duplicate = copy.copy(self)
        duplicate.params = self.params.copy()
        duplicate.results = []
        duplicate.result_total = 0
        duplicate.raw_facets = {}
        duplicate.search_performed = False
        return duplicate

    def get_url_query(self) -> UrlQueryHelper:
        return UrlQueryHelper(self.params)

    def perform_search(self):
        """Run the backend search, filling results, result_total and raw_facets."""
        raise NotImplementedError

    def perform_and_process_search(self):
        self.perform_search()
        self.search_performed = True
        self.logger.debug(
            f"{self.params.get_search_class_id()} search with filters {self.params.get_filters()} "
            f"returned {len(self.results)} of {self.result_total} records"
        )

    def get_results(self) -> List[RecordDriver]:
        return self.results

    def get_result_total(self) -> int:
        return self.result_total

    def get_facet_list(self, fields: Optional[Dict[str, str]] = None) -> Dict[str, Dict]:
        """
        Facet values from the last search.

        Args:
            fields: field -> label to report; defaults to the facets configured
                on the params.

        Returns:
            ``{field: {'label': str, 'list': [FacetValue, ...]}}`` for each field
            the backend returned values for.
        """
        if fields is None:
            fields = self.params.get_facet_config()

        facet_list = {}
        for field, label in fields.items():
            if field not in self.raw_facets:
                continue
            facet_list[field] = {
                'label': label,
                'list': [
                    FacetValue(
                        value=value,
                        display_text=value,
                        count=count,
                        is_applied=self.params.has_filter(f"{field}:{value}")
                    )
                    for value, count in self.raw_facets[field]
                ]
            }
        return facet_list
