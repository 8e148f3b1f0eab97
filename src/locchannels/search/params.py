"""
Search request descriptor: options, mutable parameters and URL query rendering.
"""

from typing import Dict, List, Optional
from urllib.parse import urlencode


class SearchOptions:
    """Static, per-backend search settings."""

    def __init__(self, search_action: str = 'search-results', default_limit: int = 20):
        self.search_action = search_action
        self.default_limit = default_limit

    def get_search_action(self) -> str:
        """Route name of the search results page for this backend."""
        return self.search_action


class SearchParams:
    """Mutable parameters of one search: query, facets to compute, filters."""

    def __init__(self, search_class_id: str, options: Optional[SearchOptions] = None):
        self.search_class_id = search_class_id
        self.options = options or SearchOptions()
        self.query = ''
        self.limit = self.options.default_limit
        self.facets: Dict[str, str] = {}
        self.filters: List[str] = []

    def get_search_class_id(self) -> str:
        return self.search_class_id

    def get_options(self) -> SearchOptions:
        return self.options

    def set_query(self, query: str):
        self.query = query or ''

    def set_limit(self, limit: int):
        self.limit = limit

    def add_facet(self, field: str, label: Optional[str] = None):
        """Request facet counts for ``field`` on the next search."""
        self.facets[field] = label or field

    def get_facet_config(self) -> Dict[str, str]:
        return dict(self.facets)

    def add_filter(self, filter_expression: str):
        """Add a ``field:value`` filter; adding the same filter twice is a no-op."""
        if filter_expression not in self.filters:
            self.filters.append(filter_expression)

    def has_filter(self, filter_expression: str) -> bool:
        return filter_expression in self.filters

    def get_filters(self) -> List[str]:
        return list(self.filters)

    def get_filters_by_field(self) -> Dict[str, List[str]]:
        """Group filters into ``{field: [value, ...]}``."""
        grouped: Dict[str, List[str]] = {}
        for current in self.filters:
            field, _, value = current.partition(':')
            grouped.setdefault(field, []).append(value)
        return grouped

    def copy(self) -> 'SearchParams':
        """Independent copy; filter and facet state are not shared."""
        duplicate = SearchParams(self.search_class_id, self.options)
        duplicate.query = self.query
        duplicate.limit = self.limit
        duplicate.facets = dict(self.facets)
        duplicate.filters = list(self.filters)
        return duplicate


class UrlQueryHelper:
    """Renders search parameters as an application query string."""

    def __init__(self, params: SearchParams):
        self.query = params.query
        self.filters = params.get_filters()

    def _build(self, filters: List[str]) -> str:
        pairs = [('lookfor', self.query)]
        pairs.extend(('filter[]', current) for current in filters)
        return '?' + urlencode(pairs)

    def add_filter(self, filter_expression: str) -> str:
        """Query string with ``filter_expression`` added to the current filters."""
        filters = list(self.filters)
        if filter_expression not in filters:
            filters.append(filter_expression)
        return self._build(filters)

    def __str__(self) -> str:
        return self._build(self.filters)
