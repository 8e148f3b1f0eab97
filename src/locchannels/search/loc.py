"""
Library of Congress search backend.

Translates SearchParams into loc.gov JSON API requests and the responses
back into record drivers and facet counts.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .params import SearchOptions, SearchParams
from .results import SearchResults
from ..api_client import LocApiClient
from ..record import RecordDriver


SEARCH_CLASS_ID = 'LOC'

# Application facet field -> loc.gov facet name
FIELD_MAP = {
    'topic_facet': 'subject',
    'author_facet': 'contributor',
    'language_facet': 'language',
    'format_facet': 'original-format',
}

# Keys to try, in order, when reading a facet field out of an item record
ITEM_FIELD_KEYS = {
    'topic_facet': ('subject', 'subjects'),
    'author_facet': ('contributor', 'contributor_names'),
    'language_facet': ('language',),
    'format_facet': ('original_format', 'format'),
}


def _as_list(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v]
    return [str(value)] if value else []


def item_id_from_url(url: str) -> str:
    """Extract ``2014717546`` from ``https://www.loc.gov/item/2014717546/``."""
    parts = [part for part in (url or '').split('/') if part]
    return parts[-1] if parts else ''


class LocRecordDriver(RecordDriver):
    """A loc.gov item with its fields re-keyed to application facet fields."""

    def __init__(self, raw_data: Optional[Dict] = None):
        super().__init__(SEARCH_CLASS_ID, raw_data)

    @classmethod
    def from_api_item(cls, item: Dict) -> 'LocRecordDriver':
        """Create a driver from a search result or ``item`` JSON object."""
        images = _as_list(item.get('image_url'))
        data = {
            'id': item_id_from_url(item.get('id') or item.get('url', '')),
            'title': item.get('title', ''),
            'url': item.get('url') or item.get('id', ''),
            'thumbnail': images[0] if images else None,
        }
        for field, keys in ITEM_FIELD_KEYS.items():
            for key in keys:
                values = _as_list(item.get(key))
                if values:
                    data[field] = values
                    break
        return cls(data)

    @classmethod
    def load(cls, client: LocApiClient, item_id: str) -> 'LocRecordDriver':
        """Fetch a single item by id."""
        response = client.get_item(item_id)
        item = dict(response.get('item', response))
        item.setdefault('id', item_id)
        return cls.from_api_item(item)


class LocSearchResults(SearchResults):
    """Search results backed by the loc.gov ``search/`` endpoint."""

    def __init__(self, client: LocApiClient, params: Optional[SearchParams] = None,
                 logger: Optional[logging.Logger] = None):
        super().__init__(params or SearchParams(SEARCH_CLASS_ID, SearchOptions()), logger)
        self.client = client

    def build_api_params(self) -> List[Tuple[str, str]]:
        """Translate the current params into loc.gov query parameters."""
        api_params = []
        if self.params.query:
            api_params.append(('q', self.params.query))

        fa = []
        for field, values in self.params.get_filters_by_field().items():
            loc_field = FIELD_MAP.get(field, field)
            fa.extend(f"{loc_field}:{value}" for value in values)
        if fa:
            api_params.append(('fa', '|'.join(fa)))

        api_params.append(('c', str(self.params.limit)))
        return api_params

    def perform_search(self):
        response = self.client.search(self.build_api_params())

        self.results = [
            LocRecordDriver.from_api_item(item) for item in response.get('results', [])
        ]
        pagination = response.get('pagination') or {}
        self.result_total = int(pagination.get('of', len(self.results)) or 0)
        self.raw_facets = self._parse_facets(response.get('facets') or [])

    def _parse_facets(self, facets: List[Dict]) -> Dict[str, List[Tuple[str, int]]]:
        loc_to_field = {loc: field for field, loc in FIELD_MAP.items()}
        parsed = {}
        for facet in facets:
            field = loc_to_field.get(facet.get('type'))
            if field is None:
                continue
            parsed[field] = [
                (str(entry.get('title', '')), int(entry.get('count', 0) or 0))
                for entry in facet.get('filters', [])
                if entry.get('title')
            ]
        return parsed
