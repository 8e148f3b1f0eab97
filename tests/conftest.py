"""
Pytest configuration and shared fixtures.
"""

import pytest
from pathlib import Path
from unittest.mock import Mock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from locchannels.record import RecordDriver
from locchannels.search.manager import ResultsManager
from locchannels.search.params import SearchOptions, SearchParams
from locchannels.search.results import SearchResults
from locchannels.url import UrlBuilder


class StubResults(SearchResults):
    """
    In-memory search backend.

    The number of records a search returns is looked up by the last filter
    applied (``records_by_filter``), falling back to ``default_count``.
    Every executed search appends its filter list to ``searches``, which is
    shared between clones.
    """

    def __init__(self, facet_data=None, records_by_filter=None, default_count=1,
                 search_class_id='Solr'):
        super().__init__(SearchParams(search_class_id, SearchOptions('search-results')))
        self.facet_data = facet_data or {}
        self.records_by_filter = records_by_filter or {}
        self.default_count = default_count
        self.searches = []
        self.raw_facets = dict(self.facet_data)

    def perform_search(self):
        filters = self.params.get_filters()
        self.searches.append(filters)
        key = filters[-1] if filters else ''
        count = self.records_by_filter.get(key, self.default_count)
        self.results = [
            RecordDriver(self.params.get_search_class_id(), {
                'id': f"{key}#{i}",
                'title': f"Record {i} for {key}",
                'thumbnail': f"https://img.example/{i}.jpg"
            })
            for i in range(count)
        ]
        self.result_total = count
        self.raw_facets = dict(self.facet_data)


@pytest.fixture
def url_builder():
    """URL builder rooted at http://localhost/."""
    return UrlBuilder('http://localhost/')


@pytest.fixture
def stub_results():
    """Factory for StubResults instances."""
    return StubResults


@pytest.fixture
def results_manager():
    """Results manager with a single Solr source backed by StubResults."""
    manager = ResultsManager()
    manager.register('Solr', StubResults)
    return manager


@pytest.fixture
def sample_record():
    """Record with three topics and one author."""
    return RecordDriver('Solr', {
        'id': 'rec1',
        'title': 'Dust Bowl photographs',
        'topic_facet': ['A', 'B', 'C'],
        'author_facet': ['D'],
    })


@pytest.fixture
def sample_search_response():
    """loc.gov search/ JSON response."""
    return {
        'results': [
            {
                'id': 'http://www.loc.gov/item/2017762891/',
                'url': 'https://www.loc.gov/item/2017762891/',
                'title': 'Destitute pea pickers in California',
                'image_url': [
                    'https://tile.loc.gov/image-services/iiif/service:pnp:fsa:8b29000:8b29516v/full/pct:6.25/0/default.jpg'
                ],
                'subject': ['migrant agricultural laborers', 'mothers'],
                'contributor': ['lange, dorothea'],
                'language': ['english'],
                'original_format': ['photo, print, drawing'],
            },
            {
                'id': 'http://www.loc.gov/item/2017770735/',
                'title': 'Dust storm, Cimarron County, Oklahoma',
                'image_url': [],
                'subject': 'dust storms',
                'contributor': ['rothstein, arthur'],
            },
        ],
        'pagination': {'current': 1, 'of': 245, 'total': 13},
        'facets': [
            {
                'type': 'subject',
                'filters': [
                    {'title': 'dust storms', 'count': 120},
                    {'title': 'farms', 'count': 88},
                    {'title': 'migrant agricultural laborers', 'count': 40},
                ]
            },
            {
                'type': 'contributor',
                'filters': [
                    {'title': 'lange, dorothea', 'count': 61},
                ]
            },
            {
                'type': 'online-format',
                'filters': [
                    {'title': 'image', 'count': 245},
                ]
            },
        ]
    }


@pytest.fixture
def mock_client(sample_search_response):
    """Mock LocApiClient returning the sample search response."""
    client = Mock()
    client.search.return_value = sample_search_response
    return client
