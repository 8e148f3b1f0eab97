"""
Tests for search parameters, results cloning, the results manager and URL building.
"""

import pytest

from locchannels.search.manager import ResultsManager, UnknownSourceError
from locchannels.search.params import SearchOptions, SearchParams, UrlQueryHelper
from locchannels.search.results import FacetValue, SearchResults
from locchannels.url import RouteNotFoundError, UrlBuilder


class TestSearchParams:
    """Test SearchParams class."""

    def test_defaults(self):
        params = SearchParams('LOC')

        assert params.get_search_class_id() == 'LOC'
        assert params.get_options().get_search_action() == 'search-results'
        assert params.limit == 20
        assert params.get_filters() == []
        assert params.get_facet_config() == {}

    def test_add_filter_ignores_duplicates(self):
        params = SearchParams('LOC')

        params.add_filter('topic_facet:A')
        params.add_filter('topic_facet:A')
        params.add_filter('author_facet:D')

        assert params.get_filters() == ['topic_facet:A', 'author_facet:D']
        assert params.has_filter('author_facet:D')
        assert not params.has_filter('author_facet:E')

    def test_filters_by_field(self):
        params = SearchParams('LOC')
        params.add_filter('topic_facet:A')
        params.add_filter('topic_facet:B:C')
        params.add_filter('author_facet:D')

        assert params.get_filters_by_field() == {
            'topic_facet': ['A', 'B:C'],
            'author_facet': ['D']
        }

    def test_copy_is_independent(self):
        params = SearchParams('LOC', SearchOptions('search-results', default_limit=5))
        params.set_query('dust')
        params.add_facet('topic_facet', 'Topic')
        params.add_filter('topic_facet:A')

        duplicate = params.copy()
        duplicate.add_filter('author_facet:D')
        duplicate.add_facet('author_facet', 'Author')

        assert params.get_filters() == ['topic_facet:A']
        assert params.get_facet_config() == {'topic_facet': 'Topic'}
        assert duplicate.query == 'dust'
        assert duplicate.limit == 5
        assert duplicate.get_options() is params.get_options()


class TestUrlQueryHelper:
    """Test query string rendering."""

    def test_add_filter_appends(self):
        params = SearchParams('LOC')
        params.set_query('dust bowl')
        params.add_filter('topic_facet:A')

        query = UrlQueryHelper(params).add_filter('author_facet:D')

        assert query == (
            '?lookfor=dust+bowl&filter%5B%5D=topic_facet%3AA&filter%5B%5D=author_facet%3AD'
        )

    def test_add_filter_already_present(self):
        params = SearchParams('LOC')
        params.add_filter('topic_facet:A')
        helper = UrlQueryHelper(params)

        assert helper.add_filter('topic_facet:A') == str(helper)
        assert str(helper) == '?lookfor=&filter%5B%5D=topic_facet%3AA'

    def test_add_filter_does_not_change_helper(self):
        helper = UrlQueryHelper(SearchParams('LOC'))

        helper.add_filter('topic_facet:A')

        assert str(helper) == '?lookfor='


class StaticResults(SearchResults):

    def perform_search(self):
        self.results = ['r1']
        self.result_total = 1
        self.raw_facets = {
            'topic_facet': [('A', 4), ('B', 2)],
            'author_facet': [('D', 1)]
        }


class TestSearchResults:
    """Test shared results behaviour."""

    def test_clone_has_independent_params(self):
        results = StaticResults(SearchParams('LOC'))
        results.perform_and_process_search()

        duplicate = results.clone()
        duplicate.get_params().add_filter('topic_facet:A')

        assert results.get_params().get_filters() == []
        assert duplicate.get_results() == []
        assert duplicate.get_facet_list() == {}
        assert not duplicate.search_performed
        assert results.search_performed
        assert results.get_results() == ['r1']

    def test_facet_list_marks_applied_values(self):
        params = SearchParams('LOC')
        params.add_facet('topic_facet', 'Topic')
        params.add_filter('topic_facet:B')
        results = StaticResults(params)
        results.perform_and_process_search()

        facet_list = results.get_facet_list()

        assert list(facet_list) == ['topic_facet']
        assert facet_list['topic_facet']['label'] == 'Topic'
        assert facet_list['topic_facet']['list'] == [
            FacetValue('A', 'A', 4, False),
            FacetValue('B', 'B', 2, True),
        ]

    def test_facet_list_explicit_fields(self):
        results = StaticResults(SearchParams('LOC'))
        results.perform_and_process_search()

        facet_list = results.get_facet_list({'author_facet': 'Author', 'missing': 'Missing'})

        assert list(facet_list) == ['author_facet']

    def test_base_perform_search_not_implemented(self):
        with pytest.raises(NotImplementedError):
            SearchResults(SearchParams('LOC')).perform_and_process_search()


class TestResultsManager:
    """Test ResultsManager registry."""

    def test_get_returns_new_instance(self):
        manager = ResultsManager()
        manager.register('LOC', lambda: StaticResults(SearchParams('LOC')))

        first = manager.get('LOC')
        second = manager.get('LOC')

        assert manager.has('LOC')
        assert first is not second
        assert first.get_params() is not second.get_params()

    def test_unknown_source(self):
        with pytest.raises(UnknownSourceError):
            ResultsManager().get('Summon')


class TestUrlBuilder:
    """Test UrlBuilder class."""

    def test_default_routes(self):
        url = UrlBuilder('https://discover.example.edu/vufind')

        assert url.from_route('search-results') == 'https://discover.example.edu/vufind/Search/Results'
        assert url.from_route('channels-search') == 'https://discover.example.edu/vufind/Channels/Search'

    def test_custom_route(self):
        url = UrlBuilder(routes={'search-results': '/find'})

        assert url.from_route('search-results') == 'http://localhost/find'

    def test_unknown_route(self):
        with pytest.raises(RouteNotFoundError):
            UrlBuilder().from_route('nope')
