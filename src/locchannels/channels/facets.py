"""
Facet-driven channel provider.

Turns facet values, taken either from a single record or from the facet
counts of an executed search, into channels: each channel is the original
search re-run with one extra ``field:value`` filter.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote_plus

from .base import AbstractChannelProvider, Channel
from ..config import DEFAULT_CHANNEL_FIELDS
from ..record import RecordDriver
from ..search.manager import ResultsManager
from ..search.params import SearchParams
from ..search.results import FacetValue, SearchResults
from ..url import UrlBuilder


TOKEN_SEPARATOR = '|'


def _record_values(raw) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(value) for value in raw]
    return [str(raw)]


class FacetsChannelProvider(AbstractChannelProvider):
    """Builds "Label: value" channels from facet values."""

    def __init__(self, results_manager: ResultsManager, url: UrlBuilder,
                 fields: Optional[Dict[str, str]] = None,
                 max_fields_to_suggest: int = 2,
                 max_values_to_suggest_per_field: int = 2,
                 logger: Optional[logging.Logger] = None):
        super().__init__(logger or logging.getLogger(__name__))
        self.results_manager = results_manager
        self.url = url
        # Facet fields to use (field name => description), in priority order
        self.fields = dict(fields) if fields is not None else dict(DEFAULT_CHANNEL_FIELDS)
        self.max_fields_to_suggest = max_fields_to_suggest
        self.max_values_to_suggest_per_field = max_values_to_suggest_per_field

    def set_options(self, options: Dict[str, Any]):
        if 'fields' in options:
            self.fields = dict(options['fields'])
        if 'max_fields_to_suggest' in options:
            self.max_fields_to_suggest = int(options['max_fields_to_suggest'])
        if 'max_values_to_suggest_per_field' in options:
            self.max_values_to_suggest_per_field = int(options['max_values_to_suggest_per_field'])

    def configure_search_params(self, params: SearchParams):
        """Register every channel field as a facet on the upcoming search."""
        for field, desc in self.fields.items():
            params.add_facet(field, desc)

    def get_from_record(self, driver: RecordDriver, channel_token: Optional[str] = None) -> List[Channel]:
        """
        Channels derived from a record's own facet values.

        Args:
            driver: Record driver
            channel_token: Token identifying a single channel to load; when
                omitted all channels are built.
        """
        results = self.results_manager.get(driver.get_source_identifier())
        if channel_token is not None:
            return [self.build_channel_from_token(results, channel_token)]

        data = driver.get_raw_data()
        facet_values = {
            field: [FacetValue(value=value, display_text=value)
                    for value in _record_values(data[field])]
            for field in self.fields
            if field in data
        }
        channels = self._build_channels(results, facet_values)
        self.logger.info(
            f"Built {len(channels)} channel(s) for record {driver.get_unique_id()}"
        )
        return channels

    def get_from_search(self, results: SearchResults, channel_token: Optional[str] = None) -> List[Channel]:
        """
        Channels derived from the facet values of an executed search.

        Values already applied as filters on ``results`` are skipped.
        """
        if channel_token is not None:
            return [self.build_channel_from_token(results, channel_token)]

        facet_list = results.get_facet_list()
        facet_values = {
            field: facet_list[field]['list']
            for field in self.fields
            if field in facet_list
        }
        channels = self._build_channels(results, facet_values)
        self.logger.info(f"Built {len(channels)} channel(s) from search facets")
        return channels

    def _build_channels(self, results: SearchResults,
                        facet_values: Dict[str, List[FacetValue]]) -> List[Channel]:
        """
        Walk fields and values in order, keeping non-empty channels.

        Only non-empty channels count toward the per-field cap, and a field
        counts toward the field cap only if it produced a channel.
        """
        channels = []
        field_count = 0
        for field in self.fields:
            if field_count >= self.max_fields_to_suggest:
                break
            if field not in facet_values:
                continue
            current_value_count = 0
            for current in facet_values[field]:
                if current_value_count >= self.max_values_to_suggest_per_field:
                    break
                if current.is_applied:
                    continue
                channel = self.build_channel_from_facet(results, field, current)
                if channel.contents:
                    channels.append(channel)
                    current_value_count += 1
                else:
                    self.logger.debug(f"Dropping empty channel '{channel.title}'")
            if current_value_count > 0:
                field_count += 1
        return channels

    def build_channel(self, results: SearchResults, filter_expression: str, title: str) -> Channel:
        """Clone ``results``, add ``filter_expression`` and run the narrowed search."""
        new_results = results.clone()
        params = new_results.get_params()
        params.add_filter(filter_expression)

        query = new_results.get_url_query().add_filter(filter_expression)
        search_url = self.url.from_route(params.get_options().get_search_action()) + query
        channels_url = self.url.from_route('channels-search') + query \
            + '&source=' + quote_plus(params.get_search_class_id())

        self.logger.debug(f"Building channel '{title}' with filter {filter_expression}")
        new_results.perform_and_process_search()
        return Channel(
            title=title,
            search_url=search_url,
            channels_url=channels_url,
            contents=self.summarize_record_drivers(new_results.get_results())
        )

    def build_channel_from_token(self, results: SearchResults, token: str) -> Channel:
        """Build the channel named by ``"<title>|<filter>"``; placeholder if malformed."""
        parts = token.split(TOKEN_SEPARATOR, 1)
        if len(parts) < 2:
            self.logger.warning(f"Ignoring malformed channel token: {token!r}")
            return Channel.placeholder()
        return self.build_channel(results, parts[1], parts[0])

    def build_channel_from_facet(self, results: SearchResults, field: str, value: FacetValue) -> Channel:
        return self.build_channel(
            results,
            f"{field}:{value.value}",
            f"{self.fields[field]}: {value.display_text}"
        )

    def get_channel_token(self, field: str, value: FacetValue) -> str:
        """
        Token that re-requests the channel for ``field``/``value``.

        Raises:
            ValueError: the channel title contains the token separator, so the
                title could not be told apart from the filter.
        """
        title = f"{self.fields[field]}: {value.display_text}"
        if TOKEN_SEPARATOR in title:
            raise ValueError(
                f"Cannot build channel token: title {title!r} contains {TOKEN_SEPARATOR!r}"
            )
        return f"{title}{TOKEN_SEPARATOR}{field}:{value.value}"
