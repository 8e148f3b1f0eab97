"""
Shared channel types and the channel provider base class.
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..record import RecordDriver


@dataclass(frozen=True)
class RecordSummary:
    """Lightweight display data for one record in a channel."""
    id: str
    title: str
    source: str
    thumbnail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Channel:
    """A titled lane of records produced by narrowing a search."""
    title: str = ''
    search_url: str = ''
    channels_url: str = ''
    contents: Tuple[RecordSummary, ...] = field(default_factory=tuple)
    is_placeholder: bool = False

    @classmethod
    def placeholder(cls) -> 'Channel':
        """The empty channel returned for a token that cannot be parsed."""
        return cls(is_placeholder=True)

    @property
    def is_empty(self) -> bool:
        return not self.contents

    def __bool__(self):
        return not self.is_placeholder

    def to_dict(self) -> Dict[str, Any]:
        if self.is_placeholder:
            return {}
        return {
            'title': self.title,
            'searchUrl': self.search_url,
            'channelsUrl': self.channels_url,
            'contents': [summary.to_dict() for summary in self.contents]
        }


class AbstractChannelProvider:
    """Base class for channel providers."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def set_options(self, options: Dict[str, Any]):
        """Apply provider-specific options (e.g. from a configuration section)."""

    def configure_search_params(self, params):
        """Hook to adjust search parameters before a search executes."""

    def get_from_record(self, driver: RecordDriver, channel_token: Optional[str] = None) -> List[Channel]:
        raise NotImplementedError

    def get_from_search(self, results, channel_token: Optional[str] = None) -> List[Channel]:
        raise NotImplementedError

    def summarize_record_drivers(self, drivers: Iterable[RecordDriver]) -> Tuple[RecordSummary, ...]:
        """Convert record drivers into display summaries."""
        return tuple(
            RecordSummary(
                id=driver.get_unique_id(),
                title=driver.get_title(),
                source=driver.get_source_identifier(),
                thumbnail=driver.get_thumbnail()
            )
            for driver in drivers
        )
