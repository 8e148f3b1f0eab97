"""
Results manager: hands out fresh results objects by source identifier.
"""

import logging
from typing import Callable, Dict, Optional

from .results import SearchResults


class UnknownSourceError(KeyError):
    """Raised when no results factory is registered for a source identifier."""


class ResultsManager:
    """Registry of source identifier -> results factory."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.factories: Dict[str, Callable[[], SearchResults]] = {}
        self.logger = logger or logging.getLogger(__name__)

    def register(self, source_id: str, factory: Callable[[], SearchResults]):
        self.factories[source_id] = factory

    def has(self, source_id: str) -> bool:
        return source_id in self.factories

    def get(self, source_id: str) -> SearchResults:
        """Build a new, unsearched results object for ``source_id``."""
        if source_id not in self.factories:
            raise UnknownSourceError(source_id)
        self.logger.debug(f"Creating results object for source {source_id}")
        return self.factories[source_id]()
