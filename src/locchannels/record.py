"""
Record driver: one catalog record's identity and raw field data.
"""

from typing import Any, Dict, Optional


class RecordDriver:
    """Wraps the raw data of a single record from a search backend."""

    def __init__(self, source_identifier: str, raw_data: Optional[Dict[str, Any]] = None):
        self.source_identifier = source_identifier
        self.raw_data = raw_data or {}

    def get_source_identifier(self) -> str:
        """Identifier of the backend this record came from."""
        return self.source_identifier

    def get_raw_data(self) -> Dict[str, Any]:
        """Field name -> value(s), keyed the way the backend's facets are keyed."""
        return self.raw_data

    def get_unique_id(self) -> str:
        return str(self.raw_data.get('id', ''))

    def get_title(self) -> str:
        return self.raw_data.get('title', '')

    def get_thumbnail(self) -> Optional[str]:
        return self.raw_data.get('thumbnail')

    def __repr__(self):
        return f"{self.__class__.__name__}({self.source_identifier!r}, id={self.get_unique_id()!r})"
