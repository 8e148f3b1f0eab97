"""
Route-based URL building for links emitted in channels.
"""

from typing import Dict, Optional


DEFAULT_ROUTES = {
    'search-results': 'Search/Results',
    'channels-home': 'Channels/Home',
    'channels-search': 'Channels/Search',
    'channels-record': 'Channels/Record',
    'record': 'Record',
}


class RouteNotFoundError(KeyError):
    """Raised when a route name has no configured path."""


class UrlBuilder:
    """Maps route names to absolute application URLs."""

    def __init__(self, base_url: str = 'http://localhost/', routes: Optional[Dict[str, str]] = None):
        self.base_url = base_url.rstrip('/') + '/'
        self.routes = dict(DEFAULT_ROUTES)
        if routes:
            self.routes.update(routes)

    def from_route(self, name: str) -> str:
        if name not in self.routes:
            raise RouteNotFoundError(name)
        return self.base_url + self.routes[name].lstrip('/')
