"""
Library of Congress loc.gov JSON API Client

Rate-limited HTTP access to the loc.gov search and item endpoints used by
the LOC search backend.
"""

import time
import logging
import requests
from typing import Dict, List, Optional, Tuple, Union
from urllib.parse import urljoin

from .utils import retry_on_network_failure


class LocApiError(Exception):
    """Raised when loc.gov returns something other than a JSON document."""


class RateLimitedError(requests.exceptions.RequestException):
    """Raised on HTTP 429 or a CAPTCHA page; loc.gov needs a cooling-off period."""


QueryParams = Union[Dict[str, str], List[Tuple[str, str]]]


class LocApiClient:
    """Client for the loc.gov JSON API."""

    def __init__(self, base_url: str = "https://www.loc.gov/",
                 request_delay: float = 3.0, max_retries: int = 3,
                 timeout: float = 60.0):
        self.base_url = base_url.rstrip('/') + '/'
        self.request_delay = max(request_delay, 0.0)
        self.max_retries = max_retries
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': 'locchannels/0.1.0 (Discovery Channel Builder)'
        })
        self.last_request_time = 0.0
        self.request_count = 0
        self.logger = logging.getLogger(__name__)

        # Retries are bound per instance so max_retries from config applies
        self._fetch = retry_on_network_failure(
            max_attempts=max(1, max_retries), logger=self.logger
        )(self._fetch_once)

    def _wait_for_rate_limit(self):
        """Keep at least request_delay seconds between consecutive requests."""
        elapsed = time.time() - self.last_request_time
        if elapsed < self.request_delay:
            wait_time = self.request_delay - elapsed
            self.logger.debug(f"Rate limiting: waiting {wait_time:.1f}s")
            time.sleep(wait_time)
        self.last_request_time = time.time()

    def _fetch_once(self, url: str, params: Optional[QueryParams]) -> requests.Response:
        self._wait_for_rate_limit()
        self.request_count += 1
        response = self.session.get(url, params=params, timeout=self.timeout)

        if response.status_code == 429:
            self.logger.warning("Rate limited (429) by loc.gov")
            raise RateLimitedError(
                "Rate limited by loc.gov (429). Wait before sending more requests."
            )

        content_type = response.headers.get('Content-Type', '')
        if 'html' in content_type and 'captcha' in response.text.lower():
            self.logger.warning("CAPTCHA detected in loc.gov response")
            raise RateLimitedError(
                "CAPTCHA detected by loc.gov. Wait before sending more requests."
            )

        response.raise_for_status()
        return response

    def _make_request(self, endpoint: str, params: Optional[QueryParams] = None) -> Dict:
        """Make a rate-limited GET request and decode the JSON body."""
        url = urljoin(self.base_url, endpoint)
        self.logger.debug(f"GET {url} params={params}")
        response = self._fetch(url, params)
        try:
            return response.json()
        except ValueError as e:
            raise LocApiError(f"Non-JSON response from {response.url}: {e}") from e

    def search(self, params: QueryParams) -> Dict:
        """Run a search against ``search/`` with already-translated loc.gov params."""
        if isinstance(params, dict):
            params = list(params.items())
        params = [(k, v) for k, v in params if k != 'fo'] + [('fo', 'json')]
        return self._make_request('search/', params)

    def get_item(self, item_id: str) -> Dict:
        """Get the JSON record for a single item."""
        return self._make_request(f'item/{item_id}/', [('fo', 'json')])

    def get_request_stats(self) -> Dict:
        return {
            'base_url': self.base_url,
            'request_delay': self.request_delay,
            'requests_made': self.request_count
        }
