"""
Utility helpers shared across the locchannels package.
"""

from .retry import (
    RetryConfig,
    retry_with_backoff,
    retry_on_network_failure
)

__all__ = [
    'RetryConfig',
    'retry_with_backoff',
    'retry_on_network_failure'
]
