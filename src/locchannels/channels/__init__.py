"""
Channel providers.
"""

from .base import AbstractChannelProvider, Channel, RecordSummary
from .facets import FacetsChannelProvider

__all__ = [
    'AbstractChannelProvider',
    'Channel',
    'RecordSummary',
    'FacetsChannelProvider'
]
