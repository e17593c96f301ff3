"""
Core utilities for the Fantasy Football assistant.

This package hosts the Sleeper client and the composite fetchers so the
Flask server and the snapshot script can share one cached API integration.
"""

from .aggregates import AggregateFetcher, ResultEnvelope
from .cache import CacheEntry, CacheKey, FreshnessClass, FreshnessPolicy, ResponseCache
from .errors import RemoteRequestError, SleeperAPIError, TransportError
from .sleeper_api import SleeperAPI

__all__ = [
    "AggregateFetcher",
    "CacheEntry",
    "CacheKey",
    "FreshnessClass",
    "FreshnessPolicy",
    "RemoteRequestError",
    "ResponseCache",
    "ResultEnvelope",
    "SleeperAPI",
    "SleeperAPIError",
    "TransportError",
]
