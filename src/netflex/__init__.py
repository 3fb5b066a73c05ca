"""Netflex API Package.

Thin access layer for the Netflex platform: an authenticated API client
and the in-process cache used to memoize remote lookups.

Exported:
    NetflexAPIClient: requests-based API client
    get_client / set_client: process-wide default client
    Cache: TTL cache with remember/remember_forever
    get_cache / set_cache: process-wide default cache
"""
from .cache import Cache, get_cache, set_cache
from .client import NetflexAPIClient, get_client, set_client

__all__ = ["NetflexAPIClient", "get_client", "set_client", "Cache", "get_cache", "set_cache"]
