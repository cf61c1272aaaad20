"""
Enums for type-safe values across the application.
"""
from enum import Enum


class DataSource(str, Enum):
    """Where the client fetch layer obtained the catalog it returned."""
    LOCAL_CACHE = "local_cache"
    LIVE = "live"
    STALE_CACHE = "stale_cache"
    FALLBACK = "fallback"
    DISABLED = "disabled"
