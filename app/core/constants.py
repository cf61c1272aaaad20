"""
Application-wide constants and fixed limits.

Grouped into static classes for namespace management and discoverability.
"""


class CacheConfig:
    """Configuration for the server and client catalog caches."""
    TTL_SECONDS = 600  # 10 minutes, shared by both tiers


class UpstreamConfig:
    """Configuration for YouTube Data API pagination."""
    MAX_RESULTS_PER_PAGE = 50
    MAX_PAGES = 10  # Caps a single collection fetch at 500 items
    PLACEHOLDER_TITLES = frozenset({"Private video", "Deleted video"})
    THUMBNAIL_PREFERENCE = ("high", "medium", "default")
    WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


class QuotaConfig:
    """Quota cost (units) of each upstream call."""
    CHANNELS_LIST = 1
    PLAYLIST_ITEMS_LIST = 1  # Per page


# Collection tag -> upstream playlist id.
# "ctf" and "cloud" share one playlist on the channel.
COLLECTIONS: dict[str, str] = {
    "ad": "PL-KySkbfyS663cCQlYn_ow4cHo62ZKlCC",
    "thm": "PL-KySkbfyS64f7dhGoKMKP0YIT7H2tqpn",
    "htb": "PL-KySkbfyS66qoidtOTfRzdWCZNngoT47",
    "ctf": "PL-KySkbfyS64iVfW6xleDT18KTnifZAaM",
    "cloud": "PL-KySkbfyS64iVfW6xleDT18KTnifZAaM",
}


class FallbackConfig:
    """Hardcoded channel statistics shown when no live or cached data exists."""
    SUBSCRIBER_COUNT = 3020
    TOTAL_VIEW_COUNT = 135_181
    VIDEO_COUNT = 121
    SUBSCRIBER_DISPLAY = "3K+"
    VIEWS_DISPLAY = "135.2K"


class ErrorMessages:
    """Client-facing error strings returned in the response envelope."""
    METHOD_NOT_ALLOWED = "Method not allowed"
    CONFIGURATION = "Server configuration error"
    INVALID_COLLECTION = "Invalid playlist name"
    CHANNEL_NOT_FOUND = "Channel not found"
    INTERNAL = "Internal server error"
