from .youtube import (
    PlaylistItem,
    PlaylistItemsPage,
    ChannelItem,
    ChannelListResponse,
    ChannelStats,
    VideoRecord,
    CacheEntry,
)
from .api import CatalogData, CatalogResponse, ChannelCatalog
from .enums import DataSource
