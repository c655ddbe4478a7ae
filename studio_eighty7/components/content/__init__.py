"""
Content component.

Live studio content from WordPress with a bundled fallback dataset.
"""

from studio_eighty7.components.content.component import ContentFetcher
from studio_eighty7.components.content.fallback import (
    FALLBACK_ABOUT,
    FALLBACK_ALBUMS,
    FALLBACK_CONTENT,
    FALLBACK_SERVICES,
    FALLBACK_TRACKS,
    fallback_items,
    placeholder_cover,
)
from studio_eighty7.components.content.models import (
    ContentBatch,
    ContentDecodeError,
    WPAlbum,
    WPMedia,
    WPRecord,
    WPTrack,
)
from studio_eighty7.components.content.ports import ContentSourcePort

__all__ = [
    # Component
    "ContentFetcher",
    # Fallback data
    "FALLBACK_ABOUT",
    "FALLBACK_ALBUMS",
    "FALLBACK_CONTENT",
    "FALLBACK_SERVICES",
    "FALLBACK_TRACKS",
    "fallback_items",
    "placeholder_cover",
    # Models
    "ContentBatch",
    "ContentDecodeError",
    "WPAlbum",
    "WPMedia",
    "WPRecord",
    "WPTrack",
    # Ports
    "ContentSourcePort",
]
