"""
Content component ports.
"""

from __future__ import annotations

from typing import Protocol

from studio_eighty7.components.content.models import ContentBatch
from studio_eighty7.domain.entities import ContentResource


class ContentSourcePort(Protocol):
    """Anything that yields a content batch per resource (fetcher, cache, fake)."""

    async def fetch(self, resource: ContentResource) -> ContentBatch:
        """Return live items, or fallback items when the source is unusable."""
        ...
