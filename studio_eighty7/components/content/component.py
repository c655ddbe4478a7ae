"""
ContentFetcher component.

Loads studio content from the WordPress source and degrades to the bundled
dataset when the source is absent or broken.

Key behaviors:
- 404 from the source means the content type is not set up yet: fallback
- Any other non-2xx, transport failure, JSON or decode error: fallback
- Callers see the same item shapes either way; only provenance differs
- Fallback is logged only when debug logging is on
- Track audio is resolved concurrently across a batch
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from studio_eighty7.adapters.clock import SystemClock
from studio_eighty7.components.content._impl import (
    decode_records,
    direct_audio_url,
    extract_audio_url,
    media_reference_id,
    raw_audio_reference,
    to_about,
    to_album,
    to_service,
    to_track,
)
from studio_eighty7.components.content.fallback import fallback_items
from studio_eighty7.components.content.models import (
    ContentBatch,
    ContentDecodeError,
    WPAlbum,
    WPMedia,
    WPRecord,
    WPTrack,
)
from studio_eighty7.core.ports.time import TimePort
from studio_eighty7.domain.entities import (
    AboutContent,
    Album,
    ContentItem,
    ContentResource,
    Service,
    Track,
)
from studio_eighty7.domain.errors import ContentNotFound
from studio_eighty7.rules.loader import default_rules
from studio_eighty7.rules.models import ContentRules

logger = logging.getLogger(__name__)


class ContentFetcher:
    """
    Content fetcher with static fallback.

    Owns no client lifecycle: the caller opens and closes the httpx client.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        rules: ContentRules | None = None,
        base_url: str | None = None,
        time_port: TimePort | None = None,
        debug: bool = False,
    ) -> None:
        self._client = client
        self._rules = rules or default_rules().content
        self._base_url = base_url or self._rules.source_url
        self._clock = time_port or SystemClock()
        self._debug = debug

    # --- Public API ---

    async def fetch(self, resource: ContentResource) -> ContentBatch:
        try:
            items = await self._load(resource)
        except ContentNotFound:
            self._debug_log("%s endpoint not found - using fallback content", resource)
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers JSON and record decode failures
            self._debug_log("Error fetching %s (%s) - using fallback content", resource, type(e).__name__)
        else:
            return ContentBatch(resource=resource, items=items, provenance="live")

        return ContentBatch(resource=resource, items=fallback_items(resource), provenance="fallback")

    async def fetch_tracks(self) -> list[Track]:
        return (await self.fetch("tracks")).items  # type: ignore[return-value]

    async def fetch_albums(self) -> list[Album]:
        return (await self.fetch("albums")).items  # type: ignore[return-value]

    async def fetch_services(self) -> list[Service]:
        return (await self.fetch("services")).items  # type: ignore[return-value]

    async def fetch_about(self) -> AboutContent:
        return (await self.fetch("about")).items[0]  # type: ignore[return-value]

    # --- Loading ---

    async def _load(self, resource: ContentResource) -> list[ContentItem]:
        rules = self._rules
        defaults = rules.defaults

        if resource == "tracks":
            payload = await self._get_json(
                "/wp/v2/track", {"_embed": "", "per_page": rules.tracks_per_page}
            )
            records = decode_records(WPTrack, payload)
            audio_urls = await asyncio.gather(*(self.resolve_audio_url(r) for r in records))
            return [to_track(r, url, defaults) for r, url in zip(records, audio_urls, strict=True)]

        if resource == "albums":
            payload = await self._get_json("/wp/v2/album", {"_embed": ""})
            year = self._clock.now_utc().year
            return [to_album(r, defaults, year) for r in decode_records(WPAlbum, payload)]

        if resource == "services":
            payload = await self._get_json("/wp/v2/service", {"per_page": rules.services_per_page})
            return [to_service(r, i, defaults) for i, r in enumerate(decode_records(WPRecord, payload))]

        if resource == "about":
            payload = await self._get_json("/wp/v2/pages", {"slug": "about"})
            pages = decode_records(WPRecord, payload)
            if not pages:
                raise ContentNotFound(resource)
            return [to_about(pages[0])]

        raise ContentDecodeError(f"Unknown content resource: {resource}")

    async def _get_json(self, route: str, params: dict[str, Any] | None = None) -> Any:
        query: dict[str, Any] = {"rest_route": route, **(params or {})}
        response = await self._client.get(self._base_url, params=query)
        if response.status_code == 404:
            raise ContentNotFound(route)
        response.raise_for_status()
        return response.json()

    # --- Audio Resolution ---

    async def resolve_audio_url(self, record: WPTrack) -> str:
        """
        Resolve a playable URL for one track.

        Order: direct URL, attachment lookup, rendered content scan, empty.
        """
        ref = raw_audio_reference(record)

        url = direct_audio_url(ref)
        if url:
            return url

        media_id = media_reference_id(ref)
        if media_id is not None:
            url = await self.lookup_media_url(media_id)
            if url:
                return url

        return extract_audio_url(record.content.rendered, self._rules.audio_extensions)

    async def lookup_media_url(self, media_id: int) -> str:
        try:
            payload = await self._get_json(f"/wp/v2/media/{media_id}")
            return WPMedia.model_validate(payload).source_url
        except (ContentNotFound, httpx.HTTPError, ValueError):
            self._debug_log("Failed to resolve audio URL from media id %s", media_id)
            return ""

    def _debug_log(self, msg: str, *args: object) -> None:
        if self._debug:
            logger.info(msg, *args)
