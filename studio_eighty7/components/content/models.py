"""
Content component models.

Strict shapes for records served by the WordPress content source, plus the
batch returned to callers. Records that do not decode fail the whole batch
into the static fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from studio_eighty7.domain.entities import ContentItem, ContentResource, Provenance

# --- Source Records ---


class _SourceModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WPRendered(_SourceModel):
    rendered: str = ""


class WPFeaturedMedia(_SourceModel):
    source_url: str = ""


class WPEmbedded(_SourceModel):
    featured_media: list[WPFeaturedMedia] = Field(default_factory=list, alias="wp:featuredmedia")


class WPMediaObject(_SourceModel):
    """Media reference as stored by ACF file fields."""

    url: str | None = None
    source_url: str | None = None
    id: int | str | None = None
    ID: int | str | None = None


MediaRef = WPMediaObject | int | str


def _empty_acf(value: Any) -> Any:
    # WordPress sends `false` or `[]` when a post has no custom fields
    if value in (None, False, []):
        return {}
    return value


class WPTrackFields(_SourceModel):
    artist: str | None = None
    duration: str | None = None
    genre: str | None = None
    audio_url: MediaRef | None = None
    album: int | None = None

    @field_validator("audio_url", mode="before")
    @classmethod
    def _coerce_audio_url(cls, value: Any) -> Any:
        return None if value is False else value


class WPAlbumFields(_SourceModel):
    subtitle: str | None = None
    year: str | int | None = None
    tracks: int | None = None
    album_art: str | None = None
    spotify_url: str | None = None
    apple_music_url: str | None = None


class WPRecord(_SourceModel):
    """Base post record (services and pages use it as-is)."""

    id: int
    title: WPRendered
    content: WPRendered = Field(default_factory=WPRendered)
    excerpt: WPRendered = Field(default_factory=WPRendered)
    embedded: WPEmbedded | None = Field(default=None, alias="_embedded")
    meta: dict[str, Any] = Field(default_factory=dict)

    @field_validator("meta", mode="before")
    @classmethod
    def _coerce_meta(cls, value: Any) -> Any:
        return _empty_acf(value)

    @property
    def featured_image(self) -> str:
        if self.embedded and self.embedded.featured_media:
            return self.embedded.featured_media[0].source_url
        return ""


class WPTrack(WPRecord):
    acf: WPTrackFields = Field(default_factory=WPTrackFields)

    @field_validator("acf", mode="before")
    @classmethod
    def _coerce_acf(cls, value: Any) -> Any:
        return _empty_acf(value)


class WPAlbum(WPRecord):
    acf: WPAlbumFields = Field(default_factory=WPAlbumFields)

    @field_validator("acf", mode="before")
    @classmethod
    def _coerce_acf(cls, value: Any) -> Any:
        return _empty_acf(value)


class WPMedia(_SourceModel):
    source_url: str = ""


# --- Output Models ---


@dataclass(frozen=True)
class ContentBatch:
    """Items for one resource and where they came from."""

    resource: ContentResource
    items: list[ContentItem]
    provenance: Provenance

    @property
    def is_fallback(self) -> bool:
        return self.provenance == "fallback"


# --- Errors ---


class ContentDecodeError(ValueError):
    """Source payload did not match the expected record shape."""
