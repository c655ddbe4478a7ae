"""
Record decoding and mapping for the content fetcher.

Pure functions only; network access lives in component.py.

Key behaviors:
- Source payloads decode through strict models or raise ContentDecodeError
- Every optional field maps to a fixed default
- Audio links are found in rendered markup with BeautifulSoup
"""

from __future__ import annotations

import re
from typing import Any, TypeVar

from bs4 import BeautifulSoup
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from studio_eighty7.components.content.models import (
    ContentDecodeError,
    MediaRef,
    WPAlbum,
    WPMediaObject,
    WPRecord,
    WPTrack,
)
from studio_eighty7.domain.entities import AboutContent, Album, Service, Track
from studio_eighty7.rules.models import ContentDefaults

RecordT = TypeVar("RecordT", bound=BaseModel)

_TAG_RE = re.compile(r"<[^>]*>")
_DIGITS_RE = re.compile(r"^\d+$")


# --- Decoding ---


def decode_records(model: type[RecordT], payload: Any) -> list[RecordT]:
    """Decode a JSON list of records; any bad record fails the batch."""
    if not isinstance(payload, list):
        raise ContentDecodeError(f"Expected a list of {model.__name__}, got {type(payload).__name__}")
    try:
        return TypeAdapter(list[model]).validate_python(payload)  # type: ignore[valid-type]
    except PydanticValidationError as e:
        raise ContentDecodeError(f"Undecodable {model.__name__} record: {e.error_count()} errors") from e


def strip_tags(html: str) -> str:
    return _TAG_RE.sub("", html)


# --- Audio Resolution ---


def direct_audio_url(ref: MediaRef | None) -> str:
    """URL carried by the reference itself, if any."""
    if isinstance(ref, str) and (ref.startswith("http") or ref.startswith("/")):
        return ref
    if isinstance(ref, WPMediaObject):
        if ref.url:
            return ref.url
        if ref.source_url:
            return ref.source_url
    return ""


def parse_media_id(value: int | str | None) -> int | None:
    # bool is an int subclass but never a media id
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _DIGITS_RE.match(value):
        return int(value)
    return None


def media_reference_id(ref: MediaRef | None) -> int | None:
    """Numeric attachment id the reference points at, if any."""
    if isinstance(ref, WPMediaObject):
        media_id = parse_media_id(ref.ID)
        return media_id if media_id is not None else parse_media_id(ref.id)
    if isinstance(ref, int | str):
        return parse_media_id(ref)
    return None


def _is_audio_link(href: str, extensions: list[str]) -> bool:
    path = href.split("?", 1)[0].lower()
    return any(path.endswith(f".{ext.lower()}") for ext in extensions)


def extract_audio_url(html: str, extensions: list[str]) -> str:
    """First embedded audio source or direct audio-file link in the markup."""
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    audio = soup.find("audio", src=True)
    if audio and audio.get("src"):
        return str(audio["src"])

    source = soup.find("source", src=True)
    if source and source.get("src"):
        return str(source["src"])

    for link in soup.find_all("a", href=True):
        href = str(link["href"])
        if _is_audio_link(href, extensions):
            return href

    return ""


def raw_audio_reference(record: WPTrack) -> MediaRef | None:
    if record.acf.audio_url not in (None, ""):
        return record.acf.audio_url
    meta_ref = record.meta.get("audio_url")
    if isinstance(meta_ref, dict):
        return WPMediaObject.model_validate(meta_ref)
    if isinstance(meta_ref, int | str) and not isinstance(meta_ref, bool) and meta_ref != "":
        return meta_ref
    return None


# --- Mapping ---


def to_track(record: WPTrack, audio_url: str, defaults: ContentDefaults) -> Track:
    return Track(
        id=str(record.id),
        title=record.title.rendered,
        artist=record.acf.artist or defaults.artist,
        duration=record.acf.duration or defaults.duration,
        cover=record.featured_image or defaults.cover,
        genre=record.acf.genre or defaults.genre,
        audio_url=audio_url,
    )


def to_album(record: WPAlbum, defaults: ContentDefaults, current_year: int) -> Album:
    acf = record.acf
    return Album(
        id=str(record.id),
        title=record.title.rendered,
        subtitle=acf.subtitle or defaults.subtitle,
        year=str(acf.year) if acf.year else str(current_year),
        cover=record.featured_image or acf.album_art or defaults.cover,
        track_count=acf.tracks or 0,
        description=strip_tags(record.excerpt.rendered),
        purchase_url=acf.spotify_url or acf.apple_music_url or defaults.purchase_url,
    )


def to_service(record: WPRecord, index: int, defaults: ContentDefaults) -> Service:
    icons = defaults.service_icons
    return Service(
        id=str(record.id),
        title=record.title.rendered,
        description=strip_tags(record.excerpt.rendered),
        icon=icons[index % len(icons)],
    )


def to_about(record: WPRecord) -> AboutContent:
    return AboutContent(
        title=record.title.rendered,
        content=record.content.rendered,
        excerpt=strip_tags(record.excerpt.rendered),
    )
