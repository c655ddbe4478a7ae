from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# --- Enums / Literals ---
ContentResource = Literal["tracks", "albums", "services", "about"]
Provenance = Literal["live", "fallback"]
EndpointClass = Literal["generate", "contact"]

CONTENT_RESOURCES: tuple[ContentResource, ...] = ("tracks", "albums", "services", "about")


class _ContentModel(BaseModel):
    """Content shapes serialize with camelCase keys for the browser."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# --- Content ---

class Track(_ContentModel):
    id: str
    title: str
    artist: str
    duration: str  # Nominal "m:ss" until the media reports its own length
    cover: str
    genre: str
    audio_url: str = ""  # Empty means "preview unavailable"


class Album(_ContentModel):
    id: str
    title: str
    subtitle: str
    year: str
    cover: str
    track_count: int
    description: str
    purchase_url: str


class Service(_ContentModel):
    id: str
    title: str
    description: str
    icon: str


class AboutContent(_ContentModel):
    title: str
    content: str
    excerpt: str


ContentItem = Track | Album | Service | AboutContent

# --- Submissions ---

class ContactSubmission(BaseModel):
    """A contact form submission that passed every field check."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    message: str  # HTML-escaped
