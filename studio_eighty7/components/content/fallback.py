"""
Bundled content used when the live source is absent or unreachable.

Covers are inline SVG placeholders so nothing is fetched over the network.
"""

from __future__ import annotations

from urllib.parse import quote

from studio_eighty7.domain.entities import (
    AboutContent,
    Album,
    ContentItem,
    ContentResource,
    Service,
    Track,
)


def placeholder_cover(text: str, size: int = 500) -> str:
    """Build a square red-on-black SVG data URI labelled with `text`."""
    inner = size - 20
    svg = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}">'
        '<rect width="100%" height="100%" fill="#050505"/>'
        f'<rect x="10" y="10" width="{inner}" height="{inner}" fill="none" '
        'stroke="#DC2626" stroke-width="2"/>'
        '<text x="50%" y="50%" dominant-baseline="middle" text-anchor="middle" '
        'fill="#DC2626" font-family="sans-serif" font-size="32" font-weight="bold">'
        f"{text}</text></svg>"
    )
    return "data:image/svg+xml," + quote(svg, safe="!~*'()")


FALLBACK_ALBUMS: tuple[Album, ...] = (
    Album(
        id="1",
        title="Katana Dreams",
        subtitle="Tek-Domain Production",
        year="2024",
        cover=placeholder_cover("KATANA"),
        track_count=12,
        description=(
            "A sonic journey through the streets, featuring hard-hitting beats and raw lyrics."
        ),
        purchase_url="#",
    ),
    Album(
        id="2",
        title="Blade Runner",
        subtitle="Studio Eighty7",
        year="2023",
        cover=placeholder_cover("BLADE"),
        track_count=10,
        description="Dark, atmospheric hip-hop with futuristic production.",
        purchase_url="#",
    ),
    Album(
        id="3",
        title="Ronin Mode",
        subtitle="Tek-Domain",
        year="2023",
        cover=placeholder_cover("RONIN"),
        track_count=8,
        description="Aggressive bars over experimental beats.",
        purchase_url="#",
    ),
    Album(
        id="4",
        title="Shadow Warrior",
        subtitle="Studio Eighty7",
        year="2022",
        cover=placeholder_cover("SHADOW"),
        track_count=15,
        description="Classic boom-bap meets modern production.",
        purchase_url="#",
    ),
)

FALLBACK_TRACKS: tuple[Track, ...] = tuple(
    Track(
        id=str(n),
        title=title,
        artist="Tek-Domain",
        duration=duration,
        cover=placeholder_cover(f"TRACK {n}"),
        genre="Hip-Hop",
        audio_url="",
    )
    for n, (title, duration) in enumerate(
        [
            ("Katana Sharp", "3:45"),
            ("Blade Dance", "4:12"),
            ("Ronin Rise", "3:28"),
            ("Shadow Walk", "3:55"),
            ("Warrior Code", "4:02"),
        ],
        start=1,
    )
)

FALLBACK_SERVICES: tuple[Service, ...] = (
    Service(
        id="1",
        title="Music Production",
        description=(
            "Full-scale beat production from concept to completion. We craft custom "
            "instrumentals tailored to your vision, genre, and style."
        ),
        icon="music",
    ),
    Service(
        id="2",
        title="Mixing & Mastering",
        description=(
            "Professional mixing and mastering services to give your tracks the polished, "
            "radio-ready sound they deserve."
        ),
        icon="sliders",
    ),
    Service(
        id="3",
        title="Artist Development",
        description=(
            "Comprehensive artist development including branding, sound design, and career "
            "guidance for emerging talent."
        ),
        icon="headphones",
    ),
)

FALLBACK_ABOUT = AboutContent(
    title="About Studio Eighty7",
    content=(
        "<p>Studio Eighty7 is a state-of-the-art recording studio and production house "
        "founded by Tek-Domain. We specialize in hip-hop, R&B, and electronic music "
        "production, delivering high-quality sound to artists worldwide.</p>"
        "<p>Our mission is simple: provide professional-grade production services that "
        "help artists realize their creative vision without compromise.</p>"
    ),
    excerpt="State-of-the-art recording studio and production house.",
)

FALLBACK_CONTENT: dict[ContentResource, tuple[ContentItem, ...]] = {
    "tracks": FALLBACK_TRACKS,
    "albums": FALLBACK_ALBUMS,
    "services": FALLBACK_SERVICES,
    "about": (FALLBACK_ABOUT,),
}


def fallback_items(resource: ContentResource) -> list[ContentItem]:
    return list(FALLBACK_CONTENT[resource])
