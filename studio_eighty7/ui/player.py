"""
Track player state machine.

Models the featured-tracks player as explicit transitions driven by discrete
events, independent of any media-playback primitive. A UI binds media element
callbacks to `metadata_loaded`, `time_advanced` and `ended`.

States: STOPPED(i), PLAYING(i, position), PAUSED(i, position).

Key behaviors:
- Selecting a track without an audio source stops on that track
- next/previous wrap around and keep the play/pause intent
- Natural end of a track advances and keeps playing
- seek, volume and mute never change the phase
- Durations are learned per track id; until then the nominal string is shown
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from studio_eighty7.domain.entities import Track


class PlaybackPhase(str, Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class PlaybackState:
    current_track_index: int = 0
    phase: PlaybackPhase = PlaybackPhase.STOPPED
    current_time: float = 0.0
    duration: float = 0.0  # 0 until the media reports it
    volume: float = 1.0
    is_muted: bool = False

    @property
    def is_playing(self) -> bool:
        return self.phase == PlaybackPhase.PLAYING


def format_time(seconds: float) -> str:
    """Render seconds as m:ss."""
    if not math.isfinite(seconds) or seconds < 0:
        return "0:00"
    whole = int(seconds)
    return f"{whole // 60}:{whole % 60:02d}"


def clamp_volume(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, value))


class TrackPlayer:
    """Playback state for an ordered track list."""

    def __init__(self, tracks: Sequence[Track], *, volume: float = 1.0) -> None:
        self._tracks = list(tracks)
        self._durations: dict[str, float] = {}
        self._state = PlaybackState(volume=clamp_volume(volume))

    # --- Queries ---

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def tracks(self) -> list[Track]:
        return list(self._tracks)

    @property
    def current_track(self) -> Track | None:
        if not self._tracks:
            return None
        return self._tracks[self._state.current_track_index]

    def has_audio(self, index: int) -> bool:
        return bool(self._tracks[index].audio_url)

    def known_duration(self, track_id: str) -> float | None:
        return self._durations.get(track_id)

    def display_duration(self, index: int) -> str:
        track = self._tracks[index]
        seconds = self._durations.get(track.id)
        if seconds is None:
            return track.duration
        return format_time(seconds)

    # --- Transitions ---

    def select_track(self, index: int) -> PlaybackState:
        if not 0 <= index < len(self._tracks):
            raise IndexError(f"Track index out of range: {index}")
        phase = PlaybackPhase.PLAYING if self.has_audio(index) else PlaybackPhase.STOPPED
        return self._move_to(index, phase)

    def toggle_play(self) -> PlaybackState:
        if not self._tracks or not self.has_audio(self._state.current_track_index):
            return self._state

        if self._state.phase == PlaybackPhase.PLAYING:
            phase = PlaybackPhase.PAUSED
        else:
            phase = PlaybackPhase.PLAYING
        self._state = replace(self._state, phase=phase)
        return self._state

    def next(self) -> PlaybackState:
        if not self._tracks:
            return self._state
        index = (self._state.current_track_index + 1) % len(self._tracks)
        return self._move_to(index, self._intent_for(index, self._state.phase))

    def previous(self) -> PlaybackState:
        if not self._tracks:
            return self._state
        n = len(self._tracks)
        index = (self._state.current_track_index - 1 + n) % n
        return self._move_to(index, self._intent_for(index, self._state.phase))

    def ended(self) -> PlaybackState:
        """Natural end of the current track: advance and keep playing."""
        if not self._tracks:
            return self._state
        index = (self._state.current_track_index + 1) % len(self._tracks)
        return self._move_to(index, self._intent_for(index, PlaybackPhase.PLAYING))

    def seek(self, position: float) -> PlaybackState:
        self._state = replace(self._state, current_time=self._clamp_position(position))
        return self._state

    def set_volume(self, value: float) -> PlaybackState:
        self._state = replace(self._state, volume=clamp_volume(value))
        return self._state

    def toggle_mute(self) -> PlaybackState:
        self._state = replace(self._state, is_muted=not self._state.is_muted)
        return self._state

    # --- Media Events ---

    def metadata_loaded(self, track_id: str, duration: float) -> PlaybackState:
        """
        Record the real duration reported for a track.

        Events may arrive in any order and for tracks that are no longer
        current; they only update that track's entry.
        """
        if not math.isfinite(duration) or duration <= 0:
            return self._state

        self._durations[track_id] = duration
        current = self.current_track
        if current is not None and current.id == track_id:
            self._state = replace(self._state, duration=duration)
        return self._state

    def time_advanced(self, position: float) -> PlaybackState:
        if self._state.phase != PlaybackPhase.PLAYING:
            return self._state
        self._state = replace(self._state, current_time=self._clamp_position(position))
        return self._state

    # --- Internals ---

    def _intent_for(self, index: int, phase: PlaybackPhase) -> PlaybackPhase:
        # A track without audio can only be stopped on
        if phase == PlaybackPhase.STOPPED or not self.has_audio(index):
            return PlaybackPhase.STOPPED
        return phase

    def _move_to(self, index: int, phase: PlaybackPhase) -> PlaybackState:
        track_id = self._tracks[index].id
        self._state = replace(
            self._state,
            current_track_index=index,
            phase=phase,
            current_time=0.0,
            duration=self._durations.get(track_id, 0.0),
        )
        return self._state

    def _clamp_position(self, position: float) -> float:
        if not math.isfinite(position) or position < 0:
            return 0.0
        if self._state.duration > 0:
            return min(position, self._state.duration)
        return position
