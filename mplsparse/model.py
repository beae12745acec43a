from __future__ import annotations

from dataclasses import dataclass

TICKS_PER_SECOND = 45_000.0


def ticks_to_seconds(ticks: int) -> float:
    """Convert 45 kHz ticks to seconds.

    Bit 31 is overloaded by some authoring tools and is cleared first, so a
    timecode never decodes as a negative duration.
    """
    if ticks & 0x80000000:
        ticks &= 0x7FFFFFFF
    return ticks / TICKS_PER_SECOND


@dataclass(frozen=True, slots=True)
class MplsContainer:
    """Validated header fields of one MPLS buffer (scoped to a single parse)."""

    header: str
    playlist_pos: int
    chapter_pos: int
    total_chapter_count: int
    time_in: int
    time_out: int

    @property
    def chapter_count_pos(self) -> int:
        return self.chapter_pos + 4

    @property
    def chapter_list_pos(self) -> int:
        return self.chapter_pos + 6


@dataclass(frozen=True, slots=True)
class StreamClip:
    filename: str
    time_in_sec: float
    time_out_sec: float
    duration_sec: float
    relative_time_in_sec: float
    relative_time_out_sec: float
    video_count: int = 0
    audio_count: int = 0
    subtitle_count: int = 0
    interactive_menu_count: int = 0
    secondary_video_count: int = 0
    secondary_audio_count: int = 0
    pip_count: int = 0
    is_multi_angle: bool = False
    angle_count: int = 1

    @property
    def clip_id(self) -> str:
        """Five-character clip name, e.g. ``"00001"``."""
        return self.filename.partition(".")[0]


@dataclass(frozen=True, slots=True)
class Chapter:
    relative_time_sec: float
    stream_clip_index: int = 0


@dataclass(frozen=True, slots=True)
class Playlist:
    name: str
    time_in_sec: float
    time_out_sec: float
    duration_sec: float
    stream_clips: tuple[StreamClip, ...]
    chapters: tuple[Chapter, ...] = ()

    @property
    def stream_clip_count(self) -> int:
        return len(self.stream_clips)

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    @property
    def angle_count(self) -> int:
        """Largest angle count of any clip (1 for single-angle titles)."""
        return max((c.angle_count for c in self.stream_clips), default=1)

    @property
    def clip_ids(self) -> list[str]:
        return [c.clip_id for c in self.stream_clips]
