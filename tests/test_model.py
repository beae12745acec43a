"""Tests for timecode conversion and model helpers."""

import pytest

from mplsparse.model import MplsContainer, Playlist, StreamClip, ticks_to_seconds


@pytest.mark.parametrize(
    ("ticks", "seconds"),
    [
        (0, 0.0),
        (45_000, 1.0),
        (450_000, 10.0),
        (0x80000000 | 90_000, 2.0),
        (0x7FFFFFFF, 0x7FFFFFFF / 45_000.0),
    ],
)
def test_ticks_to_seconds(ticks: int, seconds: float) -> None:
    assert ticks_to_seconds(ticks) == seconds


def test_container_positions() -> None:
    c = MplsContainer(
        header="MPLS0200",
        playlist_pos=58,
        chapter_pos=300,
        total_chapter_count=0,
        time_in=0,
        time_out=0,
    )
    assert c.chapter_count_pos == 304
    assert c.chapter_list_pos == 306


def test_playlist_angle_count_defaults_to_one() -> None:
    pl = Playlist(name="", time_in_sec=0.0, time_out_sec=0.0, duration_sec=0.0, stream_clips=())
    assert pl.angle_count == 1
    assert pl.stream_clip_count == 0


def test_stream_clip_is_immutable() -> None:
    clip = StreamClip("00001.M2TS", 0.0, 10.0, 10.0, 0.0, 10.0)
    with pytest.raises(AttributeError):
        clip.duration_sec = 5.0  # type: ignore[misc]
