"""Parser for Blu-ray MPLS (Movie PlayList) files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from mplsparse.bdmv.reader import BinaryReader
from mplsparse.errors import (
    InvalidChapterCountError,
    InvalidChapterOffsetError,
    InvalidClipIndexError,
    InvalidMagicError,
    InvalidPlaylistOffsetError,
    InvalidTrimPointError,
    TooSmallError,
)
from mplsparse.model import Chapter, MplsContainer, Playlist, StreamClip, ticks_to_seconds

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Format constants
# ---------------------------------------------------------------------------

MPLS_MAGICS = ("MPLS0100", "MPLS0200")
MIN_MPLS_SIZE = 90

TIME_IN_POS = 82
TIME_OUT_POS = 86

CHAPTER_SIZE = 14
MARK_TYPE_ENTRY = 1
MARK_TYPE_LINK_POINT = 2  # never emitted

# A chapter starting within this many seconds of the end is a spurious
# end-of-title mark.
TRAILING_CHAPTER_THRESHOLD = 1.0

_MULTI_ANGLE_FLAG = 0x10

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_trim_point(r: BinaryReader, offset: int, label: str) -> int:
    value = r.u32_at(offset)
    if value & 0x80000000:
        raise InvalidTrimPointError(
            f"invalid playlist {label}: {value - (1 << 32)}", r.path
        )
    return value


def _validate_container(r: BinaryReader) -> MplsContainer:
    """Check the fixed header and return the offsets the decoders need."""
    size = len(r)
    if size < MIN_MPLS_SIZE:
        raise TooSmallError(
            f"invalid MPLS file (too small): {size} bytes, need at least {MIN_MPLS_SIZE}",
            r.path,
        )

    r.seek(0)
    header = r.read_string(8)
    if header not in MPLS_MAGICS:
        raise InvalidMagicError(
            f"invalid header: expected MPLS0100 or MPLS0200, found {header!r}", r.path
        )

    playlist_pos = r.u32()
    if playlist_pos <= 8:
        raise InvalidPlaylistOffsetError(f"invalid playlists offset: {playlist_pos}", r.path)

    chapter_pos = r.u32()
    if chapter_pos <= 8:
        raise InvalidChapterOffsetError(f"invalid chapters offset: {chapter_pos}", r.path)

    total_chapter_count = r.u16_at(chapter_pos + 4)
    list_end = chapter_pos + 6 + total_chapter_count * CHAPTER_SIZE
    if list_end > size:
        raise InvalidChapterCountError(
            f"invalid chapter count: {total_chapter_count} records at offset "
            f"{chapter_pos + 6} end at {list_end}, past the {size} byte buffer",
            r.path,
        )

    time_in = _read_trim_point(r, TIME_IN_POS, "time in")
    time_out = _read_trim_point(r, TIME_OUT_POS, "time out")

    return MplsContainer(
        header=header,
        playlist_pos=playlist_pos,
        chapter_pos=chapter_pos,
        total_chapter_count=total_chapter_count,
        time_in=time_in,
        time_out=time_out,
    )


def _parse_stream_clip(r: BinaryReader, relative_time_in_sec: float) -> StreamClip:
    """Parse a single PlayItem positioned at its length field."""
    item_start = r.tell()
    item_length = r.u16()

    clip_name = r.read_string(5)
    codec_id = r.read_string(4)  # "M2TS" (or "SSIF")
    filename = f"{clip_name}.{codec_id}"

    r.skip(1)  # reserved
    flags = r.u8()
    is_multi_angle = bool(flags & _MULTI_ANGLE_FLAG)
    r.skip(1)  # ref_to_STC_id

    time_in_sec = ticks_to_seconds(r.u32())
    time_out_sec = ticks_to_seconds(r.u32())
    duration_sec = time_out_sec - time_in_sec

    r.skip(12)  # UO_mask_table, random access flag, still mode, still time

    angle_count = 1
    if is_multi_angle:
        angle_count = r.u8()
        r.skip(1)  # flags byte
        # Alternate angles are walked only to keep the cursor aligned.
        for _ in range(angle_count - 1):
            r.skip(10)  # clip_name(5) + codec_id(4) + STC_id(1)

    r.skip(2)  # STN_table length
    r.skip(2)  # reserved
    num_video = r.u8()
    num_audio = r.u8()
    num_pg = r.u8()
    num_ig = r.u8()
    num_secondary_audio = r.u8()
    num_secondary_video = r.u8()
    num_pip = r.u8()
    r.skip(5)  # reserved

    for _ in range(num_secondary_audio):
        r.skip(2)
    for _ in range(num_secondary_video):
        r.skip(6)

    # The declared item length is authoritative; stream entries we did not
    # walk are skipped here.
    r.seek(item_start + item_length + 2)

    clip = StreamClip(
        filename=filename,
        time_in_sec=time_in_sec,
        time_out_sec=time_out_sec,
        duration_sec=duration_sec,
        relative_time_in_sec=relative_time_in_sec,
        relative_time_out_sec=relative_time_in_sec + duration_sec,
        video_count=num_video,
        audio_count=num_audio,
        subtitle_count=num_pg,
        interactive_menu_count=num_ig,
        secondary_video_count=num_secondary_video,
        secondary_audio_count=num_secondary_audio,
        pip_count=num_pip,
        is_multi_angle=is_multi_angle,
        angle_count=angle_count,
    )
    log.debug(
        "Stream clip %s (length=%d, multiangle=%s): in %.3f out %.3f duration %.3f "
        "relative in %.3f; #V %d #A %d #PG %d #IG %d #2A %d #2V %d #PiP %d",
        filename,
        item_length,
        is_multi_angle,
        time_in_sec,
        time_out_sec,
        duration_sec,
        relative_time_in_sec,
        num_video,
        num_audio,
        num_pg,
        num_ig,
        num_secondary_audio,
        num_secondary_video,
        num_pip,
    )
    return clip


def _parse_play_list(r: BinaryReader, container: MplsContainer) -> tuple[list[StreamClip], float]:
    """Parse the PlayList section and return *(stream_clips, total_duration_sec)*."""
    r.seek(container.playlist_pos)
    r.skip(4)  # section length
    r.skip(2)  # reserved
    num_items = r.u16()
    r.skip(2)  # num_sub_paths

    clips: list[StreamClip] = []
    total = 0.0
    for _ in range(num_items):
        clip = _parse_stream_clip(r, total)
        clips.append(clip)
        total += clip.duration_sec
    return clips, total


def _parse_marks(
    r: BinaryReader,
    container: MplsContainer,
    clips: list[StreamClip],
    total_duration_sec: float,
) -> list[Chapter]:
    """Parse the PlayListMark records into playlist-relative chapters."""
    num_marks = container.total_chapter_count
    marks = r.slice(container.chapter_list_pos, num_marks * CHAPTER_SIZE)

    mark_types = [marks.u8_at(i * CHAPTER_SIZE + 1) for i in range(num_marks)]
    log.debug(
        "%d of %d marks are entry marks, %d link points",
        mark_types.count(MARK_TYPE_ENTRY),
        num_marks,
        mark_types.count(MARK_TYPE_LINK_POINT),
    )

    chapters: list[Chapter] = []
    for i in range(num_marks):
        marks.seek(i * CHAPTER_SIZE)
        marks.skip(1)  # reserved
        mark_type = marks.u8()
        if mark_type != MARK_TYPE_ENTRY:
            continue

        clip_index = marks.u16()
        timestamp = marks.u32()
        if clip_index >= len(clips):
            raise InvalidClipIndexError(
                f"chapter mark {i} references stream clip {clip_index}, "
                f"but the playlist has {len(clips)}",
                r.path,
            )
        clip = clips[clip_index]
        relative = ticks_to_seconds(timestamp) - clip.time_in_sec + clip.relative_time_in_sec

        if total_duration_sec - relative > TRAILING_CHAPTER_THRESHOLD:
            chapters.append(Chapter(relative_time_sec=relative, stream_clip_index=clip_index))
        else:
            log.debug(
                "Dropping mark %d at %.3fs: within %.1fs of the end (%.3fs)",
                i,
                relative,
                TRAILING_CHAPTER_THRESHOLD,
                total_duration_sec,
            )
    return chapters


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_mpls(source: Union[BinaryReader, str, Path]) -> Playlist:
    """Parse an MPLS file and return a :class:`Playlist` object."""
    if isinstance(source, BinaryReader):
        return _parse_mpls_reader(source, Path(source.path).name if source.path else "")
    path = Path(source)
    with BinaryReader(path) as r:
        return _parse_mpls_reader(r, path.name)


def parse_mpls_bytes(data: bytes, name: str = "") -> Playlist:
    """Parse an in-memory MPLS buffer; *name* labels errors and the result."""
    with BinaryReader(data, path=name or None) as r:
        return _parse_mpls_reader(r, name)


def _parse_mpls_reader(r: BinaryReader, name: str) -> Playlist:
    container = _validate_container(r)
    clips, total = _parse_play_list(r, container)
    chapters = _parse_marks(r, container, clips, total)

    return Playlist(
        name=name,
        time_in_sec=ticks_to_seconds(container.time_in),
        time_out_sec=ticks_to_seconds(container.time_out),
        duration_sec=total,
        stream_clips=tuple(clips),
        chapters=tuple(chapters),
    )


def parse_mpls_dir(playlist_dir: Union[str, Path]) -> list[Playlist]:
    """Parse all ``*.mpls`` files in *playlist_dir*, sorted by filename."""
    d = Path(playlist_dir)
    results: list[Playlist] = []
    for p in sorted(d.glob("*.mpls")):
        try:
            results.append(parse_mpls(p))
        except Exception:
            log.warning("Skipping unparseable MPLS %s", p.name, exc_info=True)
    return results
