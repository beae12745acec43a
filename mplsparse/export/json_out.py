"""JSON export for parsed playlists."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from mplsparse.export.text_report import format_duration
from mplsparse.model import Playlist


def playlist_to_dict(playlist: Playlist) -> dict:
    """Convert a Playlist to a JSON-serializable dict."""
    stream_clips = []
    for clip in playlist.stream_clips:
        stream_clips.append(
            {
                "filename": clip.filename,
                "time_in_sec": clip.time_in_sec,
                "time_out_sec": clip.time_out_sec,
                "duration_sec": clip.duration_sec,
                "relative_time_in_sec": clip.relative_time_in_sec,
                "relative_time_out_sec": clip.relative_time_out_sec,
                "is_multi_angle": clip.is_multi_angle,
                "angle_count": clip.angle_count,
                "streams": {
                    "video": clip.video_count,
                    "audio": clip.audio_count,
                    "subtitle": clip.subtitle_count,
                    "interactive_menu": clip.interactive_menu_count,
                    "secondary_video": clip.secondary_video_count,
                    "secondary_audio": clip.secondary_audio_count,
                    "pip": clip.pip_count,
                },
            }
        )
    chapters = []
    for ch in playlist.chapters:
        chapters.append(
            {
                "relative_time_sec": ch.relative_time_sec,
                "stream_clip_index": ch.stream_clip_index,
                "timestamp": format_duration(ch.relative_time_sec),
            }
        )
    return {
        "name": playlist.name,
        "time_in_sec": playlist.time_in_sec,
        "time_out_sec": playlist.time_out_sec,
        "duration_sec": playlist.duration_sec,
        "duration": format_duration(playlist.duration_sec),
        "stream_clips": stream_clips,
        "chapters": chapters,
    }


def export_json(
    playlists: Iterable[Playlist], path: str | Path | None = None, pretty: bool = True
) -> str:
    """Export playlists to JSON. If path given, write to file. Always returns JSON string."""
    data = {
        "schema_version": "mplsparse.playlists.v1",
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "playlists": [playlist_to_dict(pl) for pl in playlists],
    }
    indent = 2 if pretty else None
    text = json.dumps(data, indent=indent, default=str)
    if path is not None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    return text
