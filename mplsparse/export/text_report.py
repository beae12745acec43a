"""Plain text report for terminal display."""

from __future__ import annotations

from mplsparse.model import Playlist


def format_duration(seconds: float) -> str:
    """Format seconds as ``HH:MM:SS.mmm``.

    Hours are not wrapped at 24. Negative values (a chapter mark placed
    before its clip's in-point) get a leading ``-``.
    """
    sign = "-" if seconds < 0 else ""
    seconds = abs(seconds)
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{seconds % 60:06.3f}"


def playlist_report(playlist: Playlist) -> str:
    """Render the length and chapter list of one playlist."""
    lines: list[str] = [
        f"Playlist length: {format_duration(playlist.duration_sec)}",
        f"Chapter count: {playlist.chapter_count}",
    ]
    for i, ch in enumerate(playlist.chapters, start=1):
        lines.append(f"Chapter {i:>2}: {format_duration(ch.relative_time_sec)}")
    lines.append("")
    return "\n".join(lines)
