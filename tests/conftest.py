import os
from pathlib import Path

import pytest

from tests.builders import build_mark, build_mpls, build_play_item, ticks_from_seconds


@pytest.fixture
def real_mpls_path() -> Path:
    """Path to a real ``.mpls`` file for integration tests.

    Uses MPLSPARSE_TEST_MPLS if set (a file, or a BDMV/PLAYLIST directory
    whose first playlist is used); skipped otherwise.
    """
    env: str | None = os.environ.get("MPLSPARSE_TEST_MPLS")
    if not env:
        pytest.skip("MPLSPARSE_TEST_MPLS not set")
    p = Path(env)
    if p.is_dir():
        found = sorted(p.glob("*.mpls")) or sorted(p.glob("BDMV/PLAYLIST/*.mpls"))
        if not found:
            pytest.skip(f"No .mpls files found at {p}")
        p = found[0]
    if not p.is_file():
        pytest.skip(f"{p} is not a file")
    return p


@pytest.fixture
def two_clip_mpls() -> bytes:
    """Two 10 s clips; the second starts 100 s into its m2ts.

    Marks: clip 0 at 0 s, a link point, clip 1 at 105 s (15 s playlist
    time), and a spurious mark 0.5 s before the end.
    """
    items = [
        build_play_item("00001", 0, ticks_from_seconds(10)),
        build_play_item("00002", ticks_from_seconds(100), ticks_from_seconds(110)),
    ]
    marks = [
        build_mark(0, 0),
        build_mark(0, ticks_from_seconds(3), mark_type=2),
        build_mark(1, ticks_from_seconds(105)),
        build_mark(1, ticks_from_seconds(109.5)),
    ]
    return build_mpls(items, marks, time_in=0, time_out=ticks_from_seconds(110))
