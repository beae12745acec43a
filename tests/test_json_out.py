"""Tests for JSON export."""

import json
from pathlib import Path

from mplsparse.bdmv.mpls import parse_mpls_bytes
from mplsparse.export import export_json, playlist_to_dict


def test_playlist_to_dict(two_clip_mpls: bytes) -> None:
    data = playlist_to_dict(parse_mpls_bytes(two_clip_mpls, name="00001.mpls"))
    assert data["name"] == "00001.mpls"
    assert data["duration_sec"] == 20.0
    assert data["duration"] == "00:00:20.000"
    assert [c["filename"] for c in data["stream_clips"]] == ["00001.M2TS", "00002.M2TS"]
    assert data["stream_clips"][1]["relative_time_in_sec"] == 10.0
    assert data["stream_clips"][0]["streams"]["audio"] == 1
    assert [ch["timestamp"] for ch in data["chapters"]] == ["00:00:00.000", "00:00:15.000"]


def test_export_json_writes_file(tmp_path: Path, two_clip_mpls: bytes) -> None:
    out = tmp_path / "nested" / "playlists.json"
    text = export_json([parse_mpls_bytes(two_clip_mpls)], path=out, pretty=False)
    assert out.read_text(encoding="utf-8") == text
    data = json.loads(text)
    assert data["schema_version"] == "mplsparse.playlists.v1"
    assert len(data["playlists"]) == 1
    assert len(data["playlists"][0]["chapters"]) == 2
