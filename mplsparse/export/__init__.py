"""Output formatters (text, JSON)."""

from mplsparse.export.json_out import export_json, playlist_to_dict
from mplsparse.export.text_report import format_duration, playlist_report
