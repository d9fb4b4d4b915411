"""Shared constants for the Textual UI."""

from __future__ import annotations

ACCENT_GREEN = "#3fbf7f"
ARCHIVE_SUFFIXES = (".zip",)
# Seconds between header/button refreshes while requests are in flight.
REFRESH_INTERVAL = 0.25
