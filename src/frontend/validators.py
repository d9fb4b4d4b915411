"""Validation helpers for panel inputs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .constants import ARCHIVE_SUFFIXES


@dataclass
class ArchivePathInfo:
    path: Path | None
    filename: str | None
    error: str | None = None


def parse_archive_path(raw_value: str) -> ArchivePathInfo:
    raw_value = raw_value.strip().strip("'\"")
    if not raw_value:
        return ArchivePathInfo(None, None, "archive path is required")

    path = Path(raw_value).expanduser()
    if path.suffix.lower() not in ARCHIVE_SUFFIXES:
        return ArchivePathInfo(None, None, "archive must be a .zip file")
    if not path.is_file():
        return ArchivePathInfo(None, None, f"file not found: {path}")
    return ArchivePathInfo(path, path.name)
