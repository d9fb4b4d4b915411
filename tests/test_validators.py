from __future__ import annotations

from pathlib import Path

from frontend.validators import parse_archive_path


def test_empty_path_is_rejected() -> None:
    info = parse_archive_path("   ")
    assert info.path is None
    assert info.error == "archive path is required"


def test_non_zip_is_rejected(tmp_path: Path) -> None:
    target = tmp_path / "config.yml"
    target.write_text("spaces: []\n", encoding="utf-8")
    info = parse_archive_path(str(target))
    assert info.error == "archive must be a .zip file"


def test_missing_zip_is_rejected(tmp_path: Path) -> None:
    info = parse_archive_path(str(tmp_path / "missing.zip"))
    assert info.error is not None
    assert info.error.startswith("file not found")


def test_existing_zip_is_accepted_with_quotes(tmp_path: Path) -> None:
    target = tmp_path / "Config.ZIP"
    target.write_bytes(b"PK\x03\x04")
    info = parse_archive_path(f"'{target}'")
    assert info.error is None
    assert info.path == target
    assert info.filename == "Config.ZIP"
