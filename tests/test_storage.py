from __future__ import annotations

import os
from pathlib import Path

import pytest

from modal_editor.storage import LoadError, SaveError, read_document, write_document


def test_read_missing_file_yields_empty_content(tmp_path: Path) -> None:
    assert read_document(tmp_path / "new.txt") == b""


def test_read_returns_raw_bytes(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_bytes(b"one\r\ntwo\n\xff")

    assert read_document(target) == b"one\r\ntwo\n\xff"


def test_read_directory_is_a_load_error(tmp_path: Path) -> None:
    with pytest.raises(LoadError) as excinfo:
        read_document(tmp_path)

    assert excinfo.value.path == os.fspath(tmp_path)
    assert "directory" in str(excinfo.value)


def test_write_creates_file(tmp_path: Path) -> None:
    target = tmp_path / "fresh.txt"

    written = write_document(target, b"hello\n")

    assert written == 6
    assert target.read_bytes() == b"hello\n"


def test_write_replaces_existing_content(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_bytes(b"a much longer original body")

    write_document(target, b"short")

    assert target.read_bytes() == b"short"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["notes.txt"]


def test_write_keeps_file_permissions(tmp_path: Path) -> None:
    target = tmp_path / "script.sh"
    target.write_bytes(b"#!/bin/sh\n")
    target.chmod(0o750)

    write_document(target, b"#!/bin/sh\necho hi\n")

    assert target.stat().st_mode & 0o777 == 0o750


def test_write_into_missing_directory_raises_save_error(tmp_path: Path) -> None:
    target = tmp_path / "missing" / "notes.txt"

    with pytest.raises(SaveError) as excinfo:
        write_document(target, b"data")

    assert excinfo.value.path == os.fspath(target)
    assert "No such directory" in str(excinfo.value)
    assert list(tmp_path.iterdir()) == []


def test_failed_replace_leaves_target_untouched(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "notes.txt"
    target.write_bytes(b"original")

    def refuse(src: str, dst: str) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(os, "replace", refuse)

    with pytest.raises(SaveError) as excinfo:
        write_document(target, b"replacement")

    assert "Permission denied" in str(excinfo.value)
    assert target.read_bytes() == b"original"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["notes.txt"]
