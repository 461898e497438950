from __future__ import annotations

from pathlib import Path

import pytest

from modal_editor.config import EditorMode
from modal_editor.modes import KeyInput
from modal_editor.session import EXIT_OK, EditorSession
from modal_editor.storage import LoadError, SaveError


def press(*names: str) -> list[KeyInput]:
    return [KeyInput(key=name, text=name if len(name) == 1 else None) for name in names]


def type_text(text: str) -> list[KeyInput]:
    return [KeyInput(key=char, text=char) for char in text]


def test_open_missing_file_starts_with_empty_buffer(tmp_path: Path) -> None:
    session = EditorSession.open(tmp_path / "new.txt")

    assert session.buffer.lines == ("",)
    assert session.mode is EditorMode.NORMAL
    assert session.exit_code is None
    assert not (tmp_path / "new.txt").exists()


def test_open_directory_fails(tmp_path: Path) -> None:
    with pytest.raises(LoadError):
        EditorSession.open(tmp_path)


def test_edit_write_quit_round_trip(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_bytes(b"world\n")
    session = EditorSession.open(target)

    session.feed(press("i") + type_text("hello ") + press("ESC"))
    session.feed(press(":") + type_text("wq") + press("ENTER"))

    assert target.read_bytes() == b"hello world\n"
    assert session.quit_requested is True
    assert session.exit_code == EXIT_OK
    assert session.status_message == "File saved"


def test_new_file_is_created_on_write(tmp_path: Path) -> None:
    target = tmp_path / "new.txt"
    session = EditorSession.open(target)

    session.feed(press("i") + type_text("ab") + press("ENTER") + type_text("c"))
    session.feed(press("ESC", ":", "w", "ENTER"))

    assert target.read_bytes() == b"ab\nc"
    assert session.buffer.dirty is False
    assert session.quit_requested is False


def test_unmodified_file_saves_identical_bytes(tmp_path: Path) -> None:
    content = b"first\r\nsecond\r\n\r\n"
    target = tmp_path / "crlf.txt"
    target.write_bytes(content)
    session = EditorSession.open(target)

    session.feed(press(":", "w", "ENTER"))

    assert target.read_bytes() == content


def test_failed_save_keeps_session_open() -> None:
    def failing_writer(path: str, data: bytes) -> int:
        raise SaveError(f"Permission denied: cannot write {path}", path=path)

    session = EditorSession(
        "locked.txt", reader=lambda path: b"text", writer=failing_writer
    )
    session.feed(press("i", "x", "ESC"))

    session.feed(press(":", "w", "q", "ENTER"))

    assert session.quit_requested is False
    assert session.exit_code is None
    assert session.mode is EditorMode.NORMAL
    assert session.buffer.lines == ("xtext",)
    assert session.buffer.dirty is True
    assert session.status_message.startswith("Save failed: Permission denied")


def test_keys_after_quit_are_ignored() -> None:
    saved: list[bytes] = []

    def writer(path: str, data: bytes) -> int:
        saved.append(data)
        return len(data)

    session = EditorSession("doc.txt", reader=lambda path: b"", writer=writer)

    results = session.feed(press("q", "i", "x"))

    assert len(results) == 1
    assert session.quit_requested is True
    assert session.handle_key(KeyInput(key="i", text="i")).status == "closed"
    assert session.mode is EditorMode.NORMAL
    assert saved == []


def test_command_line_is_only_visible_in_command_mode() -> None:
    session = EditorSession("doc.txt", reader=lambda path: b"")

    session.feed(press(":", "w"))
    assert session.command_line == "w"

    session.feed(press("ESC"))
    assert session.command_line == ""


def test_pull_buffer_reports_path() -> None:
    session = EditorSession("doc.txt", reader=lambda path: b"a\nb")

    mirror = session.pull_buffer()

    assert mirror.lines == ("a", "b")
    assert mirror.attributes["path"] == "doc.txt"
