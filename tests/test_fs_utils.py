from pathlib import Path

import pytest

from trackstore.core import (
    ensure_dir,
    ensure_parent_dir,
    iter_json_files,
    read_json,
    remove_file,
    write_bytes,
    write_json,
)


def test_read_json_missing_file_returns_default(tmp_path: Path) -> None:
    path = tmp_path / "missing.json"
    default = {"value": 123}

    result = read_json(str(path), default=default)

    assert result == default


def test_read_json_invalid_json_calls_on_error_and_returns_default(
    tmp_path: Path,
) -> None:
    path = tmp_path / "invalid.json"
    path.write_text("{ invalid json", encoding="utf-8")

    errors = []

    def on_error(exc: Exception) -> None:
        errors.append(exc)

    default = {"ok": True}

    result = read_json(str(path), default=default, on_error=on_error)

    assert result == default
    assert len(errors) == 1


def test_read_json_propagates_other_os_errors(tmp_path: Path) -> None:
    directory = tmp_path / "not-a-file.json"
    directory.mkdir()

    with pytest.raises(OSError):
        read_json(directory, default=None)


def test_write_json_creates_parent_dirs_and_roundtrips(tmp_path: Path) -> None:
    data = {"title": "Tití Me Preguntó", "genres": ["Pop"], "nested": {"a": 1}}
    path = tmp_path / "nested" / "path" / "data.json"

    write_json(path, data)

    assert path.exists()
    assert "Tití" in path.read_text(encoding="utf-8")
    loaded = read_json(str(path), default=None)
    assert loaded == data


def test_write_json_failure_keeps_previous_content(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "record.json"
    write_json(path, {"version": 1})

    def failing_replace(src, dst):
        raise PermissionError("read-only")

    monkeypatch.setattr("trackstore.core.fs_utils.os.replace", failing_replace)

    with pytest.raises(PermissionError):
        write_json(path, {"version": 2})

    assert read_json(path) == {"version": 1}
    assert [p.name for p in tmp_path.iterdir()] == ["record.json"]


def test_write_bytes_overwrites(tmp_path: Path) -> None:
    path = tmp_path / "uploads" / "1.mp3"

    write_bytes(path, b"first")
    write_bytes(path, b"second")

    assert path.read_bytes() == b"second"


def test_iter_json_files_sorted_and_skips_temp_files(tmp_path: Path) -> None:
    (tmp_path / "b.json").write_text("{}", encoding="utf-8")
    (tmp_path / "a.json").write_text("{}", encoding="utf-8")
    (tmp_path / "c.json12345.tmp").write_text("{", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")

    names = [p.name for p in iter_json_files(tmp_path)]

    assert names == ["a.json", "b.json"]


def test_remove_file_reports_missing(tmp_path: Path) -> None:
    path = tmp_path / "x.wav"
    path.write_bytes(b"x")

    assert remove_file(path) is True
    assert not path.exists()
    assert remove_file(path) is False


def test_ensure_dir_and_ensure_parent_dir(tmp_path: Path) -> None:
    dir_path = tmp_path / "some" / "dir"
    ensure_dir(str(dir_path))

    assert dir_path.exists()
    assert dir_path.is_dir()

    file_path = tmp_path / "parent" / "sub" / "file.json"
    ensure_parent_dir(file_path)

    assert file_path.parent.exists()
    assert file_path.parent.is_dir()
