import json
import os
from pathlib import Path
import tempfile
from typing import Any, Callable, Iterator, Optional


def ensure_parent_dir(path: Path | str) -> None:
    """
    Ensure the parent directory of a given file path exists.
    Example:
      ensure_parent_dir("/tmp/data/tracks/123.json")
    """
    ensure_dir(os.path.dirname(path))


def ensure_dir(directory: Path | str) -> None:
    """
    Ensure a directory exists. If it doesn't, create it.
    Example:
      ensure_dir("/tmp/data/uploads")
    """
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _atomic_write(path: Path | str, mode: str, write: Callable[[Any], None]) -> None:
    target_path = Path(path)
    ensure_parent_dir(target_path)

    # Create a temporary file in the same directory as the target file.
    fd, tmp_path_str = tempfile.mkstemp(
        dir=str(target_path.parent),
        prefix=target_path.name,
        suffix=".tmp",
    )
    tmp_path = Path(tmp_path_str)

    try:
        encoding = None if "b" in mode else "utf-8"
        with os.fdopen(fd, mode, encoding=encoding) as f:
            write(f)
            f.flush()
            os.fsync(f.fileno())

        # Atomically replace the target file with the temporary file.
        os.replace(tmp_path, target_path)
    except Exception:
        # Best-effort cleanup of the temporary file if something goes wrong.
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def write_json(path: str | Path, data: Any) -> None:
    """
    Write JSON data to a file using an atomic replace.

    The JSON content is first written to a temporary file in the same directory
    as the target path. The temporary file is flushed and fsynced, then
    atomically moved over the target path using os.replace.

    Readers will either see the previous valid file contents or the new full
    JSON document, but never a truncated or corrupted file.
    """
    _atomic_write(
        path,
        "w",
        lambda f: json.dump(data, f, ensure_ascii=False, indent=2),
    )


def write_bytes(path: str | Path, data: bytes) -> None:
    """
    Write a binary blob with the same temp-file + os.replace strategy as
    write_json. An existing file at `path` is overwritten.
    """
    _atomic_write(path, "wb", lambda f: f.write(data))


def read_json(
    path: str | Path,
    default: Any = None,
    *,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> Any:
    """
    Read a JSON file safely.

    - returns `default` if the file does not exist
    - returns `default` if JSON is invalid or corrupted (optionally calling on_error)

    Other OS-level errors (permissions, a directory in place of the file...)
    are propagated to the caller.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        if on_error:
            on_error(e)
        return default


def iter_json_files(directory: str | Path) -> Iterator[Path]:
    """
    Yield the `*.json` files of a directory in sorted name order.

    Temporary files left behind by an interrupted write end in `.tmp` and are
    never yielded. Raises FileNotFoundError if the directory is missing.
    """
    for name in sorted(os.listdir(directory)):
        if name.endswith(".json"):
            yield Path(directory) / name


def remove_file(path: str | Path) -> bool:
    """
    Remove a file. Returns False if it did not exist; other OS errors propagate.
    """
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    return True
