"""Infrastructure: reading source files and listing directories.

``OSError`` never leaves this module untyped: missing targets become
:class:`PathNotFoundError`, everything else :class:`FileReadError`.
"""

from __future__ import annotations

from pathlib import Path

from explain_me.exceptions import FileReadError, PathNotFoundError


def read_source_file(path: Path | str) -> str:
    """Return the text of *path*.

    Bytes that are not valid UTF-8 are replaced, so binary files are
    read (and later sent to the model) rather than rejected.

    Raises
    ------
    PathNotFoundError
        When *path* does not exist.
    FileReadError
        When *path* exists but cannot be read.
    """
    source = Path(path)
    try:
        return source.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError as exc:
        raise PathNotFoundError(f"File not found: {source}") from exc
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise FileReadError(f"Cannot read {source}: {reason}") from exc


def list_directory_files(path: Path | str) -> list[Path]:
    """Return the regular files directly inside *path*, sorted by name.

    Subdirectories are not descended into.

    Raises
    ------
    PathNotFoundError
        When *path* does not exist or is not a directory.
    FileReadError
        When the directory cannot be listed.
    """
    directory = Path(path)
    if not directory.is_dir():
        raise PathNotFoundError(f"Directory not found: {directory}")
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise FileReadError(f"Cannot list {directory}: {reason}") from exc
    return [entry for entry in entries if entry.is_file()]
