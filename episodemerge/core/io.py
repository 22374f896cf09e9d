"""Scoped file reads and the atomic write of the merged result."""

import os
from pathlib import Path

from .errors import EpisodeIOError


def read_text(path: Path) -> str:
    """Read a whole file as UTF-8, ignoring a leading BOM."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise EpisodeIOError(f"Failed to read '{path}': {e}", path=path) from e
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise EpisodeIOError(f"The file '{path}' is not valid UTF-8: {e}", path=path) from e


def write_atomic(target: Path, content: bytes) -> Path:
    tmp_file = target.with_name(target.name + ".tmp")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp_file.write_bytes(content)
        os.replace(tmp_file, target)
    except OSError as e:
        try:
            tmp_file.unlink()
        except OSError:
            pass
        raise EpisodeIOError(
            f"Failed to write merged JAXB episode file to '{target.resolve()}': {e}", path=target
        ) from e
    return target
