from __future__ import annotations
# -*- coding: utf-8 -*-

"""
locator.py – Discovery of the per-module episode files to merge.

Patterns use the Ant/Maven glob dialect: `*` and `?` match inside one path
segment, `**` matches any number of segments, and a trailing `/` is short
for `/**`. Matching is case-sensitive and always on forward-slash paths.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import ConfigurationError

EPISODE_FILENAME = "sun-jaxb.episode"
OUTPUT_FOLDER = "merged-jaxb-episode"
DEFAULT_EPISODE_PATTERNS = ["**/" + EPISODE_FILENAME]

logger = logging.getLogger(__name__)


def implicit_excludes(filename: str = EPISODE_FILENAME) -> List[str]:
    """Already packaged copy plus our own previous output."""
    return [
        "classes/META-INF/" + filename,
        "**/" + OUTPUT_FOLDER + "/" + filename,
    ]


def _normalize_pattern(pattern: str) -> List[str]:
    normalized = str(pattern).strip().replace("\\", "/")
    if normalized.endswith("/"):
        normalized += "**"
    return [seg for seg in normalized.split("/") if seg not in ("", ".")]


def _match_segments(pat: Sequence[str], parts: Sequence[str]) -> bool:
    if not pat:
        return not parts
    head = pat[0]
    if head == "**":
        # Collapse repeated "**" and try every possible split point
        rest = pat[1:]
        while rest and rest[0] == "**":
            rest = rest[1:]
        if not rest:
            return True
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))
    if not parts:
        return False
    if not fnmatch.fnmatchcase(parts[0], head):
        return False
    return _match_segments(pat[1:], parts[1:])


def match_path(pattern: str, rel_path: str) -> bool:
    """True if the relative forward-slash path matches the glob pattern."""
    parts = [p for p in rel_path.replace("\\", "/").split("/") if p]
    return _match_segments(_normalize_pattern(pattern), parts)


def _matches_any(patterns: Sequence[str], rel_path: str) -> bool:
    return any(match_path(p, rel_path) for p in patterns)


def scan_directory(base_directory: Path, includes: Sequence[str], excludes: Sequence[str]) -> List[str]:
    """
    Returns the relative paths (forward slashes, sorted) of all files under
    base_directory matching any include and no exclude pattern.
    """
    base = Path(base_directory)
    found: List[str] = []
    for dirpath, dirnames, filenames in os.walk(str(base)):
        dirnames.sort()
        for fn in filenames:
            rel = (Path(dirpath) / fn).relative_to(base).as_posix()
            if not _matches_any(includes, rel):
                continue
            if _matches_any(excludes, rel):
                continue
            found.append(rel)
    found.sort()
    return found


def locate_episode_files(
    base_directory: Optional[Path],
    include_patterns: Optional[Sequence[str]],
    exclude_patterns: Optional[Sequence[str]] = None,
    filename: str = EPISODE_FILENAME,
) -> List[Path]:
    """
    Resolve the configured glob patterns to the absolute episode files to merge.

    The implicit excludes are always appended so that a repeated run never
    feeds its own previous output back in.
    """
    if base_directory is None:
        raise ConfigurationError("No baseDirectory specified!")
    if not include_patterns:
        raise ConfigurationError("No episode file is specified")

    base = Path(base_directory).resolve()
    if not base.is_dir():
        raise ConfigurationError(f"Base directory {base} does not exist!", path=base)

    excludes = list(exclude_patterns or []) + implicit_excludes(filename)
    matches: List[Path] = []
    for rel in scan_directory(base, list(include_patterns), excludes):
        abs_path = base / rel
        logger.info(f"Found episode file to merge: {abs_path}")
        matches.append(abs_path)
    return matches
