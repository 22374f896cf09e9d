"""
errors.py – Error kinds raised by the episode merge engine.

All of them are fatal for the invoking build step. None are retried.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class EpisodeMergeError(Exception):
    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class ConfigurationError(EpisodeMergeError):
    """Missing or invalid configuration. Raised before any I/O happens."""


class MergeError(EpisodeMergeError):
    """Base for failures while reading, merging or writing episode files."""


class ParseError(MergeError):
    """An input file is not well-formed XML."""


class ValidationError(MergeError):
    """An input file violates the binding document contract."""


class EpisodeIOError(MergeError, OSError):
    """Read or write failure on a concrete path."""
