"""
merge.py – Strategy selection for merging episode files.

LINE_SPLICE is the production choice: it copies the inner text of every file
verbatim and so keeps prefixed namespace declarations and the attributes that
use them. XML_DOM re-parents parsed nodes and loses declarations that only
exist on a source root element.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .binding import MergedDocument
from .dom import merge_by_parsing
from .splice import merge_by_splicing


class MergeStrategy(str, Enum):
    LINE_SPLICE = "line-splice"
    XML_DOM = "xml-dom"


PREFERRED_STRATEGY = MergeStrategy.LINE_SPLICE


def merge_episodes(
    matches: Sequence[Path],
    use_jakarta: bool = True,
    strategy: MergeStrategy = PREFERRED_STRATEGY,
    strict_layout: bool = True,
    accepted_namespaces: Optional[Iterable[str]] = None,
    verbose: bool = False,
) -> MergedDocument:
    """Merge the given episode files into one binding document, in the given order."""
    strategy = MergeStrategy(strategy)
    if strategy is MergeStrategy.XML_DOM:
        return merge_by_parsing(matches, use_jakarta=use_jakarta,
                                accepted_namespaces=accepted_namespaces, verbose=verbose)
    return merge_by_splicing(matches, use_jakarta=use_jakarta, strict_layout=strict_layout, verbose=verbose)
