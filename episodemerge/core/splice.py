from __future__ import annotations
# -*- coding: utf-8 -*-

"""
splice.py – Line-splice merge of episode files.

The inner content of each file is copied as raw text under one synthesized
root. Nothing is parsed as XML, so prefixed namespace declarations and
attributes that reference them (e.g. scd="x-schema::tns") survive unchanged.

Two layout modes:
  - strict (default): the envelope (XML declaration, root start tag, root
    end tag) is located textually, whatever the line layout. A file whose
    envelope cannot be found is rejected, and so is a file whose content
    depends on a prefix bound only on its root element.
  - lenient: the conventional layout is assumed blindly. The first two lines
    (declaration, root start tag) and the last line (root end tag) are dropped.
    Files that put the declaration and the root tag on one line, or split the
    root tag over several lines, produce a broken merge in this mode.
"""

import logging
import re
from pathlib import Path
from typing import List, Sequence

from .binding import XML_DECLARATION, ROOT_LOCAL_NAME, MergedDocument, root_namespace, root_start_tag
from .errors import ValidationError
from .header import as_comment_text, build_header
from .io import read_text

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_PROLOG_ITEM_RE = re.compile(r"\s*(?:<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^>]*>)", re.S)
_ROOT_OPEN_RE = re.compile(r"\s*<((?:[\w.-]+:)?" + ROOT_LOCAL_NAME + r")(?=[\s/>])")
_TRAILER_RE = re.compile(r"(?:\s*<!--.*?-->)*\s*\Z", re.S)
_PREFIX_DECL_RE = re.compile(r"\bxmlns:([\w.-]+)\s*=")


def split_lines(text: str) -> List[str]:
    """Split like a line reader: no trailing empty line for a final line break."""
    if not text:
        return []
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _end_of_tag(text: str, pos: int) -> int:
    """Index of the `>` closing the tag starting before pos, honouring quoted values."""
    quote = None
    for i in range(pos, len(text)):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in ('"', "'"):
            quote = ch
        elif ch == ">":
            return i
    return -1


def _check_root_prefixes(path: Path, qname: str, start_tag: str, inner: str) -> None:
    """
    The root start tag is not copied, so neither is any prefix it binds.
    Refuse files whose content would end up with an unbound prefix.
    """
    if ":" in qname:
        raise ValidationError(
            f"The file '{path}' uses a prefixed root element <{qname}>; only an unprefixed <{ROOT_LOCAL_NAME}> root can be spliced",
            path=path,
        )
    for prefix in _PREFIX_DECL_RE.findall(start_tag):
        if re.search(r"(?<![\w.-])" + re.escape(prefix) + r"(?![\w.-])", inner):
            raise ValidationError(
                f"The file '{path}' declares prefix '{prefix}' on its root element and uses it in the content; "
                f"the declaration would be lost when splicing",
                path=path,
            )


def inner_lines_strict(path: Path, text: str) -> List[str]:
    pos = 0
    while True:
        m = _PROLOG_ITEM_RE.match(text, pos)
        if not m:
            break
        pos = m.end()

    m = _ROOT_OPEN_RE.match(text, pos)
    if not m:
        raise ValidationError(
            f"The file '{path}' does not seem to be a JAXB binding file (no <{ROOT_LOCAL_NAME}> root element found)",
            path=path,
        )
    qname = m.group(1)
    tag_end = _end_of_tag(text, m.end())
    if tag_end < 0:
        raise ValidationError(f"The file '{path}' has an unterminated <{qname}> start tag", path=path)
    if text[tag_end - 1] == "/":
        # Empty root, nothing to contribute
        return []

    body = text[tag_end + 1:]
    close_re = re.compile(r"</" + re.escape(qname) + r"\s*>")
    close = None
    for close in close_re.finditer(body):
        pass
    if close is None or not _TRAILER_RE.match(body, close.end()):
        raise ValidationError(f"The file '{path}' has no closing </{qname}> tag at its end", path=path)

    inner = body[:close.start()]
    _check_root_prefixes(path, qname, text[m.start():tag_end + 1], inner)
    lb = _LINE_BREAK_RE.match(inner)
    if lb:
        inner = inner[lb.end():]
    lines = _LINE_BREAK_RE.split(inner) if inner else []
    # Indentation of the end tag (or the empty rest after the last line break)
    if lines and not lines[-1].strip():
        lines.pop()
    return lines


def inner_lines_lenient(path: Path, text: str) -> List[str]:
    lines = split_lines(text)
    if len(lines) < 3:
        raise ValidationError(
            f"The file '{path}' has {len(lines)} line(s); at least 3 are needed to strip the envelope",
            path=path,
        )
    return lines[2:-1]


def merge_by_splicing(matches: Sequence[Path], use_jakarta: bool = True, strict_layout: bool = True,
                      verbose: bool = False) -> MergedDocument:
    if verbose:
        mode = "envelope-aware" if strict_layout else "line by line"
        logger.info(f"Merging {len(matches)} files using {mode} reading")

    out: List[str] = [
        XML_DECLARATION,
        root_start_tag(use_jakarta),
        "<!--\n" + as_comment_text(build_header(matches)) + "\n-->",
    ]
    for path in matches:
        text = read_text(path)
        if strict_layout:
            out.extend(inner_lines_strict(path, text))
        else:
            out.extend(inner_lines_lenient(path, text))
    out.append(f"</{ROOT_LOCAL_NAME}>")

    ns, version = root_namespace(use_jakarta)
    content = "".join(line + "\n" for line in out).encode("utf-8")
    return MergedDocument(content=content, namespace_uri=ns, version=version)
