"""
dom.py – XML-DOM merge of episode files.

Every input is parsed, its root is checked to be a `bindings` element in one
of the accepted namespaces, and deep copies of all the root's child nodes are
imported under a freshly built target root.

Known limitation: namespace declarations that only live on a source root are
not carried over. Attribute values that refer to such a prefix (e.g.
scd="x-schema::tns") become unresolvable in the merged output. The line-splice
strategy does not have this problem and is the preferred one.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple
from xml.dom import minidom
from xml.parsers.expat import ExpatError

from .binding import LEGACY_NAMESPACE, ROOT_LOCAL_NAME, XML_DECLARATION, MergedDocument, root_namespace
from .errors import EpisodeIOError, ParseError, ValidationError
from .header import as_comment_text, build_header

DEFAULT_ACCEPTED_NAMESPACES: Tuple[str, ...] = (LEGACY_NAMESPACE,)

logger = logging.getLogger(__name__)


def parse_episode(path: Path) -> minidom.Document:
    try:
        with path.open("rb") as fh:
            return minidom.parse(fh)
    except ExpatError as e:
        raise ParseError(f"The file '{path.resolve()}' is invalid XML: {e}", path=path) from e
    except OSError as e:
        raise EpisodeIOError(f"Failed to read '{path}': {e}", path=path) from e


def check_binding_root(path: Path, root, accepted_namespaces: Iterable[str]) -> None:
    if root.localName != ROOT_LOCAL_NAME:
        raise ValidationError(
            f"The file '{path.resolve()}' does not seem to be a JAXB binding file "
            f"(unexpected element name '{root.localName}')",
            path=path,
        )
    accepted = tuple(accepted_namespaces)
    if root.namespaceURI not in accepted:
        raise ValidationError(
            f"The file '{path.resolve()}' does not seem to be a JAXB binding file "
            f"(unexpected namespace URI '{root.namespaceURI or ''}', expected one of {list(accepted)})",
            path=path,
        )


def new_target_document(use_jakarta: bool, header: str) -> minidom.Document:
    ns, version = root_namespace(use_jakarta)
    doc = minidom.getDOMImplementation().createDocument(ns, ROOT_LOCAL_NAME, None)
    root = doc.documentElement
    # minidom does not emit declarations on its own
    root.setAttribute("xmlns", ns)
    root.setAttribute("if-exists", "true")
    root.setAttribute("version", version)
    root.appendChild(doc.createComment(as_comment_text(header)))
    return doc


def merge_by_parsing(matches: Sequence[Path], use_jakarta: bool = True,
                     accepted_namespaces: Optional[Iterable[str]] = None,
                     verbose: bool = False) -> MergedDocument:
    if verbose:
        logger.info(f"Merging {len(matches)} files using XML parsing/cloning")

    accepted = tuple(accepted_namespaces) if accepted_namespaces is not None else DEFAULT_ACCEPTED_NAMESPACES
    target_doc = new_target_document(use_jakarta, build_header(matches))
    target_root = target_doc.documentElement

    for path in matches:
        if verbose:
            logger.info(f"Parsing XML file '{path}'")
        source_doc = parse_episode(path)
        try:
            source_root = source_doc.documentElement
            check_binding_root(path, source_root, accepted)
            for child in list(source_root.childNodes):
                target_root.appendChild(target_doc.importNode(child, True))
        finally:
            source_doc.unlink()

    ns, version = root_namespace(use_jakarta)
    content = (XML_DECLARATION + "\n" + target_root.toxml() + "\n").encode("utf-8")
    target_doc.unlink()
    return MergedDocument(content=content, namespace_uri=ns, version=version)
