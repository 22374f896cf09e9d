"""
binding.py – Constants and result type shared by both merge strategies.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .io import write_atomic

LEGACY_NAMESPACE = "http://java.sun.com/xml/ns/jaxb"
JAKARTA_NAMESPACE = "https://jakarta.ee/xml/ns/jaxb"
LEGACY_VERSION = "2.1"
JAKARTA_VERSION = "3.0"

ROOT_LOCAL_NAME = "bindings"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def root_namespace(use_jakarta: bool) -> Tuple[str, str]:
    """(namespace URI, version) of the synthesized root element."""
    if use_jakarta:
        return JAKARTA_NAMESPACE, JAKARTA_VERSION
    return LEGACY_NAMESPACE, LEGACY_VERSION


def root_start_tag(use_jakarta: bool) -> str:
    ns, version = root_namespace(use_jakarta)
    return f'<{ROOT_LOCAL_NAME} xmlns="{ns}" if-exists="true" version="{version}">'


@dataclass(frozen=True)
class MergedDocument:
    content: bytes
    namespace_uri: str
    version: str
    if_exists: str = "true"

    def write_to(self, target: Path) -> Path:
        return write_atomic(target, self.content)
