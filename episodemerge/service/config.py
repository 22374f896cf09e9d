"""
config.py – Loading merge options and the build resource list from YAML.

Config file keys use the camelCase names of the build plugin options
(baseDirectory, verbose, episodeFiles, useJakartaNamespace, ...).
Command line values override file values.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import ConfigurationError, EpisodeIOError
from ..core.io import write_atomic
from .models import MergeRequest, Resource

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read '{path}': {e}", path=path) from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in '{path}': {e}", path=path) from e


def load_config(path: Path) -> Dict[str, Any]:
    data = _load_yaml(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config '{path}' must be a mapping, got {type(data).__name__}", path=path)
    return data


def build_request(config: Optional[Mapping[str, Any]] = None, **overrides: Any) -> MergeRequest:
    """Combine file config and overrides (None values are ignored) into a MergeRequest."""
    # File keys are aliases; map them to field names so overrides win
    aliases = {field.alias: name for name, field in MergeRequest.model_fields.items() if field.alias}
    values: Dict[str, Any] = {aliases.get(k, k): v for k, v in (config or {}).items()}
    for key, value in overrides.items():
        if value is not None:
            values[key] = value
    try:
        request = MergeRequest.model_validate(values)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid merge configuration: {e}") from e

    base = request.resolved_base_directory()
    if base is not None and not base.exists():
        logger.error(f"Base directory {base} does not exist!")
    return request


def load_resources(path: Path) -> List[Resource]:
    data = _load_yaml(path)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigurationError(f"Resource file '{path}' must contain a list of entries", path=path)
    try:
        return [Resource.model_validate(item) for item in data]
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid resource entry in '{path}': {e}", path=path) from e


def save_resources(path: Path, resources: List[Resource]) -> None:
    data = [res.model_dump(by_alias=True, exclude_none=True) for res in resources]
    text = yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    try:
        write_atomic(path, text.encode("utf-8"))
    except EpisodeIOError as e:
        raise EpisodeIOError(f"Failed to write resource list to '{path}': {e}", path=path) from e
