from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from ..core.binding import LEGACY_NAMESPACE
from ..core.locator import DEFAULT_EPISODE_PATTERNS, EPISODE_FILENAME, OUTPUT_FOLDER
from ..core.merge import MergeStrategy, PREFERRED_STRATEGY


class MergeRequest(BaseModel):
    """One merge invocation. Keys accept both the snake_case and the camelCase (config file) form."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    # Directory relative base directories are resolved against (the project root)
    project_directory: Optional[Path] = Field(default=None, alias="projectDirectory")
    # Build output directory; the merged file is written below it
    build_directory: Optional[Path] = Field(default=None, alias="buildDirectory")
    # None = build_directory
    base_directory: Optional[Path] = Field(default=None, alias="baseDirectory")
    episode_files: Tuple[str, ...] = Field(default=tuple(DEFAULT_EPISODE_PATTERNS), alias="episodeFiles")
    exclude_files: Tuple[str, ...] = Field(default=(), alias="excludeFiles")
    use_jakarta_namespace: bool = Field(default=True, alias="useJakartaNamespace")
    verbose: bool = False
    strategy: MergeStrategy = PREFERRED_STRATEGY
    # Only used by the line-splice strategy
    strict_layout: bool = Field(default=True, alias="strictLayout")
    # Only used by the xml-dom strategy
    accepted_namespaces: Tuple[str, ...] = Field(default=(LEGACY_NAMESPACE,), alias="acceptedNamespaces")

    def resolved_base_directory(self) -> Optional[Path]:
        base = self.base_directory if self.base_directory is not None else self.build_directory
        if base is None:
            return None
        if not base.is_absolute():
            base = (self.project_directory or Path.cwd()) / base
        return base

    def output_path(self) -> Optional[Path]:
        if self.build_directory is None:
            return None
        build_dir = self.build_directory
        if not build_dir.is_absolute():
            build_dir = (self.project_directory or Path.cwd()) / build_dir
        return build_dir / OUTPUT_FOLDER / EPISODE_FILENAME


class Resource(BaseModel):
    """A build resource entry: directory + include/exclude globs, packaged below target_path."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    directory: Optional[str] = None
    includes: List[str] = []
    excludes: List[str] = []
    target_path: Optional[str] = Field(default=None, alias="targetPath")
    filtering: bool = False
    merge_id: Optional[str] = Field(default=None, alias="mergeId")


class MergeOutcome(BaseModel):
    matches: List[Path]
    merged: bool
    strategy: MergeStrategy
    output_path: Optional[Path] = None
