# -*- coding: utf-8 -*-

"""
resources.py – Rewires the build's resource list after a merge.

The per-module episode files must no longer be packaged; the merged file is
packaged instead. The rules, applied per entry:

  1. The entry explicitly includes META-INF/<episode> (either slash form):
     the include is removed. If nothing is left the whole entry goes, since
     empty includes mean "include everything".
  2. Otherwise, if the entry has no excludes, META-INF/<episode> is excluded.
  3. Otherwise the entry is left alone.

Finally one entry for the merged file is appended at the end of the list.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, Tuple

from ..core.locator import EPISODE_FILENAME
from .models import Resource

MERGED_TARGET_PATH = "META-INF/"

logger = logging.getLogger(__name__)


class ReconcileAction(str, Enum):
    REMOVE_ENTRY = "remove-entry"
    REMOVED_INCLUDE = "removed-include"
    ADDED_EXCLUDE = "added-exclude"
    UNCHANGED = "unchanged"


def episode_resource_names(filename: str = EPISODE_FILENAME) -> Tuple[str, str]:
    return "META-INF/" + filename, "META-INF\\" + filename


def describe_resource(res: Resource) -> str:
    return (
        f"[dir={res.directory}; includes={res.includes}; excludes={res.excludes}; "
        f"targetPath={res.target_path}]"
    )


def list_resources(resources: List[Resource], reason: str) -> None:
    logger.info(f"Build resources [{len(resources)}] - {reason}")
    for res in resources:
        logger.info(f"  Resource: {describe_resource(res)}")


def prune_entry(res: Resource, filename: str = EPISODE_FILENAME) -> Tuple[ReconcileAction, Resource]:
    """Apply rules 1-3 to one entry. Returns the action and the (possibly) updated copy."""
    names = episode_resource_names(filename)
    if any(name in res.includes for name in names):
        includes = [inc for inc in res.includes if inc not in names]
        updated = res.model_copy(update={"includes": includes})
        if not includes:
            return ReconcileAction.REMOVE_ENTRY, updated
        return ReconcileAction.REMOVED_INCLUDE, updated
    if not res.excludes:
        return ReconcileAction.ADDED_EXCLUDE, res.model_copy(update={"excludes": [names[0]]})
    return ReconcileAction.UNCHANGED, res


def merged_resource(output_path: Path) -> Resource:
    return Resource(
        directory=str(output_path.parent.resolve()),
        includes=[output_path.name],
        excludes=[],
        filtering=False,
        target_path=MERGED_TARGET_PATH,
    )


def reconcile_resources(resources: List[Resource], output_path: Path, verbose: bool = False,
                        filename: str = EPISODE_FILENAME) -> List[ReconcileAction]:
    """
    Rewrite the resource list in place. Returns the action taken per original entry.
    """
    if verbose:
        list_resources(resources, "Before modification")

    search_name = episode_resource_names(filename)[0]
    kept: List[Resource] = []
    actions: List[ReconcileAction] = []
    for res in resources:
        action, updated = prune_entry(res, filename)
        actions.append(action)
        if action is ReconcileAction.REMOVE_ENTRY:
            if verbose:
                logger.info(f"Removed '{search_name}' from: {describe_resource(updated)}")
                logger.info(f"Removed from project: {describe_resource(updated)}")
            continue
        if verbose:
            if action is ReconcileAction.REMOVED_INCLUDE:
                logger.info(f"Removed '{search_name}' from: {describe_resource(updated)}")
            elif action is ReconcileAction.ADDED_EXCLUDE:
                logger.info(f"Excluding '{search_name}' from: {describe_resource(updated)}")
            else:
                logger.info(f"  Unchanged Resource: {describe_resource(updated)}")
        kept.append(updated)

    kept.append(merged_resource(output_path))
    resources[:] = kept

    if verbose:
        list_resources(resources, "After modification")
    return actions
