import logging
from typing import List, Optional

from ..core.errors import ConfigurationError
from ..core.locator import EPISODE_FILENAME, locate_episode_files
from ..core.merge import merge_episodes
from .models import MergeOutcome, MergeRequest, Resource
from .resources import reconcile_resources

logger = logging.getLogger(__name__)


def run_merge(request: MergeRequest, resources: Optional[List[Resource]] = None) -> MergeOutcome:
    """
    Locate, merge, write, then rewire the resource list (if one is given).

    With one or no episode file found nothing is written and the resource
    list is left untouched.
    """
    base = request.resolved_base_directory()
    if base is None:
        raise ConfigurationError("No baseDirectory specified!")
    target = request.output_path()
    if target is None:
        raise ConfigurationError("No build directory specified!")

    matches = locate_episode_files(base, request.episode_files, request.exclude_files)
    if len(matches) <= 1:
        logger.warning(f"Found {len(matches)} episode files - nothing to merge")
        return MergeOutcome(matches=matches, merged=False, strategy=request.strategy)

    if request.verbose:
        logger.info(f"Using merge strategy '{request.strategy.value}'")
    merged = merge_episodes(
        matches,
        use_jakarta=request.use_jakarta_namespace,
        strategy=request.strategy,
        strict_layout=request.strict_layout,
        accepted_namespaces=request.accepted_namespaces,
        verbose=request.verbose,
    )

    if request.verbose:
        logger.info(f"Writing combined {EPISODE_FILENAME} to '{target.resolve()}'")
    merged.write_to(target)

    if resources is not None:
        reconcile_resources(resources, target, verbose=request.verbose)

    return MergeOutcome(matches=matches, merged=True, strategy=request.strategy, output_path=target)
