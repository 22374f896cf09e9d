#!/usr/bin/env python3
"""
episodemerge – merge the per-module JAXB episode files of a build into one.

Stands in for the build plugin: options come from an optional YAML config
file and the command line, and the build's resource list is read from and
written back to a YAML file.

Usage:
  episodemerge --build-dir target --resources resources.yml
  episodemerge --config merge.yml -v
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..core.errors import EpisodeMergeError
from ..core.merge import MergeStrategy
from ..service.config import build_request, load_config, load_resources, save_resources
from ..service.runner import run_merge

logger = logging.getLogger("episodemerge")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="episodemerge", description="Merge JAXB episode files into one.")
    parser.add_argument("--config", type=Path, help="YAML file with merge options")
    parser.add_argument("--project-dir", type=Path, help="Directory relative paths are resolved against")
    parser.add_argument("--build-dir", type=Path, help="Build output directory (default scan root)")
    parser.add_argument("--base-dir", type=Path, help="Directory to scan for episode files")
    parser.add_argument("--episode-file", action="append", dest="episode_files", metavar="PATTERN",
                        help="Glob of episode files to merge, relative to the base directory (repeatable)")
    parser.add_argument("--exclude", action="append", dest="exclude_files", metavar="PATTERN",
                        help="Glob of files to skip (repeatable)")
    parser.add_argument("--legacy-namespace", action=argparse.BooleanOptionalAction, default=None,
                        help="Write the JAXB 2.x (java.sun.com) namespace instead of the Jakarta one")
    parser.add_argument("--strategy", choices=[s.value for s in MergeStrategy], help="Merge strategy")
    parser.add_argument("--lenient-layout", action=argparse.BooleanOptionalAction, default=None,
                        help="Line-splice: blindly drop the first two and the last line of each file")
    parser.add_argument("--resources", type=Path, help="YAML list of build resources to rewire in place")
    parser.add_argument("-v", "--verbose", action=argparse.BooleanOptionalAction, default=None,
                        help="Describe what is being done")
    return parser


def _negate(flag: Optional[bool]) -> Optional[bool]:
    # Unset flags leave the config file value alone
    return None if flag is None else not flag


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, stream=sys.stderr, format="[%(levelname)s] %(message)s")

    try:
        config = load_config(args.config) if args.config else {}
        request = build_request(
            config,
            project_directory=args.project_dir,
            build_directory=args.build_dir,
            base_directory=args.base_dir,
            episode_files=args.episode_files,
            exclude_files=args.exclude_files,
            use_jakarta_namespace=_negate(args.legacy_namespace),
            strategy=args.strategy,
            strict_layout=_negate(args.lenient_layout),
            verbose=args.verbose,
        )
        resources = load_resources(args.resources) if args.resources else None

        outcome = run_merge(request, resources)

        if outcome.merged and args.resources:
            save_resources(args.resources, resources)
    except EpisodeMergeError as e:
        logger.error(str(e))
        return 1

    if outcome.merged:
        logger.info(f"Merged {len(outcome.matches)} episode files into {outcome.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
