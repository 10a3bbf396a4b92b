"""
Command line interface for RepoCloner.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ..models import ClonerConfig
from ..infrastructure.error_handler import ClonerError
from .api import RepoCloner


EXIT_OK = 0
EXIT_PARTIAL_FAILURE = 1
EXIT_FATAL = 2
EXIT_INTERRUPTED = 130


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser(config: ClonerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repocloner",
        description="Clone all GitHub repositories to a specified directory.",
    )
    parser.add_argument(
        "-d", "--directory", type=Path, required=True,
        help="The target directory where repositories will be cloned.",
    )
    parser.add_argument(
        "-u", "--username", default=config.username, required=config.username is None,
        help="Your GitHub username (default: $GITHUB_USERNAME).",
    )
    parser.add_argument(
        "-t", "--token", default=config.token, required=config.token is None,
        help="Your GitHub personal access token (default: $GITHUB_TOKEN).",
    )
    parser.add_argument(
        "--source", action="store_true",
        help="Clone source (non-forked) repositories.",
    )
    parser.add_argument(
        "--forks", action="store_true",
        help="Clone forked repositories.",
    )
    parser.add_argument(
        "--shallow", action="store_true",
        help="Perform a shallow clone (clone only the latest commit).",
    )
    parser.add_argument(
        "-p", "--parallelism", type=positive_int, default=config.max_parallelism,
        help="Maximum number of parallel clone operations. "
             "Defaults to the number of logical processors (%(default)s).",
    )
    parser.add_argument(
        "--retries", type=positive_int, default=config.max_retries,
        help="Number of times to try cloning a repository (default: %(default)s).",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Show what would be cloned without cloning anything.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: Optional[List[str]] = None, config: Optional[ClonerConfig] = None) -> int:
    if config is None:
        try:
            config = ClonerConfig.from_env()
        except ClonerError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_FATAL

    args = build_parser(config).parse_args(argv)

    cloner = RepoCloner(args.username, args.token, config=config, verbose=args.verbose)

    try:
        summary = cloner.run(
            args.directory,
            include_source=args.source,
            include_forks=args.forks,
            shallow=args.shallow,
            max_parallelism=args.parallelism,
            max_retries=args.retries,
            dry_run=args.dry_run,
        )
    except ClonerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FATAL
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    if summary.dry_run or summary.is_successful:
        return EXIT_OK
    return EXIT_PARTIAL_FAILURE


__all__ = [
    "EXIT_OK",
    "EXIT_PARTIAL_FAILURE",
    "EXIT_FATAL",
    "EXIT_INTERRUPTED",
    "build_parser",
    "main",
]
