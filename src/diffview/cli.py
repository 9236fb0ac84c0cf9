"""Command line front end printing difftastic display files as JSON."""

import argparse
import json
import logging
import sys
from typing import List

from diffview.diff_session import DiffSession
from diffview.diffview_exceptions import DiffViewError
from diffview.diffview_serializer import display_files_to_dict
from diffview.diffview_settings import DiffViewSettings, SUPPORTED_VCS
from diffview.vcs_backend import DiffMode, DiffRequest


def build_request(args: argparse.Namespace) -> DiffRequest:
    """Build a diff request from parsed arguments."""
    if args.staged:
        return DiffRequest(DiffMode.STAGED)

    if args.unstaged or not args.range:
        return DiffRequest(DiffMode.UNSTAGED)

    return DiffRequest(DiffMode.RANGE, args.range)


def load_settings(args: argparse.Namespace) -> DiffViewSettings:
    """
    Load settings and apply command line overrides.

    Raises:
        DiffViewSettingsError: If the settings file or overrides are invalid
    """
    settings = DiffViewSettings.load(args.settings) if args.settings else DiffViewSettings.create_default()

    return DiffViewSettings(
        vcs=args.vcs if args.vcs else settings.vcs,
        difft_command=settings.difft_command,
        max_workers=args.workers if args.workers is not None else settings.max_workers,
        extra_environment=settings.extra_environment
    )


def parse_arguments(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="diffview",
        description="Render difftastic output as side-by-side display rows (JSON)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Changes in the last git commit
  python -m diffview HEAD

  # A git commit range, and changes since the merge base
  python -m diffview main..feature
  python -m diffview main...feature

  # Working tree changes
  python -m diffview --unstaged

  # jj revision
  python -m diffview @ --vcs jj
        """
    )

    parser.add_argument(
        'range',
        nargs='?',
        default='',
        help='Revision range (git) or revset (jj); omit for working tree changes'
    )

    parser.add_argument(
        '--vcs',
        choices=SUPPORTED_VCS,
        default=None,
        help='Version control system (default: from settings, else git)'
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--staged',
        action='store_true',
        help='Show staged changes'
    )

    mode.add_argument(
        '--unstaged',
        action='store_true',
        help='Show unstaged working tree changes'
    )

    parser.add_argument(
        '--settings',
        default=None,
        help='JSON settings file'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help='Number of files to process in parallel'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log external commands to stderr'
    )

    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        settings = load_settings(args)
        display_files = DiffSession(settings).run(build_request(args))

    except DiffViewError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    json.dump(display_files_to_dict(display_files), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0
