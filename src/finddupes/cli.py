"""CLI argument parsing and run orchestration."""

from __future__ import annotations

from finddupes.config import load_config
from finddupes.config import merge_config_into_args
from finddupes.finder import run_pipeline
from finddupes.logging import configure_logging
from finddupes.models import CompareMode
from finddupes.report import display_lines
from finddupes.report import write_csv
from finddupes.scanner import check_roots
from finddupes.scanner import scan

import argparse
import logging
import pathlib
import sys


logger = logging.getLogger(__name__)

_EPILOG = """\
Comparison modes:
""" + "\n".join(f"  {m.value:<7} - {m.description}" for m in CompareMode) + """

Examples:
  finddupes -p /mnt/drive1 -p /mnt/drive2 -m nands -e duplicates.csv
  finddupes -p /home/user/Documents -m sha256 -d 5 -s
  finddupes -p /data -x /data/backup -x /data/.git -m sha256 -s
"""


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="finddupes",
        description=(
            "Identify duplicate files on the given paths by size and content hash, "
            "or by filename + size only (fast pre-check)."
        ),
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-p", "--path", dest="paths", action="append", type=pathlib.Path, default=None,
        metavar="PATH", help="Path to scan. Repeatable.",
    )
    parser.add_argument(
        "-m", "--mode", type=str.lower, default=None,
        choices=[m.value for m in CompareMode],
        help="Comparison mode (default: sha256)",
    )
    parser.add_argument(
        "-e", "--export", type=pathlib.Path, default=None, metavar="CSV",
        help="Export duplicate pairs to a CSV file",
    )
    parser.add_argument(
        "-x", "--exclude", action="append", type=pathlib.Path, default=None,
        metavar="PATH", help="Path to exclude. Repeatable.",
    )
    parser.add_argument(
        "-d", "--display", type=_positive_int, default=None, metavar="NUM",
        help="Max files to display per group (default: 10)",
    )
    parser.add_argument(
        "-s", "--show-progress", action="store_true", default=None,
        help="Show progress information",
    )
    parser.add_argument(
        "-w", "--workers", type=_positive_int, default=None, metavar="N",
        help="Number of parallel hashing workers (default: based on CPU count)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Check merged arguments before any scanning starts.

    Raises ValueError (or FileNotFoundError/NotADirectoryError for bad paths).
    """
    if not args.paths:
        raise ValueError("At least one path is required")
    args.mode = CompareMode.parse(args.mode)
    if not isinstance(args.display, int) or args.display < 1:
        raise ValueError(f"Invalid display limit: {args.display}")
    if args.workers is not None and (not isinstance(args.workers, int) or args.workers < 1):
        raise ValueError(f"Invalid worker count: {args.workers}")
    check_roots(args.paths)


def cmd_scan(args: argparse.Namespace) -> None:
    """Scan the given paths, report duplicate groups and optionally export them."""
    mode: CompareMode = args.mode
    logger.info(f"Scanning for duplicates in: {' '.join(str(p) for p in args.paths)}")
    if args.exclude:
        logger.info(f"Excluding: {' '.join(str(p) for p in args.exclude)}")
    logger.info(f"Comparison mode: {mode.value}")
    if mode.is_hash:
        logger.info(f"Using hash algorithm: {mode.value}")
        logger.info("This may take considerable time on large directories...")
    else:
        logger.info("Fast mode: matching by filename (case-insensitive) + size only")

    files = scan(args.paths, args.exclude)
    if not files:
        logger.info("No files found in the specified path(s).")
        return
    logger.info(f"Found {len(files)} files. Analyzing...")

    result = run_pipeline(files, mode, workers=args.workers, progress=args.show_progress)
    if result.skipped:
        logger.debug(f"{len(result.skipped)} file(s) could not be read and were skipped")
    if mode.is_hash:
        logger.info(f"Hashed {result.hashed} of {result.candidates} candidate files.")

    if not result.groups:
        if mode.is_hash and not result.candidates:
            logger.info("No files with matching sizes found. No duplicates possible.")
        elif mode.is_hash:
            logger.info("No duplicate files found (no matching content hashes).")
        else:
            logger.info("No files with identical name (case-insensitive) and size found.")
        return

    if mode.is_hash:
        logger.info(f"\nDuplicate file groups found - {len(result.groups)} groups:")
    else:
        logger.info(f"\nPotential duplicate groups (Name + Size match) - {len(result.groups)} groups:")
    for group in result.groups:
        logger.info("")
        for line in display_lines(group, args.display, mode):
            logger.info(line)

    if args.export is not None:
        try:
            rows = write_csv(args.export, result.groups, args.display)
        except OSError as e:
            logger.error(f"Could not write export file {args.export}: {e}")
            sys.exit(1)
        logger.info(f"\nResults exported to: {args.export} ({rows} rows)")

    logger.info("\nScan complete.")


def main() -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()
    merge_config_into_args(args, load_config())
    configure_logging(verbose=args.verbose, quiet=args.quiet, timestamps=args.show_progress)

    try:
        validate_args(args)
    except (ValueError, OSError) as e:
        parser.error(str(e))

    try:
        cmd_scan(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        sys.exit(130)
