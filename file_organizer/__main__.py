#!/usr/bin/env python3
"""
File Organizer - CLI Entry Point
================================

Usage:
    python -m file_organizer --source ~/Downloads
    python -m file_organizer --source ~/Downloads --target ~/Sorted --mode by-type --copy
    python -m file_organizer --source ~/Photos --mode by-date --dry-run
    python -m file_organizer --source . --pattern "*.jpg" --conflict skip --max-depth 1
"""

import argparse
import sys
from pathlib import Path

from tqdm import tqdm

from .config import ConflictStrategy, Mode, OrganizerConfig, Transfer
from .errors import ConfigurationError, InternalError, StructuralError
from .executor import FAILED, Organizer
from .utils import (
    console,
    format_outcome,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
    save_json,
)

EXIT_OK = 0
EXIT_INTERNAL = 1
EXIT_CONFIG = 2
EXIT_STRUCTURAL = 3
EXIT_REPORT = 4
EXIT_INTERRUPTED = 130


def non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError("max-depth must be >= 0")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-organizer",
        description="File Organizer - Sort files into folders by extension, date or type",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--source", type=Path, required=True,
                        help="Directory to organize")
    parser.add_argument("--target", type=Path, default=None,
                        help="Where organized folders are created (default: --source)")
    parser.add_argument("--mode", choices=[m.value for m in Mode], default=Mode.BY_EXTENSION.value,
                        help="Classification mode (default: by-extension)")

    transfer = parser.add_mutually_exclusive_group()
    transfer.add_argument("--move", dest="transfer", action="store_const", const=Transfer.MOVE.value,
                          help="Move files (default)")
    transfer.add_argument("--copy", dest="transfer", action="store_const", const=Transfer.COPY.value,
                          help="Copy files, leaving the originals in place")
    parser.set_defaults(transfer=Transfer.MOVE.value)

    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would happen without modifying files")
    parser.add_argument("--include-hidden", action="store_true",
                        help="Also organize hidden files and enter hidden folders")
    parser.add_argument("--recursive", action=argparse.BooleanOptionalAction, default=True,
                        help="Descend into subdirectories (default: on)")
    parser.add_argument("--max-depth", type=non_negative_int, default=None, metavar="N",
                        help="Deepest subdirectory level to enter (default: unlimited)")
    parser.add_argument("--conflict", choices=[c.value for c in ConflictStrategy],
                        default=ConflictStrategy.RENAME.value,
                        help="What to do when the destination exists (default: rename)")
    parser.add_argument("--pattern", type=str, default=None, metavar="GLOB",
                        help="Only organize files whose name matches, e.g. '*.jpg'")
    parser.add_argument("--prune-empty", action="store_true",
                        help="After moving, remove folders left empty under the source")
    parser.add_argument("--report-out", type=Path, default=None,
                        help="Write a JSON report of the run to this file")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar")
    return parser


def print_outcome(outcome) -> None:
    line = format_outcome(outcome)
    if line is None:
        return
    if outcome.status == FAILED:
        tqdm.write(line, file=sys.stderr)
    else:
        tqdm.write(line)


def cmd_organize(args, parser: argparse.ArgumentParser) -> int:
    """Build the config, run the organizer and report."""
    try:
        config = OrganizerConfig.from_namespace(args)
    except ConfigurationError as e:
        print_error(str(e))
        parser.print_usage(sys.stderr)
        return EXIT_CONFIG

    mode = "DRY-RUN" if config.dry_run else "APPLY"
    print_header(f"FILE ORGANIZER [{mode}]", f"{config.source} -> {config.target}")

    try:
        report = Organizer(config).run(on_outcome=print_outcome, progress=args.progress)
    except StructuralError as e:
        print_error(str(e))
        return EXIT_STRUCTURAL

    print(report.summary())
    print_summary_table(report)

    if args.report_out:
        try:
            save_json(report.to_dict(), args.report_out)
        except OSError as e:
            print_error(f"Could not write report to {args.report_out}: {e.strerror or e}")
            return EXIT_REPORT

    if config.dry_run:
        print_warning("This was a DRY-RUN. No files were actually moved or copied.")
        console.print("       Run without --dry-run to apply changes.")
    elif report.failures:
        print_warning(f"{len(report.failures)} file(s) could not be processed")
    else:
        print_success("Operation Complete!")

    return EXIT_OK


# =============================================================================
# Main
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return cmd_organize(args, parser)
    except KeyboardInterrupt:
        print("\n[ABORT] Operation cancelled by user")
        return EXIT_INTERRUPTED
    except Exception as e:
        error = InternalError(f"Unexpected failure: {e}")
        print_error(str(error))
        console.print_exception()
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
