#!/usr/bin/env python3
"""
File Ingest Tool - CLI Entry Point
==================================

Usage:
    python -m ingest_files
    python -m ingest_files --dry-run --depth 2
    python -m ingest_files --files-dir files --manifest index.json --report-out report.json
"""

import argparse
import sys
from pathlib import Path

from .config import (
    DEFAULT_FILES_DIR,
    DEFAULT_MANIFEST_PATH,
    DEFAULT_PATH_DEPTH,
    IngestConfig,
    default_path_depth,
    parse_depth,
)
from .errors import ConfigError, IngestError
from .manifest import ingest_directory
from .utils import console, print_header, print_error, print_warning, print_success, print_report


def _depth_arg(value: str) -> int:
    try:
        return parse_depth(value)
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="File Ingest Tool - Merge new files into the index.json manifest",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="Compute and report everything without writing the manifest")
    parser.add_argument("--depth", type=_depth_arg, default=None, metavar="N",
                        help=f"Number of filename segments used as folders (default: PATH_DEPTH, else {DEFAULT_PATH_DEPTH})")
    parser.add_argument("--files-dir", type=Path, default=DEFAULT_FILES_DIR,
                        help=f"Folder with the files to ingest (default: {DEFAULT_FILES_DIR})")
    parser.add_argument("--manifest", type=Path, default=DEFAULT_MANIFEST_PATH,
                        help=f"Manifest to update (default: {DEFAULT_MANIFEST_PATH})")
    parser.add_argument("--report-out", type=Path, default=None,
                        help="Also save the report as JSON to this file")
    parser.add_argument("--no-progress", action="store_true",
                        help="Never show the progress bar")
    return parser


def cmd_ingest(args: argparse.Namespace) -> int:
    """Handle a full ingest run."""
    config = IngestConfig(
        files_dir=args.files_dir,
        manifest_path=args.manifest,
        path_depth=args.depth,
        dry_run=args.dry_run,
        report_out=args.report_out,
        show_progress=not args.no_progress and sys.stderr.isatty(),
    )

    print_header("File Ingest", f"{config.files_dir} -> {config.manifest_path} (depth {config.path_depth})")

    try:
        _, report = ingest_directory(config)
    except IngestError as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\n[ABORT] Operation cancelled by user")
        return 130
    except Exception as e:
        print_error(str(e))
        return 1

    print_report(report, config.files_dir)

    if config.dry_run:
        print_warning(f"This was a DRY-RUN. {config.manifest_path} was not modified.")
        console.print("       Run without --dry-run to write the manifest.")
    else:
        print_success(f"{config.manifest_path} updated")

    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # PATH_DEPTH is only consulted when --depth is absent
    if args.depth is None:
        try:
            args.depth = default_path_depth()
        except ConfigError as e:
            print_error(str(e))
            return 1

    return cmd_ingest(args)


if __name__ == "__main__":
    sys.exit(main())
