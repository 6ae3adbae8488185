# src/main.py
"""CLI entry point: check, compare, search commands.

Usage:
    plagscan check <base_dir> --project-id ID --promotion-id ID [options]
    plagscan compare <dir_a> <dir_b> [--details]
    plagscan search <file> <pattern>
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from plagscan.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        _setup_logging(args.verbose)
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="plagscan",
        description=f"plagscan v{__version__}: source-code plagiarism detection",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- check ---
    p_check = subparsers.add_parser(
        "check", help="Check every submission under a base directory",
    )
    p_check.add_argument("base_dir", type=Path, help="Directory of extracted submissions")
    p_check.add_argument("--project-id", required=True, help="Project identifier")
    p_check.add_argument("--promotion-id", required=True, help="Promotion identifier")
    p_check.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write the JSON response to this file (default: stdout)",
    )
    p_check.add_argument(
        "--details", action="store_true",
        help="Include file-level comparisons in every match",
    )
    p_check.set_defaults(func=_cmd_check)

    # --- compare ---
    p_compare = subparsers.add_parser(
        "compare", help="Compare two submission directories",
    )
    p_compare.add_argument("dir_a", type=Path, help="First submission")
    p_compare.add_argument("dir_b", type=Path, help="Second submission")
    p_compare.add_argument(
        "--details", action="store_true",
        help="Print file-level comparisons",
    )
    p_compare.set_defaults(func=_cmd_compare)

    # --- search ---
    p_search = subparsers.add_parser(
        "search", help="Find exact occurrences of a fragment in a file",
    )
    p_search.add_argument("file", type=Path, help="File to search")
    p_search.add_argument("pattern", help="Fragment to look for")
    p_search.set_defaults(func=_cmd_search)

    return parser


async def _cmd_check(args: argparse.Namespace) -> int:
    """Execute a full plagiarism check."""
    from plagscan.api.facade import check_projects
    from plagscan.api.models import ConfigOverrides, PlagiarismCheckRequest

    base_dir: Path = args.base_dir
    if not base_dir.is_dir():
        logger.error("Not a directory: %s", base_dir)
        return 1

    request = PlagiarismCheckRequest(
        project_id=args.project_id,
        promotion_id=args.promotion_id,
        config_overrides=ConfigOverrides(include_file_details=True) if args.details else None,
    )
    response = await check_projects(request, base_dir)
    payload = response.model_dump_json(by_alias=True, indent=2)

    if args.output is None:
        print(payload)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload, encoding="utf-8")
        logger.info("Report written to %s", args.output)
    return 0


async def _cmd_compare(args: argparse.Namespace) -> int:
    """Compare two submissions and print a summary."""
    from plagscan.comparison.orchestrator import compare_normalized_projects
    from plagscan.config.settings import Settings
    from plagscan.project.processor import process_project_folder

    for directory in (args.dir_a, args.dir_b):
        if not directory.is_dir():
            logger.error("Not a directory: %s", directory)
            return 1

    project_a = await asyncio.to_thread(process_project_folder, args.dir_a, args.dir_a.name)
    project_b = await asyncio.to_thread(process_project_folder, args.dir_b, args.dir_b.name)
    report = compare_normalized_projects(project_a, project_b, Settings())

    print(f"\nComparison {report.project1_id} <-> {report.project2_id}:")
    if report.whole_project_combined_score is not None:
        print(f"  Whole project (MOSS):       {report.whole_project_moss_result.similarity_score:.4f}")
        print(f"  Whole project (byte-level): {report.whole_project_rabin_karp_result.similarity_score:.4f}")
        print(f"  Whole project (combined):   {report.whole_project_combined_score:.4f}")
    else:
        print("  Whole project:              n/a")
    print(f"  File matches:               {len(report.file_to_file_comparisons)}")

    if args.details:
        for fc in report.file_to_file_comparisons:
            print(f"    {fc.file1_path} -> {fc.file2_path}: {fc.combined_score:.4f}")
    return 0


async def _cmd_search(args: argparse.Namespace) -> int:
    """Print every byte offset where the pattern occurs."""
    from plagscan.search.rabin_karp import rabin_karp_search

    file_path: Path = args.file
    if not file_path.is_file():
        logger.error("File not found: %s", file_path)
        return 1

    offsets = rabin_karp_search(file_path.read_bytes(), args.pattern)
    print(json.dumps({"file": str(file_path), "pattern": args.pattern, "offsets": offsets}))
    return 0


def _setup_logging(verbose: bool) -> None:
    """Configure logging from LOG_* settings; --verbose forces DEBUG."""
    from plagscan.config.settings import Settings
    from plagscan.logging.logger import setup_logging_from_settings

    setup_logging_from_settings(Settings(), level="DEBUG" if verbose else None)


if __name__ == "__main__":
    sys.exit(main())
