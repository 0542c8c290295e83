#!/usr/bin/env python3
"""
FileSense - CLI Entry Point
===========================

Usage:
    python -m filesense select
    python -m filesense analyze ~/Downloads --json analysis.json
    python -m filesense organize ~/Downloads --log-out moves.json --dry-run
    python -m filesense organize --plan plan.json --log-out moves.json
    python -m filesense undo moves.json
"""

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .commands import select_folder
from .config import load_settings
from .errors import FileSenseError
from .executor import organize, undo
from .models import MoveRecord
from .scanner import analyze
from .utils import (
    console,
    load_json,
    print_analysis_table,
    print_error,
    print_header,
    print_success,
    print_warning,
    save_json,
    setup_logging,
)
from .validator import plan_from_analysis


def _resolve_folder(folder: Path | None) -> Path:
    if folder is not None:
        return folder
    return Path(select_folder())


# =============================================================================
# Subcommands
# =============================================================================

def cmd_select(args) -> int:
    """Select command - print the default folder."""
    console.print(select_folder())
    return 0


def cmd_analyze(args) -> int:
    """Analyze command - categorize the files of a folder."""
    folder = _resolve_folder(args.folder)
    with console.status(f"[bold green]Analyzing {folder}...[/bold green]"):
        analysis = analyze(folder)

    print_analysis_table(analysis)

    if args.json:
        save_json(analysis.to_dict(), args.json)
    return 0


def cmd_organize(args) -> int:
    """Organize command - move files into category folders."""
    writes_log = args.log_out and not args.dry_run
    if writes_log and args.log_out.exists() and not args.force:
        print_error(f"Move log {args.log_out} already exists; undo it first or pass --force")
        return 1

    if args.plan:
        try:
            plan = load_json(args.plan)
        except json.JSONDecodeError as e:
            print_error(f"Invalid JSON in {args.plan}: {e}")
            return 1
        if args.target_root and isinstance(plan, dict):
            plan["target_root"] = str(args.target_root)
        source = args.plan
    else:
        folder = _resolve_folder(args.folder)
        analysis = analyze(folder)
        plan = plan_from_analysis(analysis, args.target_root or folder)
        source = folder

    mode = "DRY-RUN" if args.dry_run else "APPLY"
    print_header("FileSense", f"Source: {source}\nMode: {mode}")

    report = organize(plan, dry_run=args.dry_run, progress=True)

    # Written even on partial failure so the moves that happened can be undone
    wrote_log = writes_log and report.moves
    if wrote_log:
        save_json([m.to_dict() for m in report.moves], args.log_out)

    if report.ok:
        print_success(report.message)
    else:
        print_error(report.message)

    if args.dry_run:
        print_warning("This was a DRY-RUN. No files were actually moved.")
        for move in report.moves[:10]:
            console.print(f"  [yellow]{move.source}[/yellow] -> [blue]{move.destination}[/blue]")
        if len(report.moves) > 10:
            console.print(f"  [italic]... and {len(report.moves) - 10} more[/italic]")
    elif wrote_log:
        console.print(f"Move log: {args.log_out}")

    return 0 if report.ok else 1


def cmd_undo(args) -> int:
    """Undo command - reverse a saved move log."""
    if not args.log.exists():
        print_error(f"Move log not found: {args.log}")
        return 1

    try:
        data = load_json(args.log)
    except json.JSONDecodeError as e:
        print_error(f"Invalid JSON in {args.log}: {e}")
        return 1
    if isinstance(data, dict):
        data = data.get("moves", [])
    if not isinstance(data, list):
        print_error(f"Invalid move log {args.log}: expected a list of moves")
        return 1

    moves = [MoveRecord.from_dict(m) for m in data]
    report = undo(moves, progress=True)

    if report.ok:
        print_success(report.message)
        return 0
    print_error(report.message)
    return 1


# =============================================================================
# Main
# =============================================================================

def main(argv=None) -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(
        prog="filesense",
        description="FileSense - Privacy-first file organization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=settings.log_level,
                        help=f"Logging level (default: {settings.log_level})")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- SELECT command ---
    select_parser = subparsers.add_parser("select", help="Print the default folder")
    select_parser.set_defaults(func=cmd_select)

    # --- ANALYZE command ---
    analyze_parser = subparsers.add_parser("analyze", help="Categorize the files of a folder")
    analyze_parser.add_argument("folder", type=Path, nargs="?",
                                help="Folder to analyze (default: configured folder)")
    analyze_parser.add_argument("--json", type=Path, metavar="OUT",
                                help="Also write the analysis as JSON")
    analyze_parser.set_defaults(func=cmd_analyze)

    # --- ORGANIZE command ---
    organize_parser = subparsers.add_parser("organize", help="Move files into category folders")
    organize_parser.add_argument("folder", type=Path, nargs="?",
                                 help="Folder to organize (default: configured folder)")
    organize_parser.add_argument("--plan", type=Path,
                                 help="Use an edited plan JSON instead of scanning (no FOLDER)")
    organize_parser.add_argument("--target-root", type=Path,
                                 help="Where category folders are created (default: the folder)")
    organize_parser.add_argument("--log-out", type=Path, default=Path("moves.json"),
                                 help="Move log output file (default: moves.json)")
    organize_parser.add_argument("--force", action="store_true",
                                 help="Overwrite an existing move log")
    organize_parser.add_argument("--dry-run", action="store_true",
                                 help="Simulate changes without modifying files")
    organize_parser.set_defaults(func=cmd_organize)

    # --- UNDO command ---
    undo_parser = subparsers.add_parser("undo", help="Reverse a previous organize run")
    undo_parser.add_argument("log", type=Path, help="Move log written by organize")
    undo_parser.set_defaults(func=cmd_undo)

    args = parser.parse_args(argv)
    if args.command == "organize" and args.plan and args.folder:
        organize_parser.error("FOLDER and --plan can't be used together")
    setup_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print_error("Operation cancelled by user")
        return 130
    except FileSenseError as e:
        print_error(f"{e.kind}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
