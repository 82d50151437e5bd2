"""Command-line interface for the ``shotsorter`` package.

A thin adapter from parsed arguments to :mod:`shotsorter.organize` and
:mod:`shotsorter.utils`. The command functions take the argparse
Namespace so tests can call them directly without spawning subprocesses.
"""
import argparse
import glob
from pathlib import Path
from importlib.metadata import version
from typing import List

from . import organize as organize_mod
from . import utils

__version__ = version("shotsorter")


def _started_at(value: str):
    dt = utils.parse_date(value)
    if dt is None:
        raise argparse.ArgumentTypeError(f"cannot parse date: {value!r}")
    return dt


def expand_inputs(items: List[str]) -> List[Path]:
    """Turn CLI arguments into an ordered file list.

    Arguments without wildcards are kept as given, even when the file is
    missing, so the batch records them as errors. Wildcard arguments are
    expanded recursively and their matches added sorted.
    """
    files: List[Path] = []
    for item in items:
        p = Path(item)
        if p.is_file() or not glob.has_magic(item):
            files.append(p)
            continue
        for m in sorted(glob.glob(item, recursive=True)):
            if Path(m).is_file():
                files.append(Path(m))
    return files


def cmd_organize(args):
    """Handle the `organize` subcommand."""
    files = expand_inputs(args.files)
    if not files:
        print(f"No files match: {' '.join(args.files)}")
        return

    result = organize_mod.process_batch(
        files,
        started_at=args.started_at,
        dry_run=args.dry_run,
    )
    for e in result.entries:
        if e.destination is not None and e.outcome != organize_mod.ERROR:
            print(f"{e.outcome.upper()} {e.source} -> {e.destination}")
        else:
            print(f"{e.outcome.upper()} {e.source} ({e.message})")
    if result.log_path:
        print(f"Log written to {result.log_path}")
    print(result.summary())
    if not result.ok:
        raise SystemExit(1)


def cmd_parse(args):
    """Handle the `parse` subcommand: show how names would be read."""
    for name in args.names:
        try:
            meta = utils.parse_filename(Path(name).name)
        except utils.InvalidFormat as e:
            print(f"{name}: invalid ({e.reason})")
            continue
        print(
            f"{name}: date={meta.capture_date} timestamp={meta.timestamp} "
            f"character={meta.character_name} event={meta.event_type}"
        )


def main():
    parser = argparse.ArgumentParser(
        prog="shotsorter",
        description="Sort screenshots into character/event/date folders",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=__version__
    )
    sub = parser.add_subparsers(dest="cmd")

    ###########################################
    # -------- subcommand: organize -------- #
    ###########################################
    p_org = sub.add_parser("organize", help="Move screenshots into folders named after their filename metadata.")
    p_org.add_argument("files", nargs="+", help="Files or glob patterns (e.g. '~/Pictures/*.png')")
    p_org.add_argument("--dry-run", action="store_true", help="Do not move files or write the log; only print actions")
    p_org.add_argument(
        "--started-at",
        type=_started_at,
        default=None,
        help=(
            "Batch start time used to name the log file (default: now). "
            "Accepts e.g. '2025-06-07 17:02:10' or '2025-06-07_170210'."
        ),
    )
    p_org.set_defaults(func=cmd_organize)

    ###########################################
    # -------- subcommand: parse -------- #
    ###########################################
    p_parse = sub.add_parser("parse", help="Print the metadata read from screenshot file names.")
    p_parse.add_argument("names", nargs="+", help="File names to parse")
    p_parse.set_defaults(func=cmd_parse)

    ###########################################

    args = parser.parse_args()
    if not hasattr(args, "func"):
        parser.print_help()
        return
    args.func(args)
