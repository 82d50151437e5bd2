"""Organize screenshots into character/event/year/month/day folders.

Each file is parsed, planned, and moved on its own; a bad file is recorded
in the batch result and the batch moves on to the next one. The audit log
is written once at the end into the folder of the first input file.
"""
from dataclasses import dataclass, field
from datetime import datetime
import errno
import os
from pathlib import Path
import shutil
from typing import Iterable, List, Optional

from . import audit_log
from .utils import InvalidFormat, ScreenshotMetadata, parse_filename

MOVED = "moved"
SKIPPED = "skipped"
ERROR = "error"
PLANNED = "planned"


@dataclass(frozen=True)
class PathPlan:
    directories: List[Path]
    destination: Path


@dataclass(frozen=True)
class LogEntry:
    source: Path
    outcome: str
    metadata: Optional[ScreenshotMetadata] = None
    destination: Optional[Path] = None
    message: str = ""

    @property
    def source_name(self) -> str:
        return self.source.name


@dataclass
class BatchResult:
    started_at: datetime
    entries: List[LogEntry] = field(default_factory=list)
    log_path: Optional[Path] = None
    log_error: Optional[str] = None

    def _count(self, outcome: str) -> int:
        return sum(1 for e in self.entries if e.outcome == outcome)

    @property
    def moved(self) -> int:
        return self._count(MOVED)

    @property
    def skipped(self) -> int:
        return self._count(SKIPPED)

    @property
    def errored(self) -> int:
        return self._count(ERROR)

    @property
    def planned(self) -> int:
        return self._count(PLANNED)

    @property
    def ok(self) -> bool:
        return self.errored == 0 and self.log_error is None

    def summary(self) -> str:
        done = f"Planned {self.planned}" if self.planned else f"Moved {self.moved}"
        text = f"{done}, skipped {self.skipped}, failed {self.errored} of {len(self.entries)} file(s)"
        if self.log_error:
            text += f" (log not written: {self.log_error})"
        return text


def plan_paths(meta: ScreenshotMetadata, parent: Path) -> PathPlan:
    """Return the folders to create for ``meta`` under ``parent`` and the final path.

    Character and event names are used verbatim as folder names.
    """
    character_dir = Path(parent) / meta.character_name
    event_dir = character_dir / meta.event_type
    year_dir = event_dir / meta.year
    month_dir = year_dir / meta.month
    day_dir = month_dir / meta.day
    directories = [character_dir, event_dir, year_dir, month_dir, day_dir]
    return PathPlan(directories=directories, destination=day_dir / meta.file_name)


def ensure_directory(path: Path) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def move_file(src: Path, dst: Path) -> Path:
    """Move ``src`` to ``dst``, replacing any file already at ``dst``.

    Raises:
        FileNotFoundError: ``src`` is not an existing file.
        IsADirectoryError: ``dst`` is a directory.
        OSError: the move itself failed.
    """
    src = Path(src)
    dst = Path(dst)
    if not src.is_file():
        raise FileNotFoundError(errno.ENOENT, "source file not found", str(src))
    if dst.is_dir():
        raise IsADirectoryError(errno.EISDIR, "destination is a directory", str(dst))
    try:
        os.replace(src, dst)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        # cross-device: copy then delete, copy2 overwrites dst
        shutil.move(str(src), str(dst))
    return dst


def _process_file(path: Path, dry_run: bool) -> LogEntry:
    try:
        meta = parse_filename(path.name)
    except InvalidFormat as e:
        return LogEntry(source=path, outcome=SKIPPED, message=e.reason)

    plan = None
    try:
        plan = plan_paths(meta, path.parent)
        if dry_run:
            print(f"DRY RUN: would move {path} -> {plan.destination}")
            return LogEntry(source=path, outcome=PLANNED, metadata=meta, destination=plan.destination)
        for d in plan.directories:
            ensure_directory(d)
        move_file(path, plan.destination)
    except (OSError, ValueError) as e:
        destination = plan.destination if plan else None
        return LogEntry(source=path, outcome=ERROR, metadata=meta, destination=destination, message=str(e))
    return LogEntry(source=path, outcome=MOVED, metadata=meta, destination=plan.destination)


def process_batch(
    files: Iterable,
    started_at: Optional[datetime] = None,
    dry_run: bool = False,
) -> BatchResult:
    """Move every file in ``files`` into its metadata folder tree.

    Args:
        files: Ordered file paths (``str`` or ``Path``).
        started_at: Batch start time used to name the log file. Defaults to now.
        dry_run: If True, only print planned moves; nothing is created,
            moved, or logged.

    Returns:
        A :class:`BatchResult` with one entry per input file, in input order.
    """
    paths = [Path(f) for f in files]
    result = BatchResult(started_at=started_at or datetime.now())
    for path in paths:
        result.entries.append(_process_file(path, dry_run))

    if paths and not dry_run:
        try:
            result.log_path = audit_log.write_log(result.entries, paths[0].parent, result.started_at)
        except audit_log.LogWriteError as e:
            result.log_error = str(e)
    return result
