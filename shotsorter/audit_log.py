"""Plain-text audit log written once per batch."""
from datetime import datetime
from pathlib import Path
from typing import Iterable

LOG_SUFFIX = "_Metadata_Log.txt"
STAMP_FORMAT = "%Y-%m-%d_%H%M%S"


class LogWriteError(OSError):
    """Raised when the batch log cannot be written."""


def log_file_name(started_at: datetime) -> str:
    return started_at.strftime(STAMP_FORMAT) + LOG_SUFFIX


def format_entry(entry) -> str:
    """Render one log entry as a block of ``Key: value`` lines."""
    lines = [f"File: {entry.source_name}", f"Status: {entry.outcome}"]
    meta = entry.metadata
    if meta is not None:
        lines.append(f"Date: {meta.capture_date} (Year: {meta.year}, Month: {meta.month}, Day: {meta.day})")
        lines.append(f"Character: {meta.character_name}")
        lines.append(f"Event: {meta.event_type}")
    if entry.destination is not None:
        lines.append(f"Destination: {entry.destination}")
    if entry.message:
        lines.append(f"Error: {entry.message}")
    return "\n".join(lines)


def write_log(entries: Iterable, directory: Path, started_at: datetime) -> Path:
    """Append one block per entry to ``<stamp>_Metadata_Log.txt`` in ``directory``.

    Blocks keep the order of ``entries`` and are separated by a blank line.
    Returns the log path.

    Raises:
        LogWriteError: if the file cannot be opened or written.
    """
    path = Path(directory) / log_file_name(started_at)
    text = "\n\n".join(format_entry(e) for e in entries) + "\n"
    try:
        with path.open("a", encoding="utf-8", errors="surrogateescape") as f:
            f.write(text)
    except (OSError, UnicodeError) as e:
        raise LogWriteError(f"could not write {path}: {e}") from e
    return path
