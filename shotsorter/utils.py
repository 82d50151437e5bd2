"""Helpers for parsing screenshot filenames and user-supplied dates.

Screenshot names follow a single strict pattern::

    YYYY-MM-DD_<timestamp>_<characterName>_<eventType>.<ext>

optionally followed by a numeric token after the event label
(``..._Hotkey_2.png``). :func:`parse_filename` turns such a name into a
:class:`ScreenshotMetadata` record or raises :class:`InvalidFormat`.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
import re
from typing import Optional

from dateutil import parser as dparser

SEPARATOR = "_"
DATE_LENGTH = 10

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?", re.ASCII)

EXPLICIT_FORMATS = [
    "%Y-%m-%d_%H%M%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y:%m:%d %H:%M:%S",
]


class InvalidFormat(ValueError):
    """Raised when a filename does not follow the screenshot naming pattern."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


@dataclass(frozen=True)
class ScreenshotMetadata:
    file_name: str
    capture_date: str
    timestamp: str
    character_name: str
    event_type: str
    suffix: Optional[str] = None

    @property
    def year(self) -> str:
        return self.capture_date[0:4]

    @property
    def month(self) -> str:
        return self.capture_date[5:7]

    @property
    def day(self) -> str:
        return self.capture_date[8:10]

    def stem(self) -> str:
        """Rebuild the filename stem this record was parsed from."""
        parts = [self.capture_date, self.timestamp, self.character_name, self.event_type]
        if self.suffix is not None:
            parts.append(self.suffix)
        return SEPARATOR.join(parts)


def _is_number(s: str) -> bool:
    return bool(_NUMBER_RE.fullmatch(s))


def parse_stem(stem: str, file_name: Optional[str] = None) -> ScreenshotMetadata:
    """Parse a filename stem (extension already removed).

    The event label is the segment after the last separator, unless that
    segment is numeric: then it is treated as a trailing suffix and the
    event label is the segment before it. An event label made only of
    digits is therefore read as a suffix; names like that are misparsed.

    Raises:
        InvalidFormat: when the stem does not start with a ``20xx`` date
            segment followed by the timestamp, character and event segments.
    """
    name = file_name if file_name is not None else stem
    if not stem.startswith("20"):
        raise InvalidFormat(name, "does not start with a 20xx date")

    last = stem.rfind(SEPARATOR)
    if last == -1:
        raise InvalidFormat(name, "no underscore found for event")

    suffix = None
    tail = stem[last + 1:]
    if _is_number(tail):
        suffix = tail
        event_sep = stem.rfind(SEPARATOR, 0, last)
        if event_sep == -1:
            raise InvalidFormat(name, "no underscore found for event")
        event_type = stem[event_sep + 1:last]
    else:
        event_sep = last
        event_type = tail

    first = stem.find(SEPARATOR)
    if first != DATE_LENGTH:
        raise InvalidFormat(name, "date segment must be exactly YYYY-MM-DD")
    second = stem.find(SEPARATOR, first + 1)
    if second == -1 or second >= event_sep:
        raise InvalidFormat(name, "missing timestamp or character segment")
    if not event_type:
        raise InvalidFormat(name, "empty event segment")

    return ScreenshotMetadata(
        file_name=file_name if file_name is not None else stem,
        capture_date=stem[:DATE_LENGTH],
        timestamp=stem[first + 1:second],
        character_name=stem[second + 1:event_sep],
        event_type=event_type,
        suffix=suffix,
    )


def parse_filename(name: str) -> ScreenshotMetadata:
    """Parse a file name (with extension) into :class:`ScreenshotMetadata`."""
    return parse_stem(Path(name).stem, file_name=name)


def parse_date(s: str) -> datetime | None:
    """Parse a user-supplied date/time string.

    Tries a few explicit formats first (including the log file stamp
    ``YYYY-MM-DD_HHMMSS``), then falls back to ``dateutil.parser``.
    Returns ``None`` when nothing matches.
    """
    if not s or not isinstance(s, str):
        return None
    s = s.strip()

    for fmt in EXPLICIT_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            pass

    try:
        return dparser.parse(s)
    except (ValueError, OverflowError):
        return None
