"""Domain models for logged time entries."""

import re
from dataclasses import dataclass
from datetime import date as calendar_date
from enum import StrEnum

_CLOCK_RE = re.compile(r"([0-9]{2}):([0-9]{2})")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

MAX_HOUR = 23
MAX_MINUTE = 59


class Category(StrEnum):
    """Closed set of entry categories."""

    SELF = "self"
    ROUTINE = "routine"
    FAITH = "faith"
    WORK = "work"
    FAMILY = "family"


def parse_category(raw: str | None) -> Category | None:
    """Return the category named by ``raw`` or None when it is not one."""
    if raw is None:
        return None
    try:
        return Category(raw.strip().lower())
    except ValueError:
        return None


class InvalidEntryError(ValueError):
    """Raised when an entry payload is incomplete or malformed."""


class EntryNotFoundError(LookupError):
    """Raised when an entry id does not exist for the owner."""


@dataclass(frozen=True)
class EntryFields:
    """Full set of writable entry fields, used for create and replace."""

    date: str
    start_time: str
    end_time: str
    category: Category
    sub_category: str = ""
    description: str = ""


@dataclass(frozen=True)
class TimeEntry:
    """A logged time interval as stored in the record store."""

    id: str
    date: str
    start_time: str
    end_time: str
    category: Category
    sub_category: str = ""
    description: str = ""

    @classmethod
    def from_fields(cls, entry_id: str, fields: EntryFields) -> "TimeEntry":
        """Build an entry from its id and writable fields."""
        return cls(
            id=entry_id,
            date=fields.date,
            start_time=fields.start_time,
            end_time=fields.end_time,
            category=fields.category,
            sub_category=fields.sub_category,
            description=fields.description,
        )


@dataclass(frozen=True)
class ParsedEntry:
    """Best-effort fields recovered from a transcript.

    Every field is independently optional: None means the transcript did not
    mention it (or mentioned something unusable), never that it is invalid.
    """

    start_time: str | None = None
    end_time: str | None = None
    category: Category | None = None
    sub_category: str | None = None
    description: str | None = None

    def present_fields(self) -> dict[str, str]:
        """Return only the fields that were recognised."""
        values = {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "category": self.category,
            "sub_category": self.sub_category,
            "description": self.description,
        }
        return {key: str(value) for key, value in values.items() if value is not None}

    def is_empty(self) -> bool:
        """Return True when nothing was recognised."""
        return not self.present_fields()


def is_clock_time(value: str) -> bool:
    """Return True for a zero-padded 24-hour ``HH:MM`` string."""
    match = _CLOCK_RE.fullmatch(value)
    if not match:
        return False
    return int(match.group(1)) <= MAX_HOUR and int(match.group(2)) <= MAX_MINUTE


def is_calendar_date(value: str) -> bool:
    """Return True for a ``YYYY-MM-DD`` string naming a real day."""
    if not _DATE_RE.fullmatch(value):
        return False
    year, month, day = (int(part) for part in value.split("-"))
    try:
        calendar_date(year, month, day)
    except ValueError:
        return False
    return True


def clock_minutes(value: str) -> int:
    """Return minutes since midnight for an ``HH:MM`` string."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def calculate_duration(start_time: str, end_time: str) -> int:
    """Return ``end_time - start_time`` in minutes.

    The subtraction is literal: an end before the start yields a negative
    duration and nothing wraps across midnight.
    """
    return clock_minutes(end_time) - clock_minutes(start_time)
