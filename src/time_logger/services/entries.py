"""Time entry management."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from time_logger.domain.entries import (
    EntryFields,
    InvalidEntryError,
    TimeEntry,
    calculate_duration,
    is_calendar_date,
    is_clock_time,
    parse_category,
)

_logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Owner-scoped record store for time entries."""

    def list_entries(self, owner_id: str) -> list[TimeEntry]:
        """Return every entry for the owner across all dates."""

    def list_entries_by_date(self, owner_id: str, date: str) -> list[TimeEntry]:
        """Return the owner's entries for a single date."""

    def create_entry(self, owner_id: str, fields: EntryFields) -> TimeEntry:
        """Create an entry and return it with its assigned id."""

    def update_entry(
        self, owner_id: str, entry_id: str, fields: EntryFields
    ) -> TimeEntry:
        """Replace all fields of an existing entry."""

    def delete_entry(self, owner_id: str, entry_id: str) -> None:
        """Delete a single entry."""

    def delete_all_entries(self, owner_id: str) -> int:
        """Delete every entry for the owner and return how many were removed."""


def validate_fields(  # noqa: PLR0913
    date: str,
    start_time: str | None,
    end_time: str | None,
    category: str | None,
    sub_category: str = "",
    description: str = "",
) -> EntryFields:
    """Validate a write payload and return normalised entry fields."""
    if not start_time or not end_time or not category:
        raise InvalidEntryError("start_time, end_time and category are required")
    if not is_clock_time(start_time):
        raise InvalidEntryError(f"Invalid start time: {start_time!r}")
    if not is_clock_time(end_time):
        raise InvalidEntryError(f"Invalid end time: {end_time!r}")
    if not is_calendar_date(date):
        raise InvalidEntryError(f"Invalid date: {date!r}")
    resolved_category = parse_category(category)
    if resolved_category is None:
        raise InvalidEntryError(f"Unknown category: {category!r}")
    return EntryFields(
        date=date,
        start_time=start_time,
        end_time=end_time,
        category=resolved_category,
        sub_category=sub_category.rstrip(),
        description=description.rstrip(),
    )


def day_total_minutes(entries: Iterable[TimeEntry]) -> int:
    """Return the summed literal duration of the entries."""
    return sum(
        calculate_duration(entry.start_time, entry.end_time) for entry in entries
    )


@dataclass
class EntryService:
    """Application service for creating, editing and removing entries."""

    repository: EntryRepository

    def log_entry(self, owner_id: str, fields: EntryFields) -> TimeEntry:
        """Persist a new entry."""
        entry = self.repository.create_entry(owner_id, fields)
        _logger.info("Logged entry: owner=%s entry=%s", owner_id, entry.id)
        return entry

    def update_entry(
        self, owner_id: str, entry_id: str, fields: EntryFields
    ) -> TimeEntry:
        """Replace an existing entry with new fields."""
        entry = self.repository.update_entry(owner_id, entry_id, fields)
        _logger.info("Updated entry: owner=%s entry=%s", owner_id, entry_id)
        return entry

    def delete_entry(self, owner_id: str, entry_id: str) -> None:
        """Delete a single entry."""
        self.repository.delete_entry(owner_id, entry_id)
        _logger.info("Deleted entry: owner=%s entry=%s", owner_id, entry_id)

    def clear_all(self, owner_id: str) -> int:
        """Delete every entry the owner has, across all dates."""
        deleted = self.repository.delete_all_entries(owner_id)
        _logger.info("Cleared entries: owner=%s deleted=%s", owner_id, deleted)
        return deleted

    def list_day(self, owner_id: str, date: str) -> list[TimeEntry]:
        """Return a day's entries ordered by start time."""
        entries = self.repository.list_entries_by_date(owner_id, date)
        return sorted(entries, key=lambda entry: entry.start_time)
