"""Supabase repository for time entries."""

import logging
from dataclasses import dataclass

from supabase import Client

from time_logger.domain.entries import (
    EntryFields,
    EntryNotFoundError,
    TimeEntry,
    is_calendar_date,
    is_clock_time,
    parse_category,
)
from time_logger.services.entries import EntryRepository

_logger = logging.getLogger(__name__)

_COLUMNS = "id, date, start_time, end_time, category, sub_category, description"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for owner-scoped time entries."""

    client: Client
    table_name: str = "time_logs"

    def list_entries(self, owner_id: str) -> list[TimeEntry]:
        """Return every entry for the owner."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("user_id", owner_id)
            .execute()
        )
        return _parse_rows(response.data or [])

    def list_entries_by_date(self, owner_id: str, date: str) -> list[TimeEntry]:
        """Return the owner's entries for one date."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("user_id", owner_id)
            .eq("date", date)
            .execute()
        )
        return _parse_rows(response.data or [])

    def create_entry(self, owner_id: str, fields: EntryFields) -> TimeEntry:
        """Insert an entry row and return it with the store-assigned id."""
        response = (
            self.client.table(self.table_name)
            .insert({"user_id": owner_id, **_payload(fields)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create time entry")
        return TimeEntry.from_fields(str(response.data[0]["id"]), fields)

    def update_entry(
        self, owner_id: str, entry_id: str, fields: EntryFields
    ) -> TimeEntry:
        """Replace every field of an entry row."""
        response = (
            self.client.table(self.table_name)
            .update(_payload(fields))
            .eq("user_id", owner_id)
            .eq("id", entry_id)
            .execute()
        )
        if not response.data:
            raise EntryNotFoundError(entry_id)
        return TimeEntry.from_fields(entry_id, fields)

    def delete_entry(self, owner_id: str, entry_id: str) -> None:
        """Delete one entry row."""
        response = (
            self.client.table(self.table_name)
            .delete()
            .eq("user_id", owner_id)
            .eq("id", entry_id)
            .execute()
        )
        if not response.data:
            raise EntryNotFoundError(entry_id)

    def delete_all_entries(self, owner_id: str) -> int:
        """Delete every row the owner has."""
        response = (
            self.client.table(self.table_name)
            .delete()
            .eq("user_id", owner_id)
            .execute()
        )
        return len(response.data or [])


def _payload(fields: EntryFields) -> dict[str, object]:
    return {
        "date": fields.date,
        "start_time": fields.start_time,
        "end_time": fields.end_time,
        "category": str(fields.category),
        "sub_category": fields.sub_category,
        "description": fields.description,
    }


def _parse_rows(rows: list[dict[str, object]]) -> list[TimeEntry]:
    entries = []
    for row in rows:
        category = parse_category(str(row.get("category") or ""))
        if category is None:
            _logger.warning(
                "Skipping entry with unknown category: id=%s category=%s",
                row.get("id"),
                row.get("category"),
            )
            continue
        date = str(row.get("date") or "")
        start_time = _clock(row.get("start_time"))
        end_time = _clock(row.get("end_time"))
        if not (
            is_calendar_date(date)
            and is_clock_time(start_time)
            and is_clock_time(end_time)
        ):
            _logger.warning(
                "Skipping entry with malformed date or times: id=%s date=%s "
                "start=%s end=%s",
                row.get("id"),
                row.get("date"),
                row.get("start_time"),
                row.get("end_time"),
            )
            continue
        entries.append(
            TimeEntry(
                id=str(row["id"]),
                date=date,
                start_time=start_time,
                end_time=end_time,
                category=category,
                sub_category=str(row.get("sub_category") or ""),
                description=str(row.get("description") or ""),
            )
        )
    return entries


def _clock(value: object) -> str:
    # Postgres time columns come back as HH:MM:SS.
    text = str(value or "")
    if len(text) == len("HH:MM:SS") and text[5:6] == ":":
        return text[:5]
    return text
