"""Tests for the Supabase entry repository."""

from dataclasses import dataclass, field

import pytest

from time_logger.adapters.supabase_entry_repository import SupabaseEntryRepository
from time_logger.domain.entries import Category, EntryFields, EntryNotFoundError
from time_logger.services.entries import validate_fields


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _row(entry_id: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": entry_id,
        "date": "2024-06-01",
        "start_time": "09:00",
        "end_time": "10:00",
        "category": "work",
        "sub_category": "Meeting",
        "description": None,
    }
    row.update(overrides)
    return row


def _fields() -> EntryFields:
    return validate_fields(
        date="2024-06-01",
        start_time="09:00",
        end_time="10:00",
        category="work",
        sub_category="Meeting",
    )


def test_create_entry_sends_owner_and_fields() -> None:
    client = FakeSupabaseClient()
    table = client.table("time_logs")
    table.queue("insert", [{"id": "abc"}])

    entry = SupabaseEntryRepository(client).create_entry("owner-1", _fields())

    assert entry.id == "abc"
    assert entry.category == Category.WORK
    assert table.last_payload == {
        "user_id": "owner-1",
        "date": "2024-06-01",
        "start_time": "09:00",
        "end_time": "10:00",
        "category": "work",
        "sub_category": "Meeting",
        "description": "",
    }


def test_create_entry_without_row_raises() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(RuntimeError):
        SupabaseEntryRepository(client).create_entry("owner-1", _fields())


def test_list_entries_parses_rows_and_skips_unknown_categories() -> None:
    client = FakeSupabaseClient()
    table = client.table("time_logs")
    table.queue("select", [_row("a"), _row("b", category="sports")])

    entries = SupabaseEntryRepository(client).list_entries("owner-1")

    assert [entry.id for entry in entries] == ["a"]
    assert entries[0].description == ""
    assert table.last_filters == [("user_id", "owner-1")]


def test_list_entries_trims_seconds_from_store_times() -> None:
    client = FakeSupabaseClient()
    client.table("time_logs").queue(
        "select", [_row("a", start_time="09:00:00", end_time="10:30:00")]
    )

    entries = SupabaseEntryRepository(client).list_entries("owner-1")

    assert (entries[0].start_time, entries[0].end_time) == ("09:00", "10:30")


def test_list_entries_skips_rows_with_malformed_dates_or_times() -> None:
    client = FakeSupabaseClient()
    client.table("time_logs").queue(
        "select",
        [
            _row("a"),
            _row("b", start_time=None),
            _row("c", end_time="25:00"),
            _row("d", date="2024-6-1"),
            _row("e", date=None),
        ],
    )

    entries = SupabaseEntryRepository(client).list_entries("owner-1")

    assert [entry.id for entry in entries] == ["a"]


def test_list_entries_by_date_filters_on_date() -> None:
    client = FakeSupabaseClient()
    table = client.table("custom_logs")
    table.queue("select", [_row("a")])

    repository = SupabaseEntryRepository(client, table_name="custom_logs")
    entries = repository.list_entries_by_date("owner-1", "2024-06-01")

    assert len(entries) == 1
    assert table.last_filters == [("user_id", "owner-1"), ("date", "2024-06-01")]


def test_update_entry_replaces_fields() -> None:
    client = FakeSupabaseClient()
    table = client.table("time_logs")
    table.queue("update", [_row("a")])

    entry = SupabaseEntryRepository(client).update_entry("owner-1", "a", _fields())

    assert entry.id == "a"
    assert isinstance(table.last_payload, dict)
    assert "user_id" not in table.last_payload
    assert ("id", "a") in table.last_filters


def test_update_missing_entry_raises() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(EntryNotFoundError):
        SupabaseEntryRepository(client).update_entry("owner-1", "nope", _fields())


def test_delete_entry_and_missing_entry() -> None:
    client = FakeSupabaseClient()
    table = client.table("time_logs")
    table.queue("delete", [_row("a")])
    repository = SupabaseEntryRepository(client)

    repository.delete_entry("owner-1", "a")

    with pytest.raises(EntryNotFoundError):
        repository.delete_entry("owner-1", "a")


def test_delete_all_entries_counts_rows() -> None:
    client = FakeSupabaseClient()
    table = client.table("time_logs")
    table.queue("delete", [_row("a"), _row("b")])

    deleted = SupabaseEntryRepository(client).delete_all_entries("owner-1")

    assert deleted == 2
    assert table.last_filters == [("user_id", "owner-1")]
