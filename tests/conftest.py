"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from time_logger.config import Settings
from time_logger.containers import AppContainer
from time_logger.domain.entries import (
    Category,
    EntryFields,
    EntryNotFoundError,
    TimeEntry,
)
from time_logger.services.analytics import AnalyticsService
from time_logger.services.entries import EntryRepository, EntryService
from time_logger.services.voice import TranscriptEvent, TranscriptSource


def make_entry(  # noqa: PLR0913
    start_time: str,
    end_time: str,
    category: Category = Category.WORK,
    sub_category: str = "",
    description: str = "",
    date: str = "2024-06-01",
) -> TimeEntry:
    """Build a TimeEntry with a random id."""
    return TimeEntry(
        id=str(uuid4()),
        date=date,
        start_time=start_time,
        end_time=end_time,
        category=category,
        sub_category=sub_category,
        description=description,
    )


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    entries: dict[str, dict[str, TimeEntry]] = field(default_factory=dict)

    def list_entries(self, owner_id: str) -> list[TimeEntry]:
        return list(self.entries.get(owner_id, {}).values())

    def list_entries_by_date(self, owner_id: str, date: str) -> list[TimeEntry]:
        return [entry for entry in self.list_entries(owner_id) if entry.date == date]

    def create_entry(self, owner_id: str, fields: EntryFields) -> TimeEntry:
        entry = TimeEntry.from_fields(str(uuid4()), fields)
        self.entries.setdefault(owner_id, {})[entry.id] = entry
        return entry

    def update_entry(
        self, owner_id: str, entry_id: str, fields: EntryFields
    ) -> TimeEntry:
        owned = self.entries.get(owner_id, {})
        if entry_id not in owned:
            raise EntryNotFoundError(entry_id)
        entry = TimeEntry.from_fields(entry_id, fields)
        owned[entry_id] = entry
        return entry

    def delete_entry(self, owner_id: str, entry_id: str) -> None:
        owned = self.entries.get(owner_id, {})
        if entry_id not in owned:
            raise EntryNotFoundError(entry_id)
        del owned[entry_id]

    def delete_all_entries(self, owner_id: str) -> int:
        return len(self.entries.pop(owner_id, {}))


@dataclass
class FakeTranscriptSource(TranscriptSource):
    """Transcript source driven by the test."""

    listening: bool = False
    callbacks: list[Callable[[TranscriptEvent], None]] = field(default_factory=list)

    def start(self) -> None:
        self.listening = True

    def stop(self) -> None:
        self.listening = False

    def subscribe(self, callback: Callable[[TranscriptEvent], None]) -> None:
        self.callbacks.append(callback)

    def emit(self, text: str, is_final: bool = True) -> None:
        for callback in self.callbacks:
            callback(TranscriptEvent(text=text, is_final=is_final))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        api_token="api-token",
    )


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def container(
    settings: Settings, entry_repository: InMemoryEntryRepository
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        entry_service=EntryService(entry_repository),
        analytics_service=AnalyticsService(
            repository=entry_repository, timezone_name=settings.timezone
        ),
        close_resources=close_resources,
    )
