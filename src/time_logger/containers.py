"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from time_logger.adapters.supabase_entry_repository import SupabaseEntryRepository
from time_logger.config import Settings
from time_logger.services.analytics import AnalyticsService
from time_logger.services.entries import EntryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService
    analytics_service: AnalyticsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(
        supabase_client, table_name=resolved_settings.entries_table
    )
    entry_service = EntryService(entry_repository)
    analytics_service = AnalyticsService(
        repository=entry_repository,
        timezone_name=resolved_settings.timezone,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        entry_service=entry_service,
        analytics_service=analytics_service,
        close_resources=close_resources,
    )
