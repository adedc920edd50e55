"""Analytics over logged time entries."""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from time_logger.domain.analytics import (
    NO_SUB_CATEGORY,
    AllTime,
    AnalyticsSnapshot,
    AnalyticsWindow,
    CategoryStats,
    CategorySubStats,
    DateRange,
    TrailingDays,
)
from time_logger.domain.entries import TimeEntry, calculate_duration
from time_logger.services.entries import EntryRepository


def filter_entries(
    entries: Iterable[TimeEntry], window: AnalyticsWindow, today: date
) -> list[TimeEntry]:
    """Return the entries whose date falls inside the window."""
    if isinstance(window, DateRange):
        return [
            entry for entry in entries if window.start <= entry.date <= window.end
        ]
    if isinstance(window, TrailingDays):
        if window.days >= (today - date.min).days:
            return list(entries)
        cutoff = (today - timedelta(days=window.days)).isoformat()
        return [entry for entry in entries if entry.date >= cutoff]
    return list(entries)


def aggregate(
    entries: Sequence[TimeEntry],
    window: AnalyticsWindow | None = None,
    today: date | None = None,
) -> AnalyticsSnapshot:
    """Reduce entries to category and category/sub-category breakdowns."""
    logs = filter_entries(entries, window or AllTime(), today or date.today())
    if not logs:
        return AnalyticsSnapshot()

    durations = [calculate_duration(log.start_time, log.end_time) for log in logs]
    total_minutes = sum(durations)

    category_totals: dict[str, list[int]] = {}
    pair_totals: dict[tuple[str, str], list[int]] = {}
    for log, duration in zip(logs, durations, strict=True):
        category = str(log.category)
        bucket = category_totals.setdefault(category, [0, 0])
        bucket[0] += duration
        bucket[1] += 1

        pair = (category, log.sub_category or NO_SUB_CATEGORY)
        bucket = pair_totals.setdefault(pair, [0, 0])
        bucket[0] += duration
        bucket[1] += 1

    category_breakdown = sorted(
        (
            CategoryStats(
                category=category,
                total_minutes=minutes,
                total_hours=_hours(minutes),
                count=count,
                percentage=_percentage(minutes, total_minutes),
            )
            for category, (minutes, count) in category_totals.items()
        ),
        key=lambda stats: -stats.total_minutes,
    )

    rank = {stats.category: index for index, stats in enumerate(category_breakdown)}
    category_sub_breakdown = sorted(
        (
            CategorySubStats(
                category=category,
                sub_category=sub_category,
                total_minutes=minutes,
                total_hours=_hours(minutes),
                count=count,
                percentage=_percentage(minutes, total_minutes),
            )
            for (category, sub_category), (minutes, count) in pair_totals.items()
        ),
        key=lambda stats: (rank[stats.category], -stats.total_minutes),
    )

    return AnalyticsSnapshot(
        total_entries=len(logs),
        category_breakdown=category_breakdown,
        category_sub_breakdown=category_sub_breakdown,
    )


@dataclass
class AnalyticsService:
    """Service for computing a user's analytics in their timezone."""

    repository: EntryRepository
    timezone_name: str = "UTC"

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()

    def get_snapshot(
        self, owner_id: str, window: AnalyticsWindow | None = None
    ) -> AnalyticsSnapshot:
        """Return the analytics snapshot for all of an owner's entries."""
        entries = self.repository.list_entries(owner_id)
        return aggregate(entries, window, today=self.today())


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _hours(minutes: int) -> float:
    return _round_half_up(minutes / 60 * 10) / 10


def _percentage(minutes: int, total_minutes: int) -> int:
    # zero-length or offsetting negative entries can sum to zero
    if total_minutes == 0:
        return 0
    return _round_half_up(minutes / total_minutes * 100)
