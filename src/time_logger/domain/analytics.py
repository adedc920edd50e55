"""Domain models for time analytics."""

from dataclasses import dataclass, field

NO_SUB_CATEGORY = "(no sub-category)"


@dataclass(frozen=True)
class CategoryStats:
    """Totals for one category."""

    category: str
    total_minutes: int
    total_hours: float
    count: int
    percentage: int


@dataclass(frozen=True)
class CategorySubStats:
    """Totals for one category and sub-category pair."""

    category: str
    sub_category: str
    total_minutes: int
    total_hours: float
    count: int
    percentage: int


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """Computed breakdown of logged time over a window."""

    total_entries: int = 0
    category_breakdown: list[CategoryStats] = field(default_factory=list)
    category_sub_breakdown: list[CategorySubStats] = field(default_factory=list)


@dataclass(frozen=True)
class AllTime:
    """Window that keeps every entry."""


@dataclass(frozen=True)
class TrailingDays:
    """Window that keeps entries dated on or after today minus ``days``."""

    days: int


@dataclass(frozen=True)
class DateRange:
    """Closed ``[start, end]`` window over ``YYYY-MM-DD`` dates."""

    start: str
    end: str


AnalyticsWindow = AllTime | TrailingDays | DateRange
