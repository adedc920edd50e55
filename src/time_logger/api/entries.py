"""Entry, parsing and analytics endpoints with simple token auth."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from time_logger.api.models import (
    DayEntriesResponse,
    EntryPayload,
    EntryResponse,
    ParseRequest,
)
from time_logger.domain.analytics import (
    AllTime,
    AnalyticsWindow,
    DateRange,
    TrailingDays,
)
from time_logger.domain.entries import TimeEntry, is_calendar_date
from time_logger.services.entries import day_total_minutes, validate_fields
from time_logger.services.parsing import parse_entry

if TYPE_CHECKING:
    from time_logger.containers import AppContainer

router = APIRouter(tags=["entries"])

MAX_WINDOW_DAYS = 36_500


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/entries/parse", dependencies=[Depends(require_api_token)])
async def parse_transcript(body: ParseRequest) -> dict[str, str]:
    """Return the entry fields recognised in a transcript."""
    return parse_entry(body.transcript).present_fields()


@router.get("/users/{user_id}/entries", dependencies=[Depends(require_api_token)])
async def list_day_entries(
    user_id: str, request: Request, date: str | None = None
) -> DayEntriesResponse:
    """Return a day's entries ordered by start time."""
    container: AppContainer = request.app.state.container
    day = date or container.analytics_service.today().isoformat()
    entries = container.entry_service.list_day(user_id, day)
    return DayEntriesResponse(
        date=day,
        entries=[_entry_response(entry) for entry in entries],
        total_minutes=day_total_minutes(entries),
    )


@router.post(
    "/users/{user_id}/entries",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_token)],
)
async def create_entry(
    user_id: str, body: EntryPayload, request: Request
) -> EntryResponse:
    """Log a new entry, dated today unless a date is given."""
    container: AppContainer = request.app.state.container
    day = body.date or container.analytics_service.today().isoformat()
    fields = validate_fields(
        date=day,
        start_time=body.start_time,
        end_time=body.end_time,
        category=body.category,
        sub_category=body.sub_category,
        description=body.description,
    )
    return _entry_response(container.entry_service.log_entry(user_id, fields))


@router.put(
    "/users/{user_id}/entries/{entry_id}", dependencies=[Depends(require_api_token)]
)
async def replace_entry(
    user_id: str, entry_id: str, body: EntryPayload, request: Request
) -> EntryResponse:
    """Replace every field of an existing entry."""
    container: AppContainer = request.app.state.container
    fields = validate_fields(
        date=body.date or "",
        start_time=body.start_time,
        end_time=body.end_time,
        category=body.category,
        sub_category=body.sub_category,
        description=body.description,
    )
    entry = container.entry_service.update_entry(user_id, entry_id, fields)
    return _entry_response(entry)


@router.delete(
    "/users/{user_id}/entries/{entry_id}", dependencies=[Depends(require_api_token)]
)
async def delete_entry(user_id: str, entry_id: str, request: Request) -> dict[str, str]:
    """Delete one entry."""
    container: AppContainer = request.app.state.container
    container.entry_service.delete_entry(user_id, entry_id)
    return {"status": "ok"}


@router.delete("/users/{user_id}/entries", dependencies=[Depends(require_api_token)])
async def clear_entries(user_id: str, request: Request) -> dict[str, int]:
    """Delete all of a user's entries across every date."""
    container: AppContainer = request.app.state.container
    return {"deleted": container.entry_service.clear_all(user_id)}


@router.get("/users/{user_id}/analytics", dependencies=[Depends(require_api_token)])
async def analytics(
    user_id: str,
    request: Request,
    days: int | None = Query(default=None, ge=0, le=MAX_WINDOW_DAYS),
    start: str | None = None,
    end: str | None = None,
) -> dict[str, object]:
    """Return category breakdowns for the selected window."""
    container: AppContainer = request.app.state.container
    window = _resolve_window(days, start, end)
    return asdict(container.analytics_service.get_snapshot(user_id, window))


def _resolve_window(
    days: int | None, start: str | None, end: str | None
) -> AnalyticsWindow:
    if start or end:
        if not (start and end):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Both start and end are required for a custom range",
            )
        if not (is_calendar_date(start) and is_calendar_date(end)):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="start and end must be YYYY-MM-DD dates",
            )
        return DateRange(start=start, end=end)
    if days is not None:
        return TrailingDays(days=days)
    return AllTime()


def _entry_response(entry: TimeEntry) -> EntryResponse:
    return EntryResponse(
        id=entry.id,
        date=entry.date,
        start_time=entry.start_time,
        end_time=entry.end_time,
        category=str(entry.category),
        sub_category=entry.sub_category,
        description=entry.description,
    )
