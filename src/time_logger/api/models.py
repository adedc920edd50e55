"""Pydantic models for the HTTP API payloads."""

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    """Transcript to parse into entry fields."""

    transcript: str = ""


class EntryPayload(BaseModel):
    """Full entry body for create and replace."""

    date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    category: str | None = None
    sub_category: str = ""
    description: str = ""


class EntryResponse(BaseModel):
    """Entry as returned by the API."""

    id: str
    date: str
    start_time: str
    end_time: str
    category: str
    sub_category: str
    description: str


class DayEntriesResponse(BaseModel):
    """Entries logged on one date with their total duration."""

    date: str
    entries: list[EntryResponse] = Field(default_factory=list)
    total_minutes: int = 0
