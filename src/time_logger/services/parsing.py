"""Landmark-based parsing of spoken or typed time entries.

A transcript such as ``"from 7 am to 9 am, category faith, sub category bible,
description ESV version"`` is split on a small set of landmark keywords and
the text between two landmarks becomes the value of the first one. Nothing
here raises: unusable values simply leave their field unset.
"""

import logging
import re
import string

from time_logger.domain.entries import (
    MAX_HOUR,
    MAX_MINUTE,
    ParsedEntry,
    parse_category,
)

_logger = logging.getLogger(__name__)

WORD_TO_NUMBER: dict[str, int] = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
    "twenty": 20,
}

NOON = 12

_SPOKEN_COLON_RE = re.compile(r"\bcolon\b", re.IGNORECASE | re.ASCII)
_SUB_CATEGORY_RE = re.compile(r"\bsub\s?-?\s?category\b", re.IGNORECASE | re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")
_LANDMARK_RE = re.compile(
    r"\b(from|to|category|sub-category|description)\b", re.IGNORECASE | re.ASCII
)
_NUMERIC_TIME_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?(?:\s*(am|pm))?", re.ASCII)
_SEGMENT_PADDING = string.whitespace + ",:"


def normalize_time(raw: str) -> str | None:
    """Convert a spoken or typed time into ``HH:MM``, or None if unusable."""
    value = _WHITESPACE_RE.sub(" ", raw.strip().lower().replace(".", ""))

    if value == "noon":
        return "12:00"
    if value == "midnight":
        return "00:00"

    minute = 0
    word_hour = WORD_TO_NUMBER.get(value.split(" ")[0])
    if word_hour is not None:
        hour = _apply_meridiem(
            word_hour,
            is_pm="pm" in value,
            is_am="am" in value,
        )
    else:
        match = _NUMERIC_TIME_RE.fullmatch(value)
        if not match:
            return None
        hour = int(match.group(1))
        minute = int(match.group(2)) if match.group(2) else 0
        period = match.group(3)
        hour = _apply_meridiem(hour, is_pm=period == "pm", is_am=period == "am")

    if not 0 <= hour <= MAX_HOUR or not 0 <= minute <= MAX_MINUTE:
        return None
    return f"{hour:02d}:{minute:02d}"


def parse_entry(transcript: str) -> ParsedEntry:
    """Extract whichever entry fields a transcript mentions."""
    segments = _segment(transcript)

    start_time = normalize_time(segments["from"]) if "from" in segments else None
    end_time = normalize_time(segments["to"]) if "to" in segments else None
    category = (
        parse_category(segments["category"]) if "category" in segments else None
    )
    sub_category = (
        _capitalize(segments["sub-category"]) if "sub-category" in segments else None
    )
    description = (
        _capitalize(segments["description"]) if "description" in segments else None
    )

    parsed = ParsedEntry(
        start_time=start_time,
        end_time=end_time,
        category=category,
        sub_category=sub_category,
        description=description,
    )
    _logger.debug("Parsed transcript fields: %s", sorted(parsed.present_fields()))
    return parsed


def _segment(transcript: str) -> dict[str, str]:
    """Map each landmark keyword to the text that follows it.

    Later occurrences of a keyword overwrite earlier ones.
    """
    text = _SPOKEN_COLON_RE.sub("", transcript)
    text = _SUB_CATEGORY_RE.sub("sub-category", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()

    parts = _LANDMARK_RE.split(text)
    segments: dict[str, str] = {}
    for index in range(1, len(parts), 2):
        keyword = parts[index].lower()
        value = parts[index + 1].strip(_SEGMENT_PADDING)
        if value:
            segments[keyword] = value
    return segments


def _apply_meridiem(hour: int, *, is_pm: bool, is_am: bool) -> int:
    if is_pm and hour < NOON:
        hour += NOON
    if is_am and hour == NOON:
        hour = 0
    return hour


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]
