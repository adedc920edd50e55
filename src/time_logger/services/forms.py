"""Entry form state."""

from dataclasses import dataclass, replace

from time_logger.domain.entries import EntryFields, ParsedEntry, TimeEntry
from time_logger.services.entries import validate_fields


@dataclass(frozen=True)
class EntryDraft:
    """Current values of the entry form, before validation."""

    start_time: str = ""
    end_time: str = ""
    category: str = ""
    sub_category: str = ""
    description: str = ""

    @classmethod
    def from_entry(cls, entry: TimeEntry) -> "EntryDraft":
        """Prefill a draft from an existing entry for editing."""
        return cls(
            start_time=entry.start_time,
            end_time=entry.end_time,
            category=str(entry.category),
            sub_category=entry.sub_category,
            description=entry.description,
        )

    def apply_parsed(self, parsed: ParsedEntry) -> "EntryDraft":
        """Overwrite only the fields the parser recognised."""
        return replace(self, **parsed.present_fields())

    def to_fields(self, date: str) -> EntryFields:
        """Validate the draft into entry fields for the given date."""
        return validate_fields(
            date=date,
            start_time=self.start_time,
            end_time=self.end_time,
            category=self.category,
            sub_category=self.sub_category,
            description=self.description,
        )

    def next_draft(self) -> "EntryDraft":
        """Return the blank draft that follows a submit, starting at this end."""
        return EntryDraft(start_time=self.end_time)
