"""Voice capture sessions feeding the transcript parser."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from time_logger.domain.entries import ParsedEntry
from time_logger.services.forms import EntryDraft
from time_logger.services.parsing import parse_entry


@dataclass(frozen=True)
class TranscriptEvent:
    """A transcript emitted by a speech source."""

    text: str
    is_final: bool


class TranscriptSource(Protocol):
    """Platform speech-to-text capability."""

    def start(self) -> None:
        """Begin capturing audio."""

    def stop(self) -> None:
        """Stop capturing audio."""

    def subscribe(self, callback: Callable[[TranscriptEvent], None]) -> None:
        """Register a callback for interim and final transcripts."""


@dataclass
class VoiceEntrySession:
    """Merges final transcripts from a source into an entry draft."""

    source: TranscriptSource
    draft: EntryDraft = field(default_factory=EntryDraft)
    interim_text: str = ""
    last_parsed: ParsedEntry | None = None

    def __post_init__(self) -> None:
        self.source.subscribe(self.handle_event)

    def start(self) -> None:
        """Start listening."""
        self.source.start()

    def stop(self) -> None:
        """Stop listening."""
        self.source.stop()

    def handle_event(self, event: TranscriptEvent) -> None:
        """Track interim text; parse and merge final transcripts."""
        if not event.is_final:
            self.interim_text = event.text
            return
        parsed = parse_entry(event.text)
        self.last_parsed = parsed
        self.draft = self.draft.apply_parsed(parsed)
        self.interim_text = ""
