"""Summary and batch state models for TubeScout."""

from dataclasses import dataclass, field
from typing import List, Optional

from tubescout.models.video import ChannelRecord, PlaylistRecord, VideoRecord

# Fictional links all start with this; it's how we pick them out of the text
LINK_PREFIX = "https://"


def extract_links(text: str) -> List[str]:
    """Return the lines of ``text`` that look like links."""
    return [line for line in text.split('\n') if line.strip().startswith(LINK_PREFIX)]


@dataclass(frozen=True)
class SummaryResult:
    """Generated text for one video plus the link lines found in it."""

    text: str

    @property
    def links(self) -> List[str]:
        return extract_links(self.text)


@dataclass
class BatchItem:
    """A video in a listing, with the state of its summary generation."""

    video: VideoRecord
    summary: Optional[SummaryResult] = None
    loading: bool = False
    error: Optional[str] = None

    @property
    def links(self) -> List[str]:
        return self.summary.links if self.summary else []

    def start(self) -> None:
        """Mark the item as in progress and clear any earlier failure."""
        self.loading = True
        self.error = None

    def finish(self, summary: Optional[SummaryResult] = None, error: Optional[str] = None) -> None:
        if summary is not None:
            self.summary = summary
        if error is not None:
            self.error = error
        self.loading = False


@dataclass
class LookupResult:
    """Everything fetched for one query. Replaced wholesale by the next query."""

    video: Optional[VideoRecord] = None
    channel: Optional[ChannelRecord] = None
    playlist: Optional[PlaylistRecord] = None
    items: List[BatchItem] = field(default_factory=list)
    summary: Optional[SummaryResult] = None  # single-video summary

    @property
    def videos(self) -> List[VideoRecord]:
        return [item.video for item in self.items]

    @property
    def has_any_links(self) -> bool:
        return any(item.links for item in self.items)
