"""Data contracts shared by the fetcher, parsers and aggregator."""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FetchStatus(str, Enum):
    """Per-source resolution of one aggregation call."""

    SUCCESS = "success"
    FAILURE = "failure"


class SourceDescriptor(BaseModel):
    """One remote source supplied by the tool layer for a single call."""

    model_config = ConfigDict(frozen=True)

    key: str
    url: str
    label: str = ""

    @field_validator("key", "url", mode="before")
    @classmethod
    def _non_empty_text(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("value is required")
        return text


class FeedEntry(BaseModel):
    """One `<item>` block of an RSS-like document."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str = ""
    published_at: str = ""
    description: str = ""


class ExtractedText(BaseModel):
    """Cleaned main text of an HTML page, bounded by a character budget."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    truncated: bool = False


class FetchOutcome(BaseModel):
    """Recorded result of one source; created once, never mutated."""

    model_config = ConfigDict(frozen=True)

    source_key: str
    label: str = ""
    url: str = ""
    status: FetchStatus
    payload: List[Any] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.SUCCESS


class AggregateItem(BaseModel):
    """A display item tagged with the source it came from."""

    model_config = ConfigDict(frozen=True)

    source_key: str
    label: str = ""
    value: Any = None


class AggregateReport(BaseModel):
    """Merged, deduplicated and truncated result of a fan-out call."""

    items: List[AggregateItem] = Field(default_factory=list)
    outcomes: List[FetchOutcome] = Field(default_factory=list)

    @property
    def attempted_count(self) -> int:
        return len(self.outcomes)

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failures(self) -> List[FetchOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    def values(self) -> List[Any]:
        return [item.value for item in self.items]

    def outcome_for(self, source_key: str) -> Optional[FetchOutcome]:
        for outcome in self.outcomes:
            if outcome.source_key == source_key:
                return outcome
        return None

    def summary_line(self) -> str:
        return f"{self.success_count}/{self.attempted_count} sources retrieved"
