"""Core contracts and shared types for the acquisition engine."""

from .contracts import (
    AggregateItem,
    AggregateReport,
    ExtractedText,
    FeedEntry,
    FetchOutcome,
    FetchStatus,
    SourceDescriptor,
)

__all__ = [
    "AggregateItem",
    "AggregateReport",
    "ExtractedText",
    "FeedEntry",
    "FetchOutcome",
    "FetchStatus",
    "SourceDescriptor",
]
