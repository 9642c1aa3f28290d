"""Structured logging utilities."""

from .journal import (
    ChangeEvent,
    ChangeJournal,
    JsonlChangeJournal,
    summarize_metadata,
    utc_timestamp,
)

__all__ = [
    "ChangeEvent",
    "ChangeJournal",
    "JsonlChangeJournal",
    "summarize_metadata",
    "utc_timestamp",
]
