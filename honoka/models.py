"""
Data models for honoka cards and review outcomes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import MAX_INTERVAL_INDEX


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds, the resolution cards are stored at."""
    return datetime.now(timezone.utc).replace(microsecond=0)


class Outcome(IntEnum):
    """
    The interpreted result of the user's reply after seeing a card's back.
    """

    Fail = 0
    Pass = 1


class Card(BaseModel):
    """
    A front/back flashcard together with its scheduling state.

    The front is the primary key and also the prompt shown during review.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    front: str = Field(
        ...,
        description="Prompt text. Unique across the store.",
    )
    back: str = Field(
        ...,
        min_length=1,
        description="Answer text shown after the front is acknowledged.",
    )
    interval_index: int = Field(
        default=0,
        ge=0,
        le=MAX_INTERVAL_INDEX,
        description="Position in the fixed interval table.",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="UTC timestamp when the card was added (never changes).",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        description="UTC timestamp of the last time the interval was set.",
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC and normalise aware ones to UTC."""
        if v.tzinfo is None or v.tzinfo.utcoffset(v) is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @model_validator(mode="after")
    def check_timestamp_order(self) -> "Card":
        if self.updated_at < self.created_at:
            raise ValueError(
                f"updated_at ({self.updated_at}) cannot precede created_at ({self.created_at})"
            )
        return self
