"""Pydantic v2 data models — the data contracts flowing through the ranker."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Closed variants
# ---------------------------------------------------------------------------

class TripStatus(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TripType(str, Enum):
    WASEL = "wasel"   # one-way
    RAJE3 = "raje3"   # there and back


class ConversationLevel(str, Enum):
    QUIET = "quiet"
    MODERATE = "moderate"
    CHATTY = "chatty"

    @property
    def ordinal(self) -> int:
        return _CONVERSATION_ORDER.index(self)


_CONVERSATION_ORDER = [
    ConversationLevel.QUIET,
    ConversationLevel.MODERATE,
    ConversationLevel.CHATTY,
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def as_utc(value: dt.datetime) -> dt.datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class RidePreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    smoking: bool = False
    music: bool = False
    pets: bool = False
    conversation: ConversationLevel = ConversationLevel.MODERATE


class SearchIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    rider_id: str
    origin: str
    destination: str
    date: dt.date | None = None
    max_price: float | None = Field(default=None, gt=0)
    preferences: RidePreferences = Field(default_factory=RidePreferences)

    @field_validator("origin", "destination")
    @classmethod
    def _require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must be a non-empty place name")
        return value


class TripCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    driver_id: str
    status: TripStatus = TripStatus.UPCOMING
    origin: str
    destination: str
    departure: dt.datetime
    price_per_seat: float = Field(gt=0)
    total_seats: int = Field(ge=1)
    remaining_seats: int = Field(ge=0)
    driver_rating: float = 0.0
    driver_verified: bool = False
    preferences: RidePreferences = Field(default_factory=RidePreferences)

    trip_type: TripType = TripType.WASEL
    driver_name: str | None = None

    @field_validator("departure")
    @classmethod
    def _normalize_departure(cls, value: dt.datetime) -> dt.datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def _check_seats(self) -> TripCandidate:
        if self.remaining_seats > self.total_seats:
            raise ValueError(
                f"remaining_seats ({self.remaining_seats}) exceeds "
                f"total_seats ({self.total_seats})"
            )
        return self


# ---------------------------------------------------------------------------
# Scoring / output types
# ---------------------------------------------------------------------------

class FactorBreakdown(BaseModel):
    route: int = Field(default=0, ge=0, le=100)
    preferences: int = Field(default=0, ge=0, le=100)
    rating: int = Field(default=0, ge=0, le=100)
    price: int = Field(default=0, ge=0, le=100)
    timing: int = Field(default=0, ge=0, le=100)


class MatchResult(BaseModel):
    trip_id: str
    score: int = Field(ge=0, le=100)
    factors: FactorBreakdown
    reasons: list[str] = Field(default_factory=list, max_length=3)
    label: str = ""
