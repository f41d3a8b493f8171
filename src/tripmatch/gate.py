"""Candidate gate — hard eligibility rules applied before any scoring.

A trip is never ranked when it is cancelled or completed, has no seats
left, or is driven by the rider who is searching.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable

from src.tripmatch.models import TripCandidate, TripStatus

logger = logging.getLogger(__name__)

_BOOKABLE = frozenset({TripStatus.UPCOMING, TripStatus.ACTIVE})


def is_eligible(candidate: TripCandidate, rider_id: str) -> bool:
    if candidate.status not in _BOOKABLE:
        return False
    if candidate.remaining_seats <= 0:
        return False
    return candidate.driver_id != rider_id


def admit(candidates: Iterable[TripCandidate], rider_id: str) -> list[TripCandidate]:
    """Return the eligible candidates in their original order."""
    admitted = []
    for candidate in candidates:
        if is_eligible(candidate, rider_id):
            admitted.append(candidate)
        else:
            logger.debug(
                "Gate dropped trip %s (status=%s seats=%d driver=%s)",
                candidate.id, candidate.status.value,
                candidate.remaining_seats, candidate.driver_id,
            )
    return admitted


def on_date(candidates: Iterable[TripCandidate], day: dt.date) -> list[TripCandidate]:
    """Keep trips departing on the given calendar day (UTC)."""
    return [c for c in candidates if c.departure.date() == day]
