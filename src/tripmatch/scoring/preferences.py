"""Preference factor — agreement between rider and trip ride preferences.

Three boolean pairs (smoking, music, pets) earn a point each on agreement.
Conversation level earns a full point when equal, half a point one step
apart, nothing at opposite ends.
"""

from __future__ import annotations

from src.tripmatch.models import RidePreferences
from src.tripmatch.scoring.normalize import round_score

_CONVERSATION_POINTS = {0: 1.0, 1: 0.5}
_MAX_POINTS = 4


def score(rider: RidePreferences, trip: RidePreferences) -> int:
    points = 0.0
    for flag in ("smoking", "music", "pets"):
        if getattr(rider, flag) == getattr(trip, flag):
            points += 1

    gap = abs(rider.conversation.ordinal - trip.conversation.ordinal)
    points += _CONVERSATION_POINTS.get(gap, 0.0)

    return round_score(points / _MAX_POINTS * 100)
