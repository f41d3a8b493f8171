"""Timing factor — convenience of the departure time relative to now.

Departures a few hours out score best; imminent and distant ones less so;
past departures score zero.
"""

from __future__ import annotations

import datetime as dt

from src.tripmatch.config import TimingBands
from src.tripmatch.models import as_utc

PAST = 0
TOO_SOON = 50
IDEAL = 100
NEAR = 70
DISTANT = 40


def hours_until(departure: dt.datetime, now: dt.datetime) -> float:
    return (as_utc(departure) - as_utc(now)).total_seconds() / 3600.0


def score(departure: dt.datetime, now: dt.datetime, bands: TimingBands) -> int:
    hours = hours_until(departure, now)
    if hours < 0:
        return PAST
    if hours < bands.too_soon_hours:
        return TOO_SOON
    if hours <= bands.ideal_max_hours:
        return IDEAL
    if hours <= bands.near_max_hours:
        return NEAR
    return DISTANT
