"""Rating factor — driver aggregate rating on a 0–100 scale."""

from __future__ import annotations

from src.tripmatch.scoring.normalize import round_score

MAX_RATING = 5.0


def score(driver_rating: float) -> int:
    clamped = min(max(driver_rating, 0.0), MAX_RATING)
    return round_score(clamped / MAX_RATING * 100)
