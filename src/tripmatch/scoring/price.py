"""Price factor — how far below the rider's cap a seat is priced."""

from __future__ import annotations

from src.tripmatch.scoring.normalize import round_score


def score(price: float, cap: float) -> int:
    """Linear from 100 at a free seat down to 0 at or above the cap."""
    if cap <= 0:
        raise ValueError(f"price cap must be positive, got {cap}")
    if price < 0:
        raise ValueError(f"price must not be negative, got {price}")
    if price >= cap:
        return 0
    return round_score((cap - price) / cap * 100)
