"""Explanation generator — factor scores to short human-readable reasons.

Reasons are checked in a fixed priority order and only the first few that
apply are kept.  They annotate a match and never influence its rank.
"""

from __future__ import annotations

from src.tripmatch.config import ExplanationThresholds
from src.tripmatch.models import FactorBreakdown, TripCandidate

_LABELS = [
    (80, "Excellent Match"),
    (60, "Good Match"),
    (40, "Fair Match"),
]


def explain(
    candidate: TripCandidate,
    factors: FactorBreakdown,
    thresholds: ExplanationThresholds,
    max_reasons: int = 3,
) -> list[str]:
    reasons: list[str] = []

    if factors.route >= thresholds.route_strong:
        reasons.append("route strongly matches")
    elif factors.route >= thresholds.route_partial:
        reasons.append("route partially matches")

    if factors.preferences >= thresholds.preferences:
        reasons.append("strong preference fit")

    if candidate.driver_rating >= thresholds.driver_rating:
        reasons.append("highly rated driver")

    if candidate.driver_verified:
        reasons.append("verified driver")

    if factors.price >= thresholds.price:
        reasons.append("attractive price")

    if candidate.remaining_seats >= thresholds.seats:
        reasons.append(f"{candidate.remaining_seats} seats available")

    return reasons[:max_reasons]


def compatibility_label(score: int) -> str:
    for floor, label in _LABELS:
        if score >= floor:
            return label
    return "Low Match"
