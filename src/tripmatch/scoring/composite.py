"""Composite ranker — weighted sum of all factor scores."""

from __future__ import annotations

from src.tripmatch.config import FactorWeights
from src.tripmatch.models import FactorBreakdown, MatchResult, TripCandidate
from src.tripmatch.scoring.normalize import round_score


def composite_score(factors: FactorBreakdown, weights: FactorWeights) -> int:
    return round_score(
        weights.route * factors.route
        + weights.preferences * factors.preferences
        + weights.rating * factors.rating
        + weights.price * factors.price
        + weights.timing * factors.timing
    )


def sort_results(
    scored: list[tuple[MatchResult, TripCandidate]],
) -> list[MatchResult]:
    """Order by score descending; ties go to the cheaper seat, then input order."""
    ordered = sorted(
        scored,
        key=lambda pair: (-pair[0].score, pair[1].price_per_seat),
    )
    return [result for result, _ in ordered]
