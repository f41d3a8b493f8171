"""Per-candidate factor breakdown — runs the five scorers for one trip."""

from __future__ import annotations

import datetime as dt
import logging

from src.tripmatch.config import RankingConfig
from src.tripmatch.models import FactorBreakdown, SearchIntent, TripCandidate
from src.tripmatch.scoring import preferences, price, rating, timing
from src.tripmatch.scoring.route import RouteCompatibility

logger = logging.getLogger(__name__)


def price_cap(intent: SearchIntent, config: RankingConfig) -> float:
    return intent.max_price or config.default_price_cap


def score_factors(
    intent: SearchIntent,
    candidate: TripCandidate,
    now: dt.datetime,
    config: RankingConfig,
    route: RouteCompatibility,
) -> FactorBreakdown:
    factors = FactorBreakdown(
        route=route.score(
            intent.origin, intent.destination,
            candidate.origin, candidate.destination,
        ),
        preferences=preferences.score(intent.preferences, candidate.preferences),
        rating=rating.score(candidate.driver_rating),
        price=price.score(candidate.price_per_seat, price_cap(intent, config)),
        timing=timing.score(candidate.departure, now, config.timing_bands),
    )
    logger.debug(
        "Factors for trip %s: route=%d prefs=%d rating=%d price=%d timing=%d",
        candidate.id, factors.route, factors.preferences, factors.rating,
        factors.price, factors.timing,
    )
    return factors
