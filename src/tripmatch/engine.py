"""Top-level orchestrator — ties all components together.

Pipeline:
  1. Validate the search intent                     (fails fast)
  2. Coerce candidate records, skipping malformed ones
  3. Gate out ineligible trips
  4. Score five factors per trip                    (pure, deterministic)
  5. Aggregate, explain, rank
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from src.tripmatch import gate
from src.tripmatch.config import RankingConfig, settings
from src.tripmatch.explanation.generator import compatibility_label, explain
from src.tripmatch.models import MatchResult, SearchIntent, TripCandidate, as_utc
from src.tripmatch.scoring.composite import composite_score, sort_results
from src.tripmatch.scoring.factors import score_factors
from src.tripmatch.scoring.route import RouteCompatibility, TextContainmentRoute

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"

CandidateRecord = TripCandidate | Mapping[str, Any]


def load_sample_trips() -> list[TripCandidate]:
    path = DATA_DIR / "sample_trips.json"
    with open(path) as f:
        raw = json.load(f)
    return [TripCandidate(**t) for t in raw]


def load_sample_search() -> SearchIntent:
    path = DATA_DIR / "sample_search.json"
    with open(path) as f:
        raw = json.load(f)
    return SearchIntent(**raw)


def load_trips_from_json(data: list[dict]) -> list[TripCandidate]:
    """Validate uploaded trip records, dropping the malformed ones."""
    trips, _ = coerce_candidates(data)
    return trips


def coerce_candidates(records: Iterable[CandidateRecord]) -> tuple[list[TripCandidate], int]:
    """Validate raw trip records.  Returns (valid candidates, skipped count)."""
    valid: list[TripCandidate] = []
    skipped = 0
    for record in records:
        if isinstance(record, TripCandidate):
            valid.append(record)
            continue
        try:
            valid.append(TripCandidate.model_validate(record))
        except ValidationError as e:
            skipped += 1
            trip_id = record.get("id", "<no id>") if isinstance(record, Mapping) else "<no id>"
            logger.warning(
                "Skipping malformed trip %s: %d validation error(s): %s",
                trip_id, e.error_count(),
                "; ".join(
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ),
            )
    return valid, skipped


class TripRanker:
    """Ranks candidate trips for a rider's search.

    Holds only an immutable configuration and a route provider, so one
    instance can serve any number of concurrent callers.
    """

    def __init__(
        self,
        config: RankingConfig | None = None,
        route: RouteCompatibility | None = None,
    ) -> None:
        self.config = config if config is not None else settings.ranking
        self.route = route if route is not None else TextContainmentRoute()

    def rank(
        self,
        intent: SearchIntent | Mapping[str, Any],
        candidates: Iterable[CandidateRecord],
        now: dt.datetime | None = None,
        limit: int | None = None,
    ) -> list[MatchResult]:
        if not isinstance(intent, SearchIntent):
            intent = SearchIntent.model_validate(intent)
        now = as_utc(now) if now is not None else dt.datetime.now(dt.timezone.utc)

        trips, skipped = coerce_candidates(candidates)
        eligible = gate.admit(trips, intent.rider_id)
        if self.config.match_departure_date and intent.date is not None:
            eligible = gate.on_date(eligible, intent.date)

        scored: list[tuple[MatchResult, TripCandidate]] = []
        for trip in eligible:
            factors = score_factors(intent, trip, now, self.config, self.route)
            total = composite_score(factors, self.config.weights)
            scored.append((
                MatchResult(
                    trip_id=trip.id,
                    score=total,
                    factors=factors,
                    reasons=explain(
                        trip, factors, self.config.thresholds,
                        self.config.max_reasons,
                    ),
                    label=compatibility_label(total),
                ),
                trip,
            ))

        results = sort_results(scored)
        if limit is not None:
            results = results[:limit]

        logger.info(
            "Ranked trips for rider %s (%s -> %s): %d in, %d skipped, "
            "%d eligible, %d returned",
            intent.rider_id, intent.origin, intent.destination,
            len(trips) + skipped, skipped, len(eligible), len(results),
        )
        return results


def rank(
    intent: SearchIntent | Mapping[str, Any],
    candidates: Iterable[CandidateRecord],
    now: dt.datetime | None = None,
    config: RankingConfig | None = None,
    limit: int | None = None,
) -> list[MatchResult]:
    """Rank candidates for one search with a fresh ranker."""
    k = limit if limit is not None else settings.top_k
    return TripRanker(config).rank(intent, candidates, now=now, limit=k)
