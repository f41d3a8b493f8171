"""Unit tests for the factor scorers and the composite."""

from __future__ import annotations

import datetime as dt

import pytest

from src.tripmatch.config import FactorWeights, RankingConfig, TimingBands
from src.tripmatch.models import FactorBreakdown, RidePreferences
from src.tripmatch.scoring import preferences, price, rating, timing
from src.tripmatch.scoring.composite import composite_score
from src.tripmatch.scoring.factors import score_factors
from src.tripmatch.scoring.normalize import round_score
from src.tripmatch.scoring.route import TextContainmentRoute

from tests.factories import NOW, make_intent, make_trip


class TestRoundScore:
    def test_half_rounds_up(self):
        assert round_score(62.5) == 63
        assert round_score(12.5) == 13

    def test_float_noise_below_half(self):
        assert round_score(28.499999999999996) == 29

    def test_clamped(self):
        assert round_score(-3) == 0
        assert round_score(100.4) == 100


class TestRoute:
    route = TextContainmentRoute()

    def test_exact_match_case_insensitive(self):
        s = self.route.score(
            "dubai marina", "ABU DHABI CORNICHE",
            "Dubai Marina", "Abu Dhabi Corniche",
        )
        assert s == 100

    def test_containment_either_direction(self):
        # rider text inside trip text, and trip text inside rider text
        s = self.route.score(
            "Marina", "Abu Dhabi Corniche",
            "Dubai Marina Walk", "Abu Dhabi",
        )
        assert s == 100

    def test_one_end(self):
        s = self.route.score("Dubai Marina", "Al Ain", "Dubai Marina", "Abu Dhabi")
        assert s == 60

    def test_no_ends(self):
        s = self.route.score("Sharjah", "Dubai Mall", "Dubai Marina", "Abu Dhabi")
        assert s == 20


class TestPreferences:
    def test_all_agree(self):
        p = RidePreferences(smoking=False, music=True, pets=True, conversation="chatty")
        assert preferences.score(p, p) == 100

    def test_conversation_opposite_ends(self):
        rider = RidePreferences(conversation="quiet")
        trip = RidePreferences(conversation="chatty")
        assert preferences.score(rider, trip) == 75

    def test_conversation_one_step(self):
        rider = RidePreferences(smoking=True, music=True, conversation="quiet")
        trip = RidePreferences(smoking=False, music=False, conversation="moderate")
        # pets agree (1) + half a point for conversation = 1.5 / 4
        assert preferences.score(rider, trip) == 38

    def test_half_point_rounds_up(self):
        rider = RidePreferences(smoking=True, music=True, pets=True, conversation="moderate")
        trip = RidePreferences(smoking=False, music=False, pets=False, conversation="chatty")
        assert preferences.score(rider, trip) == 13


class TestRating:
    def test_scaled(self):
        assert rating.score(4.8) == 96
        assert rating.score(5.0) == 100
        assert rating.score(0.0) == 0

    def test_clamped(self):
        assert rating.score(7.2) == 100
        assert rating.score(-1.0) == 0


class TestPrice:
    def test_at_cap_is_zero(self):
        assert price.score(100, 100) == 0

    def test_above_cap_is_zero(self):
        assert price.score(150, 100) == 0

    def test_free_seat(self):
        assert price.score(0, 100) == 100

    def test_linear(self):
        assert price.score(50, 100) == 50
        assert price.score(125, 500) == 75

    def test_monotonic(self):
        scores = [price.score(p, 500) for p in range(0, 601, 7)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            price.score(-1, 100)

    def test_non_positive_cap_rejected(self):
        with pytest.raises(ValueError):
            price.score(10, 0)


class TestTiming:
    bands = TimingBands()

    def _at(self, hours: float) -> int:
        return timing.score(NOW + dt.timedelta(hours=hours), NOW, self.bands)

    def test_departing_now(self):
        assert self._at(0) == 50

    def test_bands(self):
        assert self._at(-0.5) == 0
        assert self._at(1.99) == 50
        assert self._at(2) == 100
        assert self._at(10) == 100
        assert self._at(24) == 100
        assert self._at(24.5) == 70
        assert self._at(72) == 70
        assert self._at(100) == 40

    def test_naive_now_taken_as_utc(self):
        naive_now = NOW.replace(tzinfo=None)
        s = timing.score(NOW + dt.timedelta(hours=10), naive_now, self.bands)
        assert s == 100

    def test_custom_bands(self):
        bands = TimingBands(too_soon_hours=1, ideal_max_hours=6, near_max_hours=12)
        assert timing.score(NOW + dt.timedelta(hours=8), NOW, bands) == 70


class TestCompositeScore:
    weights = FactorWeights()

    def test_zero_scores(self):
        assert composite_score(FactorBreakdown(), self.weights) == 0

    def test_perfect_scores(self):
        factors = FactorBreakdown(route=100, preferences=100, rating=100, price=100, timing=100)
        assert composite_score(factors, self.weights) == 100

    def test_weighted_sum(self):
        factors = FactorBreakdown(route=100, preferences=100, rating=96, price=50, timing=100)
        # 35 + 20 + 19.2 + 7.5 + 10 = 91.7
        assert composite_score(factors, self.weights) == 92

    def test_exact_half_sum_rounds_up(self):
        # 7 + 2.6 + 16.2 + 2.7 + 0 = 28.5 exactly, but the float sum sits just below
        factors = FactorBreakdown(route=20, preferences=13, rating=81, price=18, timing=0)
        assert composite_score(factors, self.weights) == 29

    def test_route_dominant(self):
        high_route = FactorBreakdown(route=100, preferences=50, rating=50, price=50, timing=50)
        high_price = FactorBreakdown(route=50, preferences=50, rating=50, price=100, timing=50)
        assert composite_score(high_route, self.weights) > composite_score(high_price, self.weights)


class TestScoreFactors:
    def test_default_cap_when_no_max_price(self):
        intent = make_intent(max_price=None)
        trip = make_trip(price_per_seat=125)
        factors = score_factors(intent, trip, NOW, RankingConfig(), TextContainmentRoute())
        assert factors.price == 75

    def test_breakdown(self):
        factors = score_factors(
            make_intent(), make_trip(), NOW, RankingConfig(), TextContainmentRoute(),
        )
        assert factors == FactorBreakdown(
            route=100, preferences=100, rating=96, price=50, timing=100,
        )
