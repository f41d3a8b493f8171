"""Configuration — weights, thresholds, ranking parameters."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings


class FactorWeights(BaseModel):
    route: float = Field(default=0.35, ge=0.0, le=1.0)
    preferences: float = Field(default=0.20, ge=0.0, le=1.0)
    rating: float = Field(default=0.20, ge=0.0, le=1.0)
    price: float = Field(default=0.15, ge=0.0, le=1.0)
    timing: float = Field(default=0.10, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _sum_to_one(self) -> FactorWeights:
        total = self.route + self.preferences + self.rating + self.price + self.timing
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"factor weights must sum to 1.0, got {total:.6f}")
        return self


class TimingBands(BaseModel):
    """Hours-to-departure band edges for the timing factor."""

    too_soon_hours: float = Field(default=2.0, ge=0.0)
    ideal_max_hours: float = 24.0
    near_max_hours: float = 72.0

    @model_validator(mode="after")
    def _increasing(self) -> TimingBands:
        if not self.too_soon_hours < self.ideal_max_hours < self.near_max_hours:
            raise ValueError(
                "timing bands must be strictly increasing: "
                f"{self.too_soon_hours} < {self.ideal_max_hours} < {self.near_max_hours}"
            )
        return self


class ExplanationThresholds(BaseModel):
    route_strong: int = 80
    route_partial: int = 60
    preferences: int = 75
    driver_rating: float = 4.5
    price: int = 70
    seats: int = 2


class RankingConfig(BaseModel):
    weights: FactorWeights = FactorWeights()
    timing_bands: TimingBands = TimingBands()
    thresholds: ExplanationThresholds = ExplanationThresholds()

    default_price_cap: float = Field(default=500.0, gt=0)
    max_reasons: int = Field(default=3, ge=0, le=3)
    match_departure_date: bool = False


class Settings(BaseSettings):
    ranking: RankingConfig = RankingConfig()

    top_k: int | None = Field(default=None, ge=1)
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TRIPMATCH_",
        "env_nested_delimiter": "__",
    }


settings = Settings()
