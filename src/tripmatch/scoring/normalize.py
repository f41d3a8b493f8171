"""Shared normalization for factor scores."""

from __future__ import annotations

import math


def round_score(value: float) -> int:
    """Round half-up to an integer and clamp to [0, 100]."""
    # weighted float sums can land just below an exact .5
    rounded = int(math.floor(round(value, 9) + 0.5))
    return min(max(rounded, 0), 100)
