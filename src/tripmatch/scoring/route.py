"""Route factor — how well a trip's endpoints fit the rider's search.

The route provider is a swappable strategy.  The default one compares
place names by case-insensitive containment, a coarse stand-in for real
map distance.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

BOTH_ENDS = 100
ONE_END = 60
NO_ENDS = 20


class RouteCompatibility(Protocol):
    def score(
        self,
        intent_origin: str,
        intent_destination: str,
        trip_origin: str,
        trip_destination: str,
    ) -> int: ...


def places_overlap(a: str, b: str) -> bool:
    a_l = a.lower()
    b_l = b.lower()
    return a_l in b_l or b_l in a_l


class TextContainmentRoute:
    """Score endpoints by substring containment in either direction."""

    def score(
        self,
        intent_origin: str,
        intent_destination: str,
        trip_origin: str,
        trip_destination: str,
    ) -> int:
        from_match = places_overlap(intent_origin, trip_origin)
        to_match = places_overlap(intent_destination, trip_destination)

        if from_match and to_match:
            result = BOTH_ENDS
        elif from_match or to_match:
            result = ONE_END
        else:
            result = NO_ENDS

        logger.debug(
            "Route %s->%s vs %s->%s: from=%s to=%s -> %d",
            intent_origin, intent_destination, trip_origin, trip_destination,
            from_match, to_match, result,
        )
        return result
