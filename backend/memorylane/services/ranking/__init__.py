"""Ranking service module.

Engagement-weighted search over memory events.
"""

from .service import (
    LIKE_WEIGHT,
    VIEW_WEIGHT,
    engagement_score,
    matches_query,
    rank_events,
)

__all__ = [
    "LIKE_WEIGHT",
    "VIEW_WEIGHT",
    "engagement_score",
    "matches_query",
    "rank_events",
]
