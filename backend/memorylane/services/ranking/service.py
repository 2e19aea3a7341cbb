"""Search and ranking of memory events.

Filters events by a case-insensitive substring match and orders the hits by
engagement:

    score = views * 1 + likes * 2

Ordering is total: score descending, then newest ``created_at`` first, then
event id ascending. Every returned hit carries its real engagement score,
including the unfiltered listing produced by an empty query.

All functions here are pure and safe to call from several threads at once.
"""

import logging
from collections.abc import Iterable

from memorylane.models import MemoryEvent, ScoredEvent

logger = logging.getLogger(__name__)

VIEW_WEIGHT = 1
LIKE_WEIGHT = 2


def engagement_score(event: MemoryEvent) -> float:
    """Weighted engagement of a single event."""
    return float(event.views * VIEW_WEIGHT + event.likes * LIKE_WEIGHT)


def matches_query(event: MemoryEvent, query: str) -> bool:
    """Check whether ``query`` occurs in the title, recipient or occasion.

    The comparison is case-insensitive and whitespace is significant. Only
    the empty string matches everything.
    """
    normalized = query.lower()
    if not normalized:
        return True
    return (
        normalized in event.title.lower()
        or normalized in event.recipient_name.lower()
        or normalized in event.occasion.lower()
    )


def _sort_key(hit: ScoredEvent) -> tuple[float, float, str]:
    return (-hit.score, -hit.event.created_at.timestamp(), hit.event.id)


def rank_events(events: Iterable[MemoryEvent], query: str = "") -> list[ScoredEvent]:
    """Filter events by ``query`` and rank them by engagement.

    Args:
        events: Candidate events.
        query: Raw search input, matched as typed apart from case. An empty
            query returns every event.

    Returns:
        Scored hits, best first. Empty when nothing matches.
    """
    hits = [
        ScoredEvent(event=event, score=engagement_score(event))
        for event in events
        if matches_query(event, query)
    ]
    hits.sort(key=_sort_key)
    logger.debug(f"[SEARCH] query={query!r} hits={len(hits)}")
    return hits
