"""Unit tests for the ranking service."""

from datetime import datetime, timedelta, timezone

from memorylane.models import MemoryEvent
from memorylane.services.ranking import engagement_score, matches_query, rank_events

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_event(
    event_id: str,
    title: str = "Trip",
    recipient_name: str = "Sam",
    occasion: str = "Birthday",
    views: int = 0,
    likes: int = 0,
    age_days: int = 0,
) -> MemoryEvent:
    return MemoryEvent(
        id=event_id,
        user_id="user-1",
        title=title,
        recipient_name=recipient_name,
        occasion=occasion,
        views=views,
        likes=likes,
        created_at=BASE_TIME - timedelta(days=age_days),
    )


class TestEngagementScore:
    """Tests for the score formula."""

    def test_views_count_once(self) -> None:
        assert engagement_score(make_event("a", views=10)) == 10

    def test_likes_count_twice(self) -> None:
        assert engagement_score(make_event("b", likes=6)) == 12

    def test_combined(self) -> None:
        assert engagement_score(make_event("c", views=3, likes=4)) == 11


class TestMatchesQuery:
    """Tests for query filtering."""

    def setup_method(self) -> None:
        self.event = make_event(
            "a", title="Summer in Lisbon", recipient_name="Grandma Rosa", occasion="Anniversary"
        )

    def test_matches_title_case_insensitive(self) -> None:
        assert matches_query(self.event, "LISBON")

    def test_matches_recipient(self) -> None:
        assert matches_query(self.event, "rosa")

    def test_matches_occasion(self) -> None:
        assert matches_query(self.event, "anniv")

    def test_substring_inside_word(self) -> None:
        assert matches_query(self.event, "umme")

    def test_no_match(self) -> None:
        assert not matches_query(self.event, "wedding")

    def test_empty_query_matches(self) -> None:
        assert matches_query(self.event, "")

    def test_whitespace_only_query_is_matched_literally(self) -> None:
        assert matches_query(self.event, " ")
        assert not matches_query(self.event, "   ")

    def test_query_is_not_trimmed(self) -> None:
        assert matches_query(self.event, "in lisbon")
        assert not matches_query(self.event, "  lisbon ")


class TestRankEvents:
    """Tests for ordering and scoring of results."""

    def test_higher_score_ranks_first(self) -> None:
        a = make_event("a", title="Beach day", views=10, likes=0)
        b = make_event("b", title="Beach party", views=0, likes=6)
        results = rank_events([a, b], "beach")
        assert [hit.event.id for hit in results] == ["b", "a"]
        assert [hit.score for hit in results] == [12, 10]

    def test_filters_non_matching(self) -> None:
        a = make_event("a", title="Beach day")
        b = make_event("b", title="Ski trip", occasion="Holiday")
        results = rank_events([a, b], "beach")
        assert [hit.event.id for hit in results] == ["a"]

    def test_non_matching_query_returns_empty(self) -> None:
        assert rank_events([make_event("a")], "zzz") == []

    def test_empty_collection_returns_empty(self) -> None:
        assert rank_events([], "") == []
        assert rank_events([], "beach") == []

    def test_empty_query_lists_everything_with_real_scores(self) -> None:
        a = make_event("a", views=5)
        b = make_event("b", likes=1)
        c = make_event("c")
        results = rank_events([c, b, a], "")
        assert [hit.event.id for hit in results] == ["a", "b", "c"]
        assert [hit.score for hit in results] == [5, 2, 0]

    def test_trailing_space_is_part_of_query(self) -> None:
        sawyer = make_event("a", title="Tom Sawyer party")
        tomorrow = make_event("b", title="Tomorrow never comes")
        assert [hit.event.id for hit in rank_events([sawyer, tomorrow], "tom ")] == ["a"]
        assert len(rank_events([sawyer, tomorrow], "tom")) == 2

    def test_ties_broken_by_newest_first(self) -> None:
        old = make_event("old", views=4, age_days=10)
        new = make_event("new", views=4, age_days=1)
        results = rank_events([old, new], "")
        assert [hit.event.id for hit in results] == ["new", "old"]

    def test_full_ties_broken_by_id(self) -> None:
        events = [make_event(event_id, views=3) for event_id in ["c", "a", "b"]]
        results = rank_events(events, "trip")
        assert [hit.event.id for hit in results] == ["a", "b", "c"]

    def test_order_is_reproducible(self) -> None:
        events = [make_event(event_id, views=3) for event_id in ["y", "x", "z"]]
        first = [hit.event.id for hit in rank_events(events, "")]
        second = [hit.event.id for hit in rank_events(list(reversed(events)), "")]
        assert first == second == ["x", "y", "z"]

    def test_does_not_mutate_input(self) -> None:
        events = [make_event("b", views=1), make_event("a", views=2)]
        rank_events(events, "")
        assert [event.id for event in events] == ["b", "a"]
