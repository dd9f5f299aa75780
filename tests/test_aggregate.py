"""Tests for per-day accumulation and score reduction."""

import pytest

from comment_sentiment.sentiment import DayAggregator, deadzone, reduce_day_scores


class TestDayAggregator:
    """Test the accumulation phase."""

    def test_add_creates_and_appends(self):
        aggregator = DayAggregator()
        aggregator.add(5, ["a"])
        aggregator.add(5, ["b", "c"])
        aggregator.add(2, [])
        assert aggregator.comments(5) == ["a", "b", "c"]
        assert aggregator.comments(2) == []
        assert aggregator.days() == [2, 5]
        assert aggregator.total == 3
        assert len(aggregator) == 2

    def test_unknown_day(self):
        assert DayAggregator().comments(1) == []


class TestReduceDayScores:
    """Test the deadzone reduction."""

    def test_mixed_day(self):
        """0.6 falls into (0.25, 0.75) and is ignored."""
        scored = [(5, [("bad", 0.1), ("meh", 0.6), ("good", 0.9)])]
        result = reduce_day_scores(scored, gap=0.5, commits_by_day={5: ["abc", "def"]})
        assert list(result.days) == [5]
        day = result.days[5]
        assert day.score == pytest.approx(0.5)
        assert day.comments == ["bad", "good"]
        assert day.commits == ["abc", "def"]

    def test_neutral_day_dropped(self):
        result = reduce_day_scores([(3, [("meh", 0.5)]), (4, [("great", 1.0)])], gap=0.5)
        assert 3 not in result.days
        assert list(result.days) == [4]

    def test_empty_day_dropped(self):
        assert reduce_day_scores([(1, [])]).days == {}

    @pytest.mark.parametrize("gap", [0.0, 0.2, 0.5, 0.9])
    def test_boundaries_are_kept(self, gap):
        low, high = deadzone(gap)
        result = reduce_day_scores([(1, [("low", low), ("high", high)])], gap=gap)
        assert result.days[1].comments == ["low", "high"]

    @pytest.mark.parametrize("gap", [0.1, 0.5, 0.9])
    def test_inside_is_excluded(self, gap):
        low, high = deadzone(gap)
        inside = [("a", low + 1e-6), ("b", 0.5), ("c", high - 1e-6)]
        assert reduce_day_scores([(1, inside)], gap=gap).days == {}

    def test_zero_gap_keeps_everything(self):
        result = reduce_day_scores([(1, [("a", 0.5), ("b", 0.3)])], gap=0.0)
        assert result.days[1].comments == ["a", "b"]

    def test_missing_commits(self):
        result = reduce_day_scores([(9, [("x", 0.0)])])
        assert result.days[9].commits == []
        assert result.days[9].score == 0.0

    def test_deadzone(self):
        assert deadzone(0.5) == (0.25, 0.75)
