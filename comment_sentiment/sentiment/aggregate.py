"""Per-day accumulation of comments and reduction of their scores."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ..models import CommentSentimentResult, DaySentiment
from .scoring import ScoredDay

DEFAULT_SENTIMENT_GAP = 0.5


class DayAggregator:
    """Collects filtered comments keyed by day bucket.

    Only accumulates: scoring happens once, after the whole stream.
    """

    def __init__(self):
        self._comments: dict[int, list[str]] = {}

    def add(self, day: int, comments: Iterable[str]) -> None:
        self._comments.setdefault(day, []).extend(comments)

    def days(self) -> list[int]:
        return sorted(self._comments)

    def comments(self, day: int) -> list[str]:
        return self._comments.get(day, [])

    def as_dict(self) -> dict[int, list[str]]:
        return self._comments

    @property
    def total(self) -> int:
        return sum(len(comments) for comments in self._comments.values())

    def __len__(self) -> int:
        return len(self._comments)


def deadzone(gap: float) -> tuple[float, float]:
    """Bounds of the neutral interval; scores strictly inside are dropped."""
    return 0.5 * (1 - gap), 0.5 * (1 + gap)


def reduce_day_scores(
    scored: Iterable[ScoredDay],
    gap: float = DEFAULT_SENTIMENT_GAP,
    commits_by_day: Mapping[int, Sequence[str]] | None = None,
) -> CommentSentimentResult:
    """Average the confident scores of each day.

    Scores on the deadzone boundary are kept. Days left without any
    comment are omitted from the result.
    """
    commits_by_day = commits_by_day or {}
    low, high = deadzone(gap)
    result = CommentSentimentResult()
    for day, pairs in scored:
        kept = [(comment, score) for comment, score in pairs if score <= low or score >= high]
        if not kept:
            continue
        result.days[day] = DaySentiment(
            score=sum(score for _, score in kept) / len(kept),
            comments=[comment for comment, _ in kept],
            commits=list(commits_by_day.get(day, [])),
        )
    return result
