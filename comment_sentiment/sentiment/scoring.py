"""Batch scoring of all collected comments in a single scorer call."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Protocol

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class Scorer(Protocol):
    """Maps texts to sentiment scores in [0, 1], 0 being most negative.

    The output must have the same length and order as the input.
    """

    def __call__(
        self, texts: Sequence[str], progress: ProgressCallback | None = None
    ) -> Sequence[float]: ...


class ScoringError(RuntimeError):
    """The batch scorer failed or broke its contract."""


ScoredDay = tuple[int, list[tuple[str, float]]]


def score_batch(
    comments_by_day: Mapping[int, Sequence[str]],
    scorer: Scorer,
    progress: ProgressCallback | None = None,
) -> list[ScoredDay]:
    """Score every comment with one scorer call.

    Days are flattened in ascending order, comments in their per-day order,
    and the scores are mapped back by position.

    Raises:
        ScoringError: The scorer raised, or returned a wrong number of
            scores, or a score outside [0, 1]. No partial result is kept.
    """
    days = sorted(comments_by_day)
    texts = [text for day in days for text in comments_by_day[day]]
    if not texts:
        return [(day, []) for day in days]

    logger.info(f"Scoring {len(texts)} comments from {len(days)} days")
    try:
        scores = list(scorer(texts, progress))
    except Exception as e:
        raise ScoringError(f"Sentiment scorer failed: {e}") from e

    if len(scores) != len(texts):
        raise ScoringError(f"Sentiment scorer returned {len(scores)} scores for {len(texts)} comments")
    for score in scores:
        if not 0 <= score <= 1:
            raise ScoringError(f"Sentiment score out of range: {score}")

    result = []
    pos = 0
    for day in days:
        day_texts = comments_by_day[day]
        result.append((day, list(zip(day_texts, scores[pos:pos + len(day_texts)]))))
        pos += len(day_texts)
    return result
