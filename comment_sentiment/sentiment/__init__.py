"""Comment cleanup, batch scoring and per-day aggregation.

This package provides:
- Merging of adjacent comment lines into single comments
- Heuristic filters that drop docstrings, code and license headers
- Accumulation of comments by day and one-shot batch scoring
- Reduction of scores to a per-day mean outside a neutral deadzone
"""

from .aggregate import DEFAULT_SENTIMENT_GAP, DayAggregator, deadzone, reduce_day_scores
from .filters import DEFAULT_MIN_COMMENT_LENGTH, clean_comment, filter_comments
from .merge import merge_comments
from .scoring import Scorer, ScoringError, score_batch

__all__ = [
    # Cleanup
    "merge_comments",
    "clean_comment",
    "filter_comments",
    "DEFAULT_MIN_COMMENT_LENGTH",
    # Aggregation
    "DayAggregator",
    "deadzone",
    "reduce_day_scores",
    "DEFAULT_SENTIMENT_GAP",
    # Scoring
    "Scorer",
    "ScoringError",
    "score_batch",
]
