"""Comment sentiment through time.

Collects the new comments of every commit, cleans them and groups them by
day. Once the history has been traversed, all comments are scored in one
batch and the confident scores are averaged per day.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, TextIO

from ..extractors.comments import ChangesExtractor, is_comment
from ..models import CommentSentimentResult, UastChange
from ..sentiment.aggregate import DEFAULT_SENTIMENT_GAP, DayAggregator, reduce_day_scores
from ..sentiment.filters import DEFAULT_MIN_COMMENT_LENGTH, MIN_COMMENT_LENGTH_FLOOR, filter_comments
from ..sentiment.merge import merge_comments
from ..sentiment.progress import RichProgress
from ..sentiment.scoring import Scorer, score_batch
from ..serialization import serialize_binary, serialize_text
from .item import (
    DEPENDENCY_DAY,
    DEPENDENCY_UAST_CHANGES,
    FACT_COMMITS_BY_DAY,
    FEATURE_UAST,
    ConfigurationOption,
    OptionType,
    PipelineItem,
    registry,
)

logger = logging.getLogger(__name__)

CONFIG_MIN_LENGTH = "CommentSentiment.MinLength"
CONFIG_GAP = "CommentSentiment.Gap"


class CommentSentimentAnalysis(PipelineItem):
    """Measures comment sentiment through time."""

    name = "Sentiment"

    def __init__(self, scorer: Scorer | None = None, show_progress: bool = False):
        self.min_comment_length = DEFAULT_MIN_COMMENT_LENGTH
        self.gap = DEFAULT_SENTIMENT_GAP
        self.scorer = scorer
        self.show_progress = show_progress
        self.commits_by_day: dict[int, list[str]] = {}
        self._aggregator = DayAggregator()
        self._extractor = ChangesExtractor(is_comment)

    def requires(self) -> list[str]:
        return [DEPENDENCY_UAST_CHANGES, DEPENDENCY_DAY]

    def features(self) -> list[str]:
        return [FEATURE_UAST]

    def list_configuration_options(self) -> list[ConfigurationOption]:
        return [
            ConfigurationOption(
                name=CONFIG_MIN_LENGTH,
                description="Minimum length of the comment to be analyzed.",
                flag="min-comment-len",
                type=OptionType.INT,
                default=DEFAULT_MIN_COMMENT_LENGTH,
            ),
            ConfigurationOption(
                name=CONFIG_GAP,
                description=(
                    "Sentiment value threshold, values between 0.5 - X/2 and 0.5 + X/2 will not be "
                    "considered. Must be >= 0 and < 1. The purpose is to exclude neutral comments."
                ),
                flag="sentiment-gap",
                type=OptionType.FLOAT,
                default=DEFAULT_SENTIMENT_GAP,
            ),
        ]

    def flag(self) -> str:
        return "sentiment"

    def configure(self, facts: dict[str, Any]) -> None:
        if facts.get(CONFIG_GAP) is not None:
            self.gap = float(facts[CONFIG_GAP])
        if facts.get(CONFIG_MIN_LENGTH) is not None:
            self.min_comment_length = int(facts[CONFIG_MIN_LENGTH])
        self._validate()
        commits_by_day = facts.get(FACT_COMMITS_BY_DAY) or {}
        self.commits_by_day = {int(day): list(commits) for day, commits in commits_by_day.items()}

    def _validate(self) -> None:
        if not 0 <= self.gap < 1:
            logger.warning(
                f"Sentiment gap is out of range: {self.gap} => reset to the default {DEFAULT_SENTIMENT_GAP}"
            )
            self.gap = DEFAULT_SENTIMENT_GAP
        if self.min_comment_length < MIN_COMMENT_LENGTH_FLOOR:
            logger.warning(
                f"Comment minimum length is too small: {self.min_comment_length} "
                f"=> reset to the default {DEFAULT_MIN_COMMENT_LENGTH}"
            )
            self.min_comment_length = DEFAULT_MIN_COMMENT_LENGTH

    def initialize(self, repository: Any = None) -> None:
        self._aggregator = DayAggregator()
        self._validate()

    def comments_of(self, changes: list[UastChange]) -> list[str]:
        """Extract, merge and filter the new comments of one commit."""
        comments = []
        for nodes in self._extractor.extract_all(changes):
            comments.extend(merge_comments(nodes))
        return filter_comments(comments, self.min_comment_length)

    def consume(self, deps: dict[str, Any]) -> dict[str, Any]:
        changes = deps[DEPENDENCY_UAST_CHANGES]
        day = deps[DEPENDENCY_DAY]
        self._aggregator.add(day, self.comments_of(changes))
        return {}

    def finalize(self) -> CommentSentimentResult:
        """Score all collected comments in one batch and reduce them by day.

        Raises ScoringError if the scorer fails; no partial result is built.
        """
        scorer = self.scorer
        if scorer is None:
            from ..sentiment.vader import VaderScorer

            scorer = VaderScorer()
        by_day = self._aggregator.as_dict()
        if self.show_progress:
            with RichProgress() as progress:
                scored = score_batch(by_day, scorer, progress)
        else:
            scored = score_batch(by_day, scorer)
        result = reduce_day_scores(scored, self.gap, self.commits_by_day)
        logger.info(
            f"Sentiment computed for {len(result.days)} of {len(by_day)} days "
            f"({self._aggregator.total} comments)"
        )
        return result

    def serialize(self, result: CommentSentimentResult, binary: bool, writer: TextIO | BinaryIO) -> None:
        """Write the result as text lines or as an Arrow IPC stream."""
        if binary:
            serialize_binary(result, writer)
        else:
            serialize_text(result, writer)


registry.register(CommentSentimentAnalysis)
