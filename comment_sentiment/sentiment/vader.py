"""VADER sentiment scorer for source code comments.

VADER (Valence Aware Dictionary and sEntiment Reasoner) is a lexicon based
model that needs no training, which makes it a reasonable default backend.
Its compound score in [-1, 1] is mapped linearly onto [0, 1] so that 0 is
the most negative and 1 the most positive reading.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

import nltk
from nltk.sentiment.vader import SentimentIntensityAnalyzer

from .scoring import ProgressCallback


@lru_cache(maxsize=1)
def _get_analyzer() -> SentimentIntensityAnalyzer:
    """Get or initialize the VADER analyzer.

    Downloads the vader_lexicon on first use if not present.
    """
    try:
        nltk.data.find("sentiment/vader_lexicon.zip")
    except LookupError:
        nltk.download("vader_lexicon", quiet=True)

    return SentimentIntensityAnalyzer()


def compound_to_unit(compound: float) -> float:
    """Map a compound score from [-1, 1] onto [0, 1]."""
    return min(1.0, max(0.0, (compound + 1) / 2))


class VaderScorer:
    """Batch scorer backed by NLTK's VADER analyzer."""

    name = "vader"

    def __call__(self, texts: Sequence[str], progress: ProgressCallback | None = None) -> list[float]:
        analyzer = _get_analyzer()
        total = len(texts)
        scores = []
        for pos, text in enumerate(texts, 1):
            compound = analyzer.polarity_scores(text)["compound"] if text.strip() else 0.0
            scores.append(compound_to_unit(compound))
            if progress is not None:
                progress(pos, total)
        return scores
