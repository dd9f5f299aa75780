"""Analysis settings loaded from YAML.

Example `sentiment.yaml`:

    sentiment:
      min_comment_length: 20
      gap: 0.5

Values are not validated here; the analysis clamps invalid ones when it is
configured.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from .config import env_overrides
from .pipeline.comment_sentiment import CONFIG_GAP, CONFIG_MIN_LENGTH
from .sentiment.aggregate import DEFAULT_SENTIMENT_GAP
from .sentiment.filters import DEFAULT_MIN_COMMENT_LENGTH

CONFIG_CANDIDATES = ["sentiment.yaml", ".sentiment.yaml", "sentiment.yml", ".sentiment.yml"]


@dataclass
class AnalysisSettings:
    """Settings of the comment sentiment analysis."""

    min_comment_length: int = DEFAULT_MIN_COMMENT_LENGTH
    gap: float = DEFAULT_SENTIMENT_GAP

    @classmethod
    def load(cls, path: Path | str | None = None) -> AnalysisSettings:
        """Load settings from YAML file or return defaults.

        Only discovered locations fall back to defaults; an explicit path
        that does not exist raises FileNotFoundError.
        """
        if path is None:
            # Try common locations
            for candidate in CONFIG_CANDIDATES:
                if Path(candidate).exists():
                    path = candidate
                    break

        if path is None:
            return cls.default()
        if not Path(path).exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisSettings:
        """Create settings from dictionary (e.g., parsed YAML)."""
        section = data.get("sentiment", {}) or {}
        return cls(
            min_comment_length=int(section.get("min_comment_length", DEFAULT_MIN_COMMENT_LENGTH)),
            gap=float(section.get("gap", DEFAULT_SENTIMENT_GAP)),
        )

    @classmethod
    def default(cls) -> AnalysisSettings:
        return cls()

    def with_env(self) -> AnalysisSettings:
        """Apply COMMENT_SENTIMENT_* environment overrides."""
        overrides = env_overrides()
        return replace(
            self,
            min_comment_length=int(overrides.get("min_comment_length", self.min_comment_length)),
            gap=float(overrides.get("gap", self.gap)),
        )

    def to_facts(self) -> dict[str, Any]:
        """Facts for CommentSentimentAnalysis.configure()."""
        return {
            CONFIG_MIN_LENGTH: self.min_comment_length,
            CONFIG_GAP: self.gap,
        }

    def to_yaml(self) -> str:
        """Serialize settings to YAML."""
        data = {
            "sentiment": {
                "min_comment_length": self.min_comment_length,
                "gap": self.gap,
            }
        }
        return yaml.dump(data, default_flow_style=False, sort_keys=False)
