"""Pydantic models for the commit stream and the sentiment result."""

from __future__ import annotations

import pyarrow as pa
from pydantic import BaseModel, Field, field_validator


class Position(BaseModel):
    """Source position of a UAST node."""
    line: int
    col: int = 0
    offset: int = 0


class UastNode(BaseModel):
    """A node of a structural (UAST) tree as produced by the source parser."""
    internal_type: str = ""
    token: str = ""
    roles: list[str] = Field(default_factory=list)
    start_position: Position | None = None
    end_position: Position | None = None
    children: list[UastNode] = Field(default_factory=list)

    @property
    def start_line(self) -> int | None:
        return self.start_position.line if self.start_position else None

    @property
    def end_line(self) -> int | None:
        return self.end_position.line if self.end_position else None


class UastChange(BaseModel):
    """Before and after trees of one changed file."""
    path: str = ""
    before: UastNode | None = None  # None for added files
    after: UastNode | None = None  # None for deleted files


class CommitRecord(BaseModel):
    """One commit of the stream delivered by the traversal engine."""
    hash: str
    day: int
    changes: list[UastChange] = Field(default_factory=list)


class DaySentiment(BaseModel):
    """Aggregated sentiment of a single day."""
    score: float  # 0 = most negative, 1 = most positive
    comments: list[str]
    commits: list[str] = Field(default_factory=list)

    @field_validator("score")
    @classmethod
    def _float32(cls, value: float) -> float:
        # Binary output stores float32; keep memory and wire values identical
        return pa.scalar(value, type=pa.float32()).as_py()


class CommentSentimentResult(BaseModel):
    """Sentiment by day. Days without retained comments are absent."""
    days: dict[int, DaySentiment] = Field(default_factory=dict)

    def sorted_days(self) -> list[int]:
        return sorted(self.days)

    @property
    def emotions_by_day(self) -> dict[int, float]:
        return {day: value.score for day, value in self.days.items()}

    @property
    def comments_by_day(self) -> dict[int, list[str]]:
        return {day: value.comments for day, value in self.days.items()}
