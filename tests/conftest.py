"""Shared test helpers."""

from comment_sentiment.models import Position, UastChange, UastNode


def comment(token: str, start: int | None, end: int | None = None) -> UastNode:
    """Build a comment node spanning the given lines."""
    return UastNode(
        internal_type="Comment",
        token=token,
        roles=["Comment"],
        start_position=Position(line=start) if start is not None else None,
        end_position=Position(line=end) if end is not None else None,
    )


def file_tree(*children: UastNode) -> UastNode:
    """Wrap nodes into a file root node."""
    return UastNode(internal_type="File", roles=["File"], children=list(children))


def added_file(*children: UastNode, path: str = "main.go") -> UastChange:
    return UastChange(path=path, before=None, after=file_tree(*children))


class FakeScorer:
    """Scorer returning canned scores per text, recording each call."""

    def __init__(self, scores: dict[str, float] | None = None, default: float = 0.9):
        self.scores = scores or {}
        self.default = default
        self.calls: list[list[str]] = []

    def __call__(self, texts, progress=None):
        self.calls.append(list(texts))
        result = []
        for pos, text in enumerate(texts, 1):
            result.append(self.scores.get(text, self.default))
            if progress is not None:
                progress(pos, len(texts))
        return result
