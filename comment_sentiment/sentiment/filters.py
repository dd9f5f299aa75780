"""Heuristics that drop comments which are not natural language prose.

Each merged comment goes through the same chain: docstring rejection,
function call stripping, character allow-list, minimum length, whitespace
collapsing, letter density and license detection. The order matters:
later checks look at the output of the earlier transforms.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

DEFAULT_MIN_COMMENT_LENGTH = 20
MIN_COMMENT_LENGTH_FLOOR = 10

# Share of [a-zA-Z] characters below which a comment is considered code
COMMENT_LETTERS_RATIO = 0.6

_FILTERED_FIRST_CHAR = re.compile(r"[^a-zA-Z0-9]")
_FILTERED_CHARS = re.compile(r"[^-a-zA-Z0-9_:;,./?!#&%+*=\n \t()]+")
_LETTERS = re.compile(r"[a-zA-Z]+")
_FUNCTION_NAME = re.compile(r"\s*[a-zA-Z_][a-zA-Z_0-9]*\(\)")
_WHITESPACE = re.compile(r"\s+")
_LICENSE = re.compile(r"[lics]en[cs][ei]|copyright|©", re.IGNORECASE)


def count_letters(text: str) -> int:
    """Number of ASCII letters in text."""
    return sum(len(match) for match in _LETTERS.findall(text))


def clean_comment(comment: str, min_length: int = DEFAULT_MIN_COMMENT_LENGTH) -> str | None:
    """Clean a single merged comment, or return None if it is rejected."""
    comment = comment.strip()
    # heuristic - we discard docstrings
    if not comment or _FILTERED_FIRST_CHAR.match(comment[0]):
        return None
    # heuristic - remove function names
    comment = _FUNCTION_NAME.sub("", comment)
    comment = _FILTERED_CHARS.sub("", comment)
    if len(comment) < min_length:
        return None
    comment = _WHITESPACE.sub(" ", comment)
    if count_letters(comment) < int(len(comment) * COMMENT_LETTERS_RATIO):
        return None
    if _LICENSE.search(comment):
        return None
    return comment


def filter_comments(comments: Iterable[str], min_length: int = DEFAULT_MIN_COMMENT_LENGTH) -> list[str]:
    """Clean comments, keeping only the survivors in their original order."""
    filtered = []
    for comment in comments:
        cleaned = clean_comment(comment, min_length)
        if cleaned is not None:
            filtered.append(cleaned)
    return filtered
