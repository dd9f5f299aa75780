"""Merging of vertically adjacent comment nodes into single comments."""

from __future__ import annotations

from collections.abc import Iterable

from ..models import UastNode


def merge_comments(nodes: Iterable[UastNode]) -> list[str]:
    """Join comment nodes on contiguous lines into one string per block.

    Nodes are grouped by start line; a block continues while the next line
    is at most one past the furthest end line seen on the current line.
    Nodes without a start position are skipped. Tokens of the same line
    keep their traversal order.
    """
    lines: dict[int, list[UastNode]] = {}
    for node in nodes:
        lineno = node.start_line
        if lineno is None:
            continue
        lines.setdefault(lineno, []).append(node)

    line_nums = sorted(lines)
    merged = []
    buffer: list[str] = []
    for i, line in enumerate(line_nums):
        max_end = line
        for node in lines[line]:
            end = node.end_line
            if end is not None and end > max_end:
                max_end = end
            token = node.token.strip()
            if token:
                buffer.append(token)
        if i < len(line_nums) - 1 and line_nums[i + 1] <= max_end + 1:
            continue
        merged.append("\n".join(buffer))
        buffer = []
    return merged
