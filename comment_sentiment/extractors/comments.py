"""Comment node extraction from UAST trees and file changes."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterator

from ..models import UastChange, UastNode

Selector = Callable[[UastNode], bool]

COMMENT_ROLE = "Comment"


def has_role(role: str) -> Selector:
    """Build a selector matching nodes tagged with the given role."""

    def selector(node: UastNode) -> bool:
        return role in node.roles

    return selector


is_comment = has_role(COMMENT_ROLE)


def iter_nodes(tree: UastNode | None, selector: Selector) -> Iterator[UastNode]:
    """Yield matching nodes in pre-order, the root included."""
    if tree is None:
        return
    stack = [tree]
    while stack:
        node = stack.pop()
        if selector(node):
            yield node
        stack.extend(reversed(node.children))


def extract_nodes(tree: UastNode | None, selector: Selector = is_comment) -> list[UastNode]:
    """Return every node of the tree accepted by the selector."""
    return list(iter_nodes(tree, selector))


def _identity(node: UastNode) -> tuple[str, str, tuple[str, ...]]:
    # Positions are left out: a comment that only moved is not new
    return node.internal_type, node.token, tuple(node.roles)


class ChangesExtractor:
    """Selects nodes that are new or changed in a file change."""

    def __init__(self, selector: Selector = is_comment):
        self.selector = selector

    def extract(self, change: UastChange) -> list[UastNode]:
        """Return selected nodes of the new tree absent from the old one.

        Deleted files yield nothing, added files yield all selected nodes.
        """
        if change.after is None:
            return []
        old = Counter(_identity(node) for node in iter_nodes(change.before, self.selector))
        new = []
        for node in iter_nodes(change.after, self.selector):
            identity = _identity(node)
            # Each old occurrence cancels one new occurrence; extra copies are new
            if old[identity] > 0:
                old[identity] -= 1
                continue
            new.append(node)
        return new

    def extract_all(self, changes: list[UastChange]) -> list[list[UastNode]]:
        """Extract per change, keeping the per-file grouping."""
        return [self.extract(change) for change in changes]
