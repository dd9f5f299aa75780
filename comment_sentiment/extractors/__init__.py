"""Node extractors for UAST trees."""

from .comments import ChangesExtractor, extract_nodes, has_role, is_comment, iter_nodes

__all__ = [
    "ChangesExtractor",
    "extract_nodes",
    "has_role",
    "is_comment",
    "iter_nodes",
]
