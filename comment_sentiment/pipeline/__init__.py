"""Pipeline items and their registry."""

from .comment_sentiment import CONFIG_GAP, CONFIG_MIN_LENGTH, CommentSentimentAnalysis
from .item import ConfigurationOption, OptionType, PipelineItem, Registry, registry
from .runner import Pipeline, commits_by_day, load_commits_by_day, read_commits

__all__ = [
    # Interface
    "PipelineItem",
    "ConfigurationOption",
    "OptionType",
    "Registry",
    "registry",
    # Items
    "CommentSentimentAnalysis",
    "CONFIG_GAP",
    "CONFIG_MIN_LENGTH",
    # Running
    "Pipeline",
    "read_commits",
    "commits_by_day",
    "load_commits_by_day",
]
