"""Environment configuration for the comment sentiment analysis."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def get_cache_dir() -> Path:
    """Get the global cache directory, used for the log file."""
    # Use XDG_CACHE_HOME if set, otherwise ~/.cache
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / "comment-sentiment"
    return Path.home() / ".cache" / "comment-sentiment"


def get_log_file() -> Path:
    return get_cache_dir() / "analysis.log"


# Optional overrides of the YAML settings (unset = not overridden)
ENV_MIN_LENGTH = "COMMENT_SENTIMENT_MIN_LENGTH"
ENV_GAP = "COMMENT_SENTIMENT_GAP"


def env_overrides() -> dict[str, str]:
    """Analysis settings given through the environment or .env."""
    overrides = {}
    if os.environ.get(ENV_MIN_LENGTH):
        overrides["min_comment_length"] = os.environ[ENV_MIN_LENGTH]
    if os.environ.get(ENV_GAP):
        overrides["gap"] = os.environ[ENV_GAP]
    return overrides
