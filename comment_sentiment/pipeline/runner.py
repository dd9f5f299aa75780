"""Drives pipeline items over a recorded commit stream."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, BinaryIO, TextIO

from ..models import CommitRecord
from .item import DEPENDENCY_COMMIT, DEPENDENCY_DAY, DEPENDENCY_UAST_CHANGES, FACT_COMMITS_BY_DAY, PipelineItem

logger = logging.getLogger(__name__)

ENGINE_PROVIDES = (DEPENDENCY_COMMIT, DEPENDENCY_DAY, DEPENDENCY_UAST_CHANGES)


def read_commits(path: Path | str) -> Iterator[CommitRecord]:
    """Read a JSON-lines commit stream, one CommitRecord per line."""
    with open(path, encoding="utf-8") as f:
        for line in f:
            if line.strip():
                yield CommitRecord.model_validate_json(line)


def commits_by_day(commits: Iterable[CommitRecord]) -> dict[int, list[str]]:
    """Group commit hashes by day bucket, keeping stream order."""
    result: dict[int, list[str]] = {}
    for commit in commits:
        result.setdefault(commit.day, []).append(commit.hash)
    return result


def load_commits_by_day(path: Path | str) -> dict[int, list[str]]:
    """Load a {day: [hash, ...]} JSON mapping."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return {int(day): list(hashes) for day, hashes in data.items()}


class Pipeline:
    """Feeds commits to items in order and collects their results."""

    def __init__(self, items: list[PipelineItem]):
        self.items = items

    def _check_dependencies(self) -> None:
        available = set(ENGINE_PROVIDES)
        for item in self.items:
            missing = [dep for dep in item.requires() if dep not in available]
            if missing:
                raise ValueError(f"{item.name} requires unavailable entities: {', '.join(missing)}")
            available.update(item.provides())

    def run(self, commits: Iterable[CommitRecord], facts: dict[str, Any] | None = None) -> dict[str, Any]:
        """Configure, initialize, consume every commit and finalize.

        Returns the results keyed by item name.
        """
        commits = list(commits)
        facts = dict(facts or {})
        facts.setdefault(FACT_COMMITS_BY_DAY, commits_by_day(commits))
        self._check_dependencies()

        for item in self.items:
            item.configure(facts)
            item.initialize()

        for index, commit in enumerate(commits, 1):
            deps: dict[str, Any] = {
                DEPENDENCY_COMMIT: commit,
                DEPENDENCY_DAY: commit.day,
                DEPENDENCY_UAST_CHANGES: commit.changes,
            }
            for item in self.items:
                deps.update(item.consume(deps) or {})
            if index % 1000 == 0:
                logger.info(f"Consumed {index} commits")
        logger.info(f"Consumed {len(commits)} commits")

        return {item.name: item.finalize() for item in self.items}

    def serialize(self, results: dict[str, Any], binary: bool, writer: TextIO | BinaryIO) -> None:
        """Write every result; text output gets a header line per item."""
        for item in self.items:
            if binary:
                item.serialize(results[item.name], True, writer)
            else:
                writer.write(f"{item.name}:\n")
                item.serialize(results[item.name], False, writer)
