"""Pipeline item interface and the registry of known analyses.

A pipeline item declares which entities it needs from upstream items
(`requires`) and which it hands downstream (`provides`), accepts its
configuration as a dict of "facts", consumes one commit at a time and
produces its result once in `finalize`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, BinaryIO, TextIO

# Entities provided by the traversal engine
DEPENDENCY_COMMIT = "commit"
DEPENDENCY_DAY = "day"
DEPENDENCY_UAST_CHANGES = "changes"

# Facts shared by every item
FACT_COMMITS_BY_DAY = "CommitsByDay"

FEATURE_UAST = "uast"


class OptionType(Enum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"

    def convert(self, value: Any) -> Any:
        if self is OptionType.BOOL:
            if isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
            return bool(value)
        if self is OptionType.INT:
            return int(value)
        if self is OptionType.FLOAT:
            return float(value)
        return str(value)


@dataclass
class ConfigurationOption:
    """A public, changeable property of a pipeline item."""

    name: str  # e.g., "CommentSentiment.Gap"
    description: str
    flag: str  # command line switch without dashes
    type: OptionType
    default: Any


class PipelineItem(ABC):
    """Interface every analysis implements."""

    name: str = ""

    def provides(self) -> list[str]:
        return []

    @abstractmethod
    def requires(self) -> list[str]: ...

    def features(self) -> list[str]:
        return []

    def list_configuration_options(self) -> list[ConfigurationOption]:
        return []

    def flag(self) -> str:
        return self.name.lower()

    @abstractmethod
    def configure(self, facts: dict[str, Any]) -> None: ...

    @abstractmethod
    def initialize(self, repository: Any = None) -> None:
        """Reset caches before a series of consume() calls."""

    @abstractmethod
    def consume(self, deps: dict[str, Any]) -> dict[str, Any]:
        """Process the next commit; return the entities listed in provides()."""

    @abstractmethod
    def finalize(self) -> Any:
        """Return the analysis result. No consume() calls follow."""

    @abstractmethod
    def serialize(self, result: Any, binary: bool, writer: TextIO | BinaryIO) -> None: ...


class Registry:
    """Maps item names to their classes."""

    def __init__(self):
        self._items: dict[str, type[PipelineItem]] = {}

    def register(self, item: type[PipelineItem]) -> type[PipelineItem]:
        if not item.name:
            raise ValueError(f"{item.__name__} has no name")
        self._items[item.name] = item
        return item

    def get(self, name: str) -> type[PipelineItem]:
        return self._items[name]

    def by_flag(self, flag: str) -> type[PipelineItem]:
        for item in self._items.values():
            if item().flag() == flag:
                return item
        raise KeyError(flag)

    def summon(self, name: str) -> PipelineItem:
        return self.get(name)()

    def names(self) -> list[str]:
        return sorted(self._items)

    def __contains__(self, name: str) -> bool:
        return name in self._items


registry = Registry()
