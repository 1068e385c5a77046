"""Base parse strategy interface for Tunnelscope."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property
from typing import ClassVar

from tunnelscope.core.errors import MissingQueryError
from tunnelscope.core.logging import debug
from tunnelscope.models.record import DNSQueryRecord, FieldMap
from tunnelscope.normalizer.query import LogNormalizer


class ParseInput:
    """Raw log content shared by all strategies of one parse run."""

    def __init__(self, content: str) -> None:
        self.content = content.strip()

    @cached_property
    def lines(self) -> list[str]:
        """Non-empty, non-comment lines, each trimmed."""
        lines = (line.strip() for line in self.content.split("\n"))
        return [line for line in lines if line and not line.startswith("#")]


@dataclass
class StrategyResult:
    """Records produced by one strategy."""

    records: list[DNSQueryRecord] = field(default_factory=list)
    skipped: int = 0


class ParseStrategy(ABC):
    """Base class for log format strategies.

    ``parse`` returns None when the strategy does not apply to the input,
    letting the next strategy try. A terminal strategy ends the search as
    soon as it applies, even with zero records.
    """

    # Strategy metadata (must be set by subclasses)
    name: ClassVar[str]
    version: ClassVar[str]
    priority: ClassVar[int]
    terminal: ClassVar[bool] = False

    def __init__(self, normalizer: LogNormalizer) -> None:
        self.normalizer = normalizer

    @abstractmethod
    def parse(self, source: ParseInput) -> StrategyResult | None:
        """Parse the input, or return None if this format does not apply."""
        ...

    def normalize(self, fields: FieldMap, result: StrategyResult, index: int) -> None:
        """Normalize one field map into result, skipping it if unusable."""
        try:
            result.records.append(self.normalizer.normalize(fields))
        except MissingQueryError:
            result.skipped += 1
            debug("Skipping entry without query", strategy=self.name, index=index)


class StrategyRegistry:
    """Registry of available parse strategies."""

    _strategies: ClassVar[dict[str, type[ParseStrategy]]] = {}

    @classmethod
    def register(cls, strategy_class: type[ParseStrategy]) -> type[ParseStrategy]:
        """Register a strategy class.

        Args:
            strategy_class: Strategy class to register

        Returns:
            The registered class (for use as decorator)
        """
        cls._strategies[strategy_class.name] = strategy_class
        return strategy_class

    @classmethod
    def get(cls, name: str) -> type[ParseStrategy] | None:
        """Get a strategy by name."""
        return cls._strategies.get(name)

    @classmethod
    def ordered(cls) -> list[type[ParseStrategy]]:
        """Registered strategies in the order they should be tried."""
        return sorted(cls._strategies.values(), key=lambda s: s.priority)

    @classmethod
    def names(cls) -> list[str]:
        """Names of registered strategies, in order."""
        return [s.name for s in cls.ordered()]
