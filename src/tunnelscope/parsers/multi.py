"""Multi-format DNS log parser.

Detects the shape of arbitrary log content and hands raw field maps to the
normalizer. Strategies are tried in registry order until one yields
records.
"""

from dataclasses import dataclass, field

from tunnelscope.core.errors import NoValidRecordsError
from tunnelscope.core.logging import debug
from tunnelscope.models.record import DNSQueryRecord
from tunnelscope.normalizer.query import LogNormalizer
from tunnelscope.parsers.base import ParseInput, ParseStrategy, StrategyRegistry


@dataclass
class ParseResult:
    """Outcome of a parse run."""

    records: list[DNSQueryRecord] = field(default_factory=list)
    strategy: str | None = None
    skipped: int = 0


class MultiFormatParser:
    """Parses JSON documents, JSON lines, CSV and free-text DNS logs."""

    def __init__(
        self,
        normalizer: LogNormalizer | None = None,
        strategies: list[type[ParseStrategy]] | None = None,
    ) -> None:
        self.normalizer = normalizer or LogNormalizer()
        strategy_classes = strategies if strategies is not None else StrategyRegistry.ordered()
        self.strategies = [cls(self.normalizer) for cls in strategy_classes]

    def parse(self, content: str) -> list[DNSQueryRecord]:
        """Parse raw content into normalized records.

        Returns an empty list for empty or whitespace-only content.

        Raises:
            NoValidRecordsError: If content is non-empty but no strategy
                produced a record
        """
        return self.parse_detailed(content).records

    def parse_detailed(self, content: str, source_name: str | None = None) -> ParseResult:
        """Parse raw content, reporting the strategy used and skipped entries."""
        source = ParseInput(content)
        if not source.content:
            return ParseResult()

        for strategy in self.strategies:
            result = strategy.parse(source)
            if result is None:
                continue

            if result.records:
                debug(
                    "Parsed DNS log",
                    strategy=strategy.name,
                    records=len(result.records),
                    skipped=result.skipped,
                )
                return ParseResult(records=result.records, strategy=strategy.name, skipped=result.skipped)

            if strategy.terminal:
                break

            debug("Strategy produced no records", strategy=strategy.name)

        raise NoValidRecordsError(source=source_name, lines=len(source.lines))
