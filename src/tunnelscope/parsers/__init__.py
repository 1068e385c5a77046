"""DNS log parsers for Tunnelscope."""

# Import strategies to register them
from tunnelscope.parsers import (
    csv_lines,  # noqa: F401
    json_document,  # noqa: F401
    text_lines,  # noqa: F401
)
from tunnelscope.parsers.base import ParseInput, ParseStrategy, StrategyRegistry, StrategyResult
from tunnelscope.parsers.multi import MultiFormatParser, ParseResult

__all__ = [
    "MultiFormatParser",
    "ParseInput",
    "ParseResult",
    "ParseStrategy",
    "StrategyRegistry",
    "StrategyResult",
]
