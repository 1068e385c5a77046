"""Comma-separated DNS log strategy.

Applies when the first line contains a comma and no tab. A first line whose
tokens look like column names is used as the header; otherwise columns are
assumed to be: timestamp, sourceIp, query, type, responseCode.

Fields are split on every comma; quoted fields containing commas are not
supported by these exports.
"""

import re

from tunnelscope.models.record import FieldMap
from tunnelscope.parsers.base import ParseInput, ParseStrategy, StrategyRegistry, StrategyResult

STRATEGY_VERSION = "0.1.0"

HEADER_HINTS = ("query", "domain", "qname", "ip", "src", "timestamp", "time")

DEFAULT_COLUMNS = ["timestamp", "sourceIp", "query", "type", "responseCode"]

MIN_FIELDS = 3

_QUOTES = re.compile(r"^[\"']|[\"']$")


def split_fields(line: str) -> list[str]:
    """Split a line on commas, trimming whitespace and surrounding quotes."""
    return [_QUOTES.sub("", part.strip()) for part in line.split(",")]


def looks_like_header(tokens: list[str]) -> bool:
    return any(hint in token.lower() for token in tokens for hint in HEADER_HINTS)


@StrategyRegistry.register
class CsvStrategy(ParseStrategy):
    """Parses comma-separated lines, with or without a header row."""

    name = "csv"
    version = STRATEGY_VERSION
    priority = 20

    def parse(self, source: ParseInput) -> StrategyResult | None:
        lines = source.lines
        if not lines:
            return None

        first = lines[0]
        if "," not in first or "\t" in first:
            return None

        headers = split_fields(first)
        if looks_like_header(headers):
            data_lines = lines[1:]
        else:
            headers = DEFAULT_COLUMNS
            data_lines = lines

        result = StrategyResult()
        for index, line in enumerate(data_lines):
            parts = split_fields(line)
            fields: FieldMap = dict(zip(headers, parts))
            if fields.get("query") or fields.get("domain") or len(parts) >= MIN_FIELDS:
                self.normalize(fields, result, index)
            else:
                result.skipped += 1
        return result
