"""Line-delimited JSON and free-text strategy.

Each line is first tried as a standalone JSON object. Other lines are split
on whitespace and mined heuristically:

- query: first dotted token that is not purely numeric (digits and dots)
- sourceIp: first IPv4 dotted quad
- type: first token naming a common record type (default A)
- timestamp: the first token, when longer than 10 characters

Lines without a query-like token produce no record.
"""

import json
import re

from tunnelscope.models.record import FieldMap
from tunnelscope.parsers.base import ParseInput, ParseStrategy, StrategyRegistry, StrategyResult

STRATEGY_VERSION = "0.1.0"

RECORD_TYPES = frozenset({"A", "AAAA", "TXT", "CNAME", "MX", "NS"})

TIMESTAMP_MIN_LENGTH = 11

_WHITESPACE = re.compile(r"\s+")
_NUMERIC = re.compile(r"^[\d.]+$")
_IPV4 = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")


def parse_json_line(line: str) -> FieldMap | None:
    """Decode a line holding a single JSON object."""
    try:
        value = json.loads(line)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def extract_fields(line: str) -> FieldMap | None:
    """Heuristically pull DNS fields out of a free-text log line."""
    tokens = _WHITESPACE.split(line)

    query = next((t for t in tokens if "." in t and not _NUMERIC.match(t)), None)
    if query is None:
        return None

    source_ip = None
    for token in tokens:
        match = _IPV4.search(token)
        if match:
            source_ip = match.group(0)
            break

    record_type = next((t.upper() for t in tokens if t.upper() in RECORD_TYPES), "A")
    timestamp = tokens[0] if len(tokens[0]) >= TIMESTAMP_MIN_LENGTH else None

    return {
        "query": query,
        "sourceIp": source_ip,
        "type": record_type,
        "timestamp": timestamp,
    }


@StrategyRegistry.register
class LineStrategy(ParseStrategy):
    """Parses each line as JSON, falling back to whitespace heuristics."""

    name = "lines"
    version = STRATEGY_VERSION
    priority = 30

    def parse(self, source: ParseInput) -> StrategyResult | None:
        if not source.lines:
            return None

        result = StrategyResult()
        for index, line in enumerate(source.lines):
            fields = parse_json_line(line)
            if fields is None:
                fields = extract_fields(line)
            if fields is None:
                result.skipped += 1
                continue
            self.normalize(fields, result, index)
        return result
