"""Whole-document JSON strategy.

Handles exports that are a single JSON array of query objects or a single
query object. When the content parses as JSON the search ends here, even if
the document also happens to contain commas or newlines.
"""

import json

from tunnelscope.parsers.base import ParseInput, ParseStrategy, StrategyRegistry, StrategyResult

STRATEGY_VERSION = "0.1.0"


@StrategyRegistry.register
class JsonDocumentStrategy(ParseStrategy):
    """Parses the entire content as one JSON document."""

    name = "json_document"
    version = STRATEGY_VERSION
    priority = 10
    terminal = True

    def parse(self, source: ParseInput) -> StrategyResult | None:
        try:
            document = json.loads(source.content)
        except (ValueError, RecursionError):
            return None

        if isinstance(document, dict):
            items = [document]
        elif isinstance(document, list):
            items = document
        else:
            return None

        result = StrategyResult()
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                result.skipped += 1
                continue
            self.normalize(item, result, index)
        return result
