"""Forensic report collaborator interface.

A report service receives a sample of normalized records and returns a
narrative summary. The report is for display only; detection never depends
on it.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from tunnelscope.core.errors import ForensicAnalysisError, TunnelscopeError
from tunnelscope.models.record import DNSQueryRecord
from tunnelscope.models.report import ForensicReport

DEFAULT_SAMPLE_SIZE = 30

PROMPT_TEMPLATE = """Analyze the following DNS traffic for tunneling activity.
Traffic Data (sample): {sample}

Look for:
1. High entropy strings (Base64/Hex encoding)
2. Long subdomain chains
3. C2 communication patterns
4. Unusual query structures"""


class ForensicAnalyzer(ABC):
    """Abstract base class for forensic report services."""

    @abstractmethod
    async def analyze(self, records: Sequence[DNSQueryRecord]) -> ForensicReport:
        """Produce a forensic report for a batch of records."""
        ...


def sample_records(
    records: Sequence[DNSQueryRecord], sample_size: int = DEFAULT_SAMPLE_SIZE
) -> list[dict[str, Any]]:
    """JSON-ready sample of the first ``sample_size`` records."""
    return [record.to_json_dict() for record in records[:sample_size]]


def build_forensic_prompt(
    records: Sequence[DNSQueryRecord], sample_size: int = DEFAULT_SAMPLE_SIZE
) -> str:
    """Prompt text sent to a language-model report service."""
    sample = json.dumps(sample_records(records, sample_size), ensure_ascii=False)
    return PROMPT_TEMPLATE.format(sample=sample)


def parse_forensic_report(payload: str | dict[str, Any]) -> ForensicReport:
    """Validate a report service response.

    Raises:
        ForensicAnalysisError: If the payload is not valid JSON or does not
            match the report schema
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload or "{}")
        except json.JSONDecodeError as e:
            raise ForensicAnalysisError(f"invalid JSON response: {e.msg}")

    try:
        return ForensicReport.model_validate(payload)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ForensicAnalysisError("response does not match report schema", {"fields": fields})


async def run_forensic_analysis(
    analyzer: ForensicAnalyzer, records: Sequence[DNSQueryRecord]
) -> ForensicReport:
    """Run a forensic analyzer, surfacing any failure as ForensicAnalysisError.

    The records passed in are never modified.
    """
    if not records:
        raise ForensicAnalysisError("no records to analyze")

    try:
        return await analyzer.analyze(records)
    except TunnelscopeError:
        raise
    except Exception as e:
        raise ForensicAnalysisError(str(e), {"type": type(e).__name__}) from e
