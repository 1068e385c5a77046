"""Shared fixtures for Tunnelscope tests."""

from datetime import UTC, datetime

import pytest

from tunnelscope.models.config import DetectionConfig
from tunnelscope.models.record import DNSQueryRecord, Label, Reputation
from tunnelscope.normalizer.query import LogNormalizer
from tunnelscope.parsers import MultiFormatParser

FIXED_NOW = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def config() -> DetectionConfig:
    return DetectionConfig()


@pytest.fixture
def normalizer(config: DetectionConfig) -> LogNormalizer:
    return LogNormalizer.from_config(config, rng=FixedRandom(0.5), clock=lambda: FIXED_NOW)


@pytest.fixture
def parser(normalizer: LogNormalizer) -> MultiFormatParser:
    return MultiFormatParser(normalizer)


@pytest.fixture
def make_record():
    """Build a record directly, bypassing the normalizer."""

    def _make(
        query: str = "www.example.com",
        label: Label = Label.NORMAL,
        threat_score: int = 0,
        entropy: float = 3.0,
        **overrides,
    ) -> DNSQueryRecord:
        fields = {
            "id": "q1",
            "timestamp": "2024-01-15T10:30:00Z",
            "source_ip": "10.0.0.1",
            "query": query,
            "length": len(query),
            "entropy": entropy,
            "reputation": Reputation.UNKNOWN,
            "label": label,
            "confidence": 0.9,
            "threat_score": threat_score,
        }
        fields.update(overrides)
        return DNSQueryRecord(**fields)

    return _make
