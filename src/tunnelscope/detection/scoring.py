"""Multi-factor threat scoring for DNS query records.

The score is the sum of six independently capped factors:

    entropy        max 40
    length         max 20
    response code  max 15
    query type     max 15
    geolocation    max 15
    reputation     max 25

rounded half-up and clamped to 100.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Protocol

from tunnelscope.models.config import ScoringConfig
from tunnelscope.models.record import Reputation

MAX_SCORE = 100

ENTROPY_BASELINE = 3.5
ENTROPY_WEIGHT = 30
ENTROPY_CAP = 40

LENGTH_BASELINE = 40
LENGTH_WEIGHT = 0.5
LENGTH_CAP = 20

RESPONSE_CODE_POINTS = {
    "NXDOMAIN": 15,
    "SERVFAIL": 10,
}

QUERY_TYPE_POINTS = {
    "TXT": 10,
    "NULL": 15,
}

HIGH_RISK_LOCATION_POINTS = 15
UNRESOLVED_LOCATION_POINTS = 5

REPUTATION_POINTS = {
    Reputation.MALICIOUS: 25,
    Reputation.SUSPICIOUS: 15,
}


class Scorable(Protocol):
    """Fields the scorer reads from a record."""

    entropy: float
    length: int
    response_code: str
    type: str
    location: str | None
    reputation: Reputation


@dataclass
class ScoreBreakdown:
    """Per-factor contributions behind a threat score."""

    factors: dict[str, float] = field(default_factory=dict)

    @property
    def raw_total(self) -> float:
        return sum(self.factors.values())

    @property
    def score(self) -> int:
        return min(MAX_SCORE, math.floor(self.raw_total + 0.5))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "factors": {name: round(value, 3) for name, value in self.factors.items()},
            "score": self.score,
        }


class ThreatScorer:
    """Scores a fully-populated record on a 0-100 scale."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or ScoringConfig()

    def score(self, record: Scorable) -> int:
        return self.breakdown(record).score

    def breakdown(self, record: Scorable) -> ScoreBreakdown:
        """Compute every factor contribution for a record."""
        return ScoreBreakdown(
            factors={
                "entropy": self._entropy_factor(record.entropy),
                "length": self._length_factor(record.length),
                "response_code": RESPONSE_CODE_POINTS.get(record.response_code, 0),
                "query_type": QUERY_TYPE_POINTS.get(record.type, 0),
                "geolocation": self._location_factor(record.location),
                "reputation": REPUTATION_POINTS.get(record.reputation, 0),
            }
        )

    def _entropy_factor(self, entropy: float) -> float:
        if entropy <= ENTROPY_BASELINE:
            return 0
        return min(ENTROPY_CAP, (entropy - ENTROPY_BASELINE) * ENTROPY_WEIGHT)

    def _length_factor(self, length: int) -> float:
        if length <= LENGTH_BASELINE:
            return 0
        return min(LENGTH_CAP, (length - LENGTH_BASELINE) * LENGTH_WEIGHT)

    def _location_factor(self, location: str | None) -> float:
        if location and any(region in location for region in self.config.high_risk_locations):
            return HIGH_RISK_LOCATION_POINTS
        # Not yet resolved
        if not location or location == self.config.resolving_sentinel:
            return UNRESOLVED_LOCATION_POINTS
        return 0
