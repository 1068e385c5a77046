"""Detection configuration models.

Reputation tables, high-risk regions and thresholds are immutable
configuration passed to the detection components at construction time,
so a live threat-intelligence feed can replace the built-in tables
without touching the scoring logic.
"""

from pydantic import BaseModel, Field


class ReputationTables(BaseModel):
    """Static IP reputation reference tables."""

    malicious: frozenset[str] = Field(
        default=frozenset({"192.168.1.105", "45.33.22.11", "103.22.11.55", "185.22.11.33"}),
        description="Addresses known to be malicious (exact match)",
    )

    suspicious: frozenset[str] = Field(
        default=frozenset({"192.168.1.200", "104.16.132.229"}),
        description="Addresses flagged as suspicious (exact match)",
    )

    clean_prefix: str = Field(
        default="192.168.",
        description="Private-network prefix treated as clean",
    )

    model_config = {"extra": "forbid", "frozen": True}


class ClassifierThresholds(BaseModel):
    """Decision thresholds for the tunneling classifier."""

    entropy: float = Field(default=4.2, ge=0, description="Entropy above which a query is tunneling")
    length: int = Field(default=55, ge=0, description="Length above which a query is tunneling")
    score: int = Field(default=60, ge=0, le=100, description="Threat score above which a query is tunneling")

    model_config = {"extra": "forbid", "frozen": True}


class ScoringConfig(BaseModel):
    """Geolocation inputs to the threat scorer."""

    high_risk_locations: tuple[str, ...] = Field(
        default=("Russia", "China", "North Korea", "Iran", "Unknown"),
        description="Location substrings scored as high risk",
    )

    resolving_sentinel: str = Field(
        default="Resolving...",
        description="Placeholder location shown while a lookup is pending",
    )

    model_config = {"extra": "forbid", "frozen": True}


class NormalizerDefaults(BaseModel):
    """Fallback values for fields a log source does not provide."""

    source_ip: str = Field(default="192.168.1.1", description="Placeholder private address")
    type: str = Field(default="A", description="Default record type")
    response_code: str = Field(default="NOERROR", description="Default response code")

    model_config = {"extra": "forbid", "frozen": True}


class DetectionConfig(BaseModel):
    """Complete detection configuration."""

    reputation: ReputationTables = Field(default_factory=ReputationTables)
    thresholds: ClassifierThresholds = Field(default_factory=ClassifierThresholds)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    defaults: NormalizerDefaults = Field(default_factory=NormalizerDefaults)

    model_config = {"extra": "forbid", "frozen": True}
