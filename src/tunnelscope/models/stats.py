"""Feature statistics model for a batch of DNS query records."""

from typing import Any

from pydantic import BaseModel, Field


class FeatureStats(BaseModel):
    """Aggregate snapshot over a batch of records.

    Derived data: recomputed from scratch for every batch.
    """

    avg_entropy: float = Field(
        default=0.0,
        ge=0,
        alias="avgEntropy",
        description="Mean entropy (3 dp)",
    )

    avg_length: float = Field(
        default=0.0,
        ge=0,
        alias="avgLength",
        description="Mean query length (1 dp)",
    )

    nxdomain_ratio: float = Field(
        default=0.0,
        ge=0,
        le=1,
        alias="nxDomainRatio",
        description="Share of records answered with NXDOMAIN",
    )

    total_queries: int = Field(
        default=0,
        ge=0,
        alias="totalQueries",
        description="Number of records in the batch",
    )

    unique_subdomains: int = Field(
        default=0,
        ge=0,
        alias="uniqueSubdomains",
        description="Distinct leading labels across all queries",
    )

    model_config = {"extra": "forbid", "populate_by_name": True, "frozen": True}

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True)
