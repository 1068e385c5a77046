"""DNS query record model for Tunnelscope."""

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, Field, model_validator

# Loosely-typed value as found in heterogeneous log sources.
FieldValue = str | int | float | bool | None | list["FieldValue"] | dict[str, "FieldValue"]

# Raw field map produced by the parsers before normalization.
FieldMap = dict[str, FieldValue]


class Reputation(str, Enum):
    """Coarse trust classification of a source address."""

    CLEAN = "CLEAN"
    SUSPICIOUS = "SUSPICIOUS"
    MALICIOUS = "MALICIOUS"
    UNKNOWN = "UNKNOWN"


class Label(str, Enum):
    """Binary classification of a DNS query."""

    NORMAL = "Normal"
    TUNNELING = "Tunneling"


class DNSQueryRecord(BaseModel):
    """Canonical DNS query record.

    Created once by the normalizer. Only the enrichment fields
    (location, lat, lng, threat_score) may change afterwards; any other
    assignment raises AttributeError.
    """

    ENRICHMENT_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"location", "lat", "lng", "threat_score"}
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier",
    )

    timestamp: str = Field(
        ...,
        description="ISO-8601 instant as resolved from the source",
    )

    source_ip: str = Field(
        ...,
        alias="sourceIp",
        description="Client address that issued the query",
    )

    query: str = Field(
        ...,
        min_length=1,
        description="Queried name",
    )

    type: str = Field(
        default="A",
        description="Resource record type mnemonic (upper-case)",
    )

    response_code: str = Field(
        default="NOERROR",
        alias="responseCode",
        description="DNS response code",
    )

    length: int = Field(
        ...,
        ge=0,
        description="Character count of query",
    )

    entropy: float = Field(
        ...,
        ge=0,
        description="Shannon entropy of query in bits (3 dp)",
    )

    reputation: Reputation = Field(
        default=Reputation.UNKNOWN,
        description="Source address reputation",
    )

    label: Label = Field(
        ...,
        description="Classifier verdict",
    )

    confidence: float = Field(
        ...,
        gt=0,
        le=0.99,
        description="Confidence of the label",
    )

    threat_score: int = Field(
        default=0,
        ge=0,
        le=100,
        alias="threatScore",
        description="Composite threat score",
    )

    location: str | None = Field(
        default=None,
        description="Human-readable location of source_ip (enrichment)",
    )

    lat: float | None = Field(default=None, description="Latitude (enrichment)")

    lng: float | None = Field(default=None, description="Longitude (enrichment)")

    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Unrecognized input fields, preserved verbatim",
    )

    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
        "validate_assignment": True,
    }

    @model_validator(mode="after")
    def check_length(self) -> "DNSQueryRecord":
        """Ensure length matches the query it was computed from."""
        if self.length != len(self.query):
            raise ValueError(f"length {self.length} does not match query length {len(self.query)}")
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in self.ENRICHMENT_FIELDS:
            raise AttributeError(f"DNSQueryRecord.{name} is read-only after normalization")
        super().__setattr__(name, value)

    def apply_enrichment(
        self,
        location: str | None = None,
        lat: float | None = None,
        lng: float | None = None,
        threat_score: int | None = None,
    ) -> None:
        """Update enrichment fields in place.

        Callers must serialize concurrent enrichment of the same record.
        """
        if location is not None:
            self.location = location
        if lat is not None:
            self.lat = lat
        if lng is not None:
            self.lng = lng
        if threat_score is not None:
            self.threat_score = threat_score

    @property
    def subdomain(self) -> str:
        """Leading label of the query (text before the first dot)."""
        return self.query.split(".", 1)[0]

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
