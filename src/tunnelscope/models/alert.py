"""Alert models derived from classified DNS query records."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AlertType(str, Enum):
    """Kind of suspicious activity an alert reports."""

    TUNNELING_DETECTED = "TUNNELING_DETECTED"
    HIGH_ENTROPY = "HIGH_ENTROPY"
    C2_PATTERN = "C2_PATTERN"


class AlertSeverity(str, Enum):
    """Alert severity."""

    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Alert(BaseModel):
    """Alert raised for a record labelled as tunneling."""

    id: str = Field(..., description="Alert identifier")
    timestamp: str = Field(..., description="Timestamp of the triggering query")
    type: AlertType = Field(..., description="Alert type")
    severity: AlertSeverity = Field(..., description="Alert severity")
    message: str = Field(..., description="Human-readable description")
    query_id: str = Field(..., alias="queryId", description="ID of the triggering record")
    is_read: bool = Field(default=False, alias="isRead", description="Read state")

    model_config = {"extra": "forbid", "populate_by_name": True}

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True)
