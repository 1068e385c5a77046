"""Forensic report model returned by the report collaborator."""

from enum import Enum

from pydantic import BaseModel, Field


class ThreatLevel(str, Enum):
    """Overall threat level of an analysed batch."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class TimelineEntry(BaseModel):
    """A dated event in the forensic narrative."""

    time: str = Field(..., description="Time of the event")
    event: str = Field(..., description="What happened")

    model_config = {"extra": "forbid"}


class ForensicReport(BaseModel):
    """Narrative forensic summary of a sample of records."""

    summary: str = Field(..., description="Executive summary of findings")
    threat_level: ThreatLevel = Field(..., alias="threatLevel")
    indicators: list[str] = Field(default_factory=list, description="IOCs detected")
    timeline: list[TimelineEntry] = Field(default_factory=list)
    recommendation: str = Field(..., description="Remediation steps")
    detected_tunnels: list[str] = Field(
        default_factory=list,
        alias="detectedTunnels",
        description="Domains identified as tunnels",
    )

    model_config = {"extra": "ignore", "populate_by_name": True}
