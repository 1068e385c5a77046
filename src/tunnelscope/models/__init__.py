"""Pydantic models for Tunnelscope."""

from tunnelscope.models.alert import Alert, AlertSeverity, AlertType
from tunnelscope.models.config import (
    ClassifierThresholds,
    DetectionConfig,
    NormalizerDefaults,
    ReputationTables,
    ScoringConfig,
)
from tunnelscope.models.error import ErrorCode, StructuredError
from tunnelscope.models.metrics import StepMetrics
from tunnelscope.models.record import DNSQueryRecord, FieldMap, FieldValue, Label, Reputation
from tunnelscope.models.report import ForensicReport, ThreatLevel, TimelineEntry
from tunnelscope.models.stats import FeatureStats

__all__ = [
    "Alert",
    "AlertSeverity",
    "AlertType",
    "ClassifierThresholds",
    "DetectionConfig",
    "DNSQueryRecord",
    "ErrorCode",
    "FeatureStats",
    "FieldMap",
    "FieldValue",
    "ForensicReport",
    "Label",
    "NormalizerDefaults",
    "Reputation",
    "ReputationTables",
    "ScoringConfig",
    "StepMetrics",
    "StructuredError",
    "ThreatLevel",
    "TimelineEntry",
]
