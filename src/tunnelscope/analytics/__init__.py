"""Batch analytics: feature statistics, alerts and filtering."""

from tunnelscope.analytics.alerts import (
    build_alert,
    build_alerts,
    filter_records,
    in_band,
    threat_band,
)
from tunnelscope.analytics.stats import compute_feature_stats

__all__ = [
    "build_alert",
    "build_alerts",
    "compute_feature_stats",
    "filter_records",
    "in_band",
    "threat_band",
]
