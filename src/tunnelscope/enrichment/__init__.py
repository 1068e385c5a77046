"""Interfaces to external collaborators: geolocation and forensic reports."""

from tunnelscope.enrichment.forensics import (
    ForensicAnalyzer,
    build_forensic_prompt,
    parse_forensic_report,
    run_forensic_analysis,
)
from tunnelscope.enrichment.geo import (
    GeolocationProvider,
    GeoResult,
    IpWhoIsProvider,
    enrich_records,
)

__all__ = [
    "ForensicAnalyzer",
    "GeoResult",
    "GeolocationProvider",
    "IpWhoIsProvider",
    "build_forensic_prompt",
    "enrich_records",
    "parse_forensic_report",
    "run_forensic_analysis",
]
