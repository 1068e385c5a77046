"""Batch statistics over normalized DNS query records."""

from collections.abc import Sequence

from tunnelscope.models.record import DNSQueryRecord
from tunnelscope.models.stats import FeatureStats

NXDOMAIN = "NXDOMAIN"


def compute_feature_stats(records: Sequence[DNSQueryRecord]) -> FeatureStats:
    """Summarize a batch of records.

    Recomputed from scratch on every call; an empty batch yields all zeros.
    """
    total = len(records)
    if total == 0:
        return FeatureStats()

    avg_entropy = sum(r.entropy for r in records) / total
    avg_length = sum(r.length for r in records) / total
    nxdomain = sum(1 for r in records if r.response_code == NXDOMAIN)
    subdomains = {r.subdomain for r in records}

    return FeatureStats(
        avg_entropy=round(avg_entropy, 3),
        avg_length=round(avg_length, 1),
        nxdomain_ratio=round(nxdomain / total, 3),
        total_queries=total,
        unique_subdomains=len(subdomains),
    )
