"""Tests for batch feature statistics."""

from tunnelscope.analytics.stats import compute_feature_stats
from tunnelscope.models.stats import FeatureStats


def test_empty_batch_is_all_zero():
    stats = compute_feature_stats([])
    assert stats == FeatureStats()
    assert stats.total_queries == 0
    assert stats.avg_entropy == 0.0


def test_aggregates(make_record):
    records = [
        make_record(query="a.x.com", entropy=2.0, response_code="NXDOMAIN"),
        make_record(query="a.y.com", entropy=3.0),
        make_record(query="b.x.com", entropy=4.5, response_code="NXDOMAIN"),
        make_record(query="longer.example.org", entropy=3.25),
    ]
    stats = compute_feature_stats(records)
    assert stats.total_queries == 4
    assert stats.avg_entropy == 3.188
    assert stats.avg_length == 9.8
    assert stats.nxdomain_ratio == 0.5
    assert stats.unique_subdomains == 3


def test_single_label_query_counts_as_subdomain(make_record):
    stats = compute_feature_stats([make_record(query="localhost"), make_record(query="localhost.lan")])
    assert stats.unique_subdomains == 1


def test_wire_names(make_record):
    data = compute_feature_stats([make_record()]).to_json_dict()
    assert set(data) == {"avgEntropy", "avgLength", "nxDomainRatio", "totalQueries", "uniqueSubdomains"}
