"""Tests for the DNS query normalizer."""

import pytest
from pydantic import ValidationError

from conftest import FixedRandom
from tunnelscope.core.errors import MissingQueryError
from tunnelscope.models.record import Label, Reputation
from tunnelscope.normalizer.query import (
    ALIAS_RULES,
    LogNormalizer,
    extract_metadata,
    resolve_aliases,
)


class TestResolveAliases:
    def test_first_candidate_wins(self):
        resolved = resolve_aliases({"domain": "b.example.com", "query": "a.example.com"})
        assert resolved["query"] == "a.example.com"

    def test_empty_values_are_skipped(self):
        resolved = resolve_aliases({"query": "", "domain": None, "qname": "c.example.com"})
        assert resolved["query"] == "c.example.com"

    @pytest.mark.parametrize(
        "key", ["query", "domain", "qname", "Question"]
    )
    def test_query_aliases(self, key):
        assert resolve_aliases({key: "x.example.com"})["query"] == "x.example.com"

    @pytest.mark.parametrize("key", ["sourceIp", "src_ip", "client_ip", "SourceIP"])
    def test_source_ip_aliases(self, key):
        assert resolve_aliases({key: "10.1.2.3"})["source_ip"] == "10.1.2.3"

    def test_type_is_upper_cased(self):
        assert resolve_aliases({"type": "", "qtype": "txt"})["type"] == "TXT"
        assert resolve_aliases({"QueryType": "aaaa"})["type"] == "AAAA"

    def test_response_code_is_not_upper_cased(self):
        assert resolve_aliases({"rcode": "nxdomain"})["response_code"] == "nxdomain"

    def test_numbers_become_text(self):
        assert resolve_aliases({"id": 42})["id"] == "42"

    def test_nested_and_false_values_are_missing(self):
        resolved = resolve_aliases({"query": {"name": "a.com"}, "domain": ["b.com"], "qname": False})
        assert "query" not in resolved

    def test_unresolved_targets_are_absent(self):
        assert resolve_aliases({"foo": "bar"}) == {}

    def test_rule_order_is_stable(self):
        assert [rule.target for rule in ALIAS_RULES] == [
            "id",
            "query",
            "source_ip",
            "timestamp",
            "type",
            "response_code",
        ]


def test_extract_metadata_drops_every_alias_key():
    fields = {
        "id": "abc",
        "query": "a.example.com",
        "Question": "ignored.example.com",
        "SourceIP": "10.0.0.1",
        "ttl": 300,
        "answers": [{"data": "1.2.3.4"}],
    }
    assert extract_metadata(fields) == {"ttl": 300, "answers": [{"data": "1.2.3.4"}]}


class TestLogNormalizer:
    def test_minimal_record_uses_defaults(self, normalizer):
        record = normalizer.normalize({"query": "abc123.example.com"})
        assert record.query == "abc123.example.com"
        assert record.length == 18
        assert record.entropy == 3.614
        assert record.source_ip == "192.168.1.1"
        assert record.type == "A"
        assert record.response_code == "NOERROR"
        assert record.timestamp == "2024-01-15T10:30:00.000Z"
        assert record.reputation is Reputation.CLEAN
        assert record.label is Label.NORMAL
        assert record.confidence == pytest.approx(0.875)
        assert record.threat_score == 8
        assert record.location is None
        assert record.metadata == {}

    def test_resolved_fields_are_kept(self, normalizer):
        record = normalizer.normalize(
            {
                "id": "evt-1",
                "qname": "x.example.org",
                "client_ip": "45.33.22.11",
                "time": "2024-02-01T00:00:00Z",
                "qtype": "txt",
                "rcode": "NXDOMAIN",
                "ttl": 60,
            }
        )
        assert record.id == "evt-1"
        assert record.source_ip == "45.33.22.11"
        assert record.timestamp == "2024-02-01T00:00:00Z"
        assert record.type == "TXT"
        assert record.response_code == "NXDOMAIN"
        assert record.reputation is Reputation.MALICIOUS
        assert record.metadata == {"ttl": 60}

    def test_generated_id(self, normalizer):
        first = normalizer.normalize({"query": "a.example.com"})
        second = normalizer.normalize({"query": "a.example.com"})
        assert len(first.id) == 9
        assert first.id != second.id

    def test_custom_id_factory(self, normalizer):
        normalizer.id_factory = lambda: "fixed"
        assert normalizer.normalize({"query": "a.example.com"}).id == "fixed"

    @pytest.mark.parametrize(
        "fields", [{}, {"query": ""}, {"name": "a.example.com"}, {"query": None, "domain": ""}]
    )
    def test_missing_query_raises(self, normalizer, fields):
        with pytest.raises(MissingQueryError) as exc_info:
            normalizer.normalize(fields)
        assert exc_info.value.code == "MISSING_QUERY"

    def test_high_entropy_query_is_tunneling(self, normalizer):
        record = normalizer.normalize({"query": "q8Zx3vB1nR7kL0pW2mT9.c2.example.com"})
        assert record.entropy > 4.2
        assert record.label is Label.TUNNELING

    def test_long_query_is_tunneling(self, normalizer):
        record = normalizer.normalize({"query": "a" * 52 + ".com"})
        assert record.length == 56
        assert record.label is Label.TUNNELING

    def test_high_score_alone_does_not_relabel(self, normalizer):
        # Classification runs before scoring, so a score above the
        # classifier threshold leaves the label at Normal.
        record = normalizer.normalize(
            {
                "query": "a" * 51 + ".com",
                "type": "NULL",
                "rcode": "NXDOMAIN",
                "sourceIp": "192.168.1.105",
            }
        )
        assert record.length == 55
        assert record.threat_score == 68
        assert record.label is Label.NORMAL

    def test_confidence_within_bounds(self, config):
        for value in (0.0, 0.999999):
            normalizer = LogNormalizer.from_config(config, rng=FixedRandom(value))
            for query in ("www.example.com", "z" * 80 + ".net"):
                assert 0 < normalizer.normalize({"query": query}).confidence <= 0.99


class TestRecordImmutability:
    def test_core_fields_are_read_only(self, normalizer):
        record = normalizer.normalize({"query": "a.example.com"})
        with pytest.raises(AttributeError):
            record.query = "b.example.com"
        with pytest.raises(AttributeError):
            record.label = Label.TUNNELING

    def test_enrichment_fields_are_writable(self, normalizer):
        record = normalizer.normalize({"query": "a.example.com"})
        record.apply_enrichment(location="Paris, France", lat=48.85, lng=2.35, threat_score=3)
        assert record.location == "Paris, France"
        assert (record.lat, record.lng) == (48.85, 2.35)
        assert record.threat_score == 3

    def test_threat_score_is_validated(self, normalizer):
        record = normalizer.normalize({"query": "a.example.com"})
        with pytest.raises(ValidationError):
            record.threat_score = 101

    def test_length_must_match_query(self, make_record):
        with pytest.raises(ValidationError):
            make_record(query="a.example.com", length=3)

    def test_wire_names(self, normalizer):
        data = normalizer.normalize({"query": "a.example.com", "src_ip": "10.0.0.9"}).to_json_dict()
        assert data["sourceIp"] == "10.0.0.9"
        assert data["responseCode"] == "NOERROR"
        assert "threatScore" in data
        assert "location" not in data
