"""Tests for alert derivation and record filtering."""

import pytest

from tunnelscope.analytics.alerts import build_alert, build_alerts, filter_records, in_band, threat_band
from tunnelscope.models.alert import AlertSeverity, AlertType
from tunnelscope.models.record import Label, Reputation


class TestBuildAlert:
    def test_normal_record_raises_no_alert(self, make_record):
        assert build_alert(make_record(threat_score=95)) is None

    @pytest.mark.parametrize(
        "score,entropy,alert_type,severity",
        [
            (90, 3.0, AlertType.C2_PATTERN, AlertSeverity.CRITICAL),
            (85, 3.0, AlertType.C2_PATTERN, AlertSeverity.HIGH),
            (80, 4.6, AlertType.HIGH_ENTROPY, AlertSeverity.HIGH),
            (61, 3.0, AlertType.TUNNELING_DETECTED, AlertSeverity.HIGH),
            (60, 4.5, AlertType.TUNNELING_DETECTED, AlertSeverity.MEDIUM),
            (10, 5.0, AlertType.HIGH_ENTROPY, AlertSeverity.MEDIUM),
        ],
    )
    def test_type_and_severity(self, make_record, score, entropy, alert_type, severity):
        record = make_record(label=Label.TUNNELING, threat_score=score, entropy=entropy)
        alert = build_alert(record)
        assert alert.type is alert_type
        assert alert.severity is severity

    def test_alert_fields(self, make_record):
        record = make_record(query="x1.tunnel.example.com", label=Label.TUNNELING, id="rec-7")
        alert = build_alert(record, id_factory=lambda: "alert-1")
        assert alert.id == "alert-1"
        assert alert.query_id == "rec-7"
        assert alert.timestamp == record.timestamp
        assert alert.is_read is False
        assert alert.message == (
            "Suspicious activity detected from 10.0.0.1 targeting x1.tunnel.example.com"
        )
        assert alert.to_json_dict()["queryId"] == "rec-7"


def test_build_alerts_newest_first_and_capped(make_record):
    records = [
        make_record(query=f"q{i}.example.com", id=f"r{i}", label=Label.TUNNELING if i % 2 else Label.NORMAL)
        for i in range(10)
    ]
    alerts = build_alerts(records)
    assert [a.query_id for a in alerts] == ["r9", "r7", "r5", "r3", "r1"]
    assert [a.query_id for a in build_alerts(records, limit=2)] == ["r9", "r7"]


def test_build_alerts_default_cap(make_record):
    records = [make_record(id=f"r{i}", label=Label.TUNNELING) for i in range(120)]
    assert len(build_alerts(records)) == 100


@pytest.mark.parametrize(
    "score,band",
    [(100, "CRITICAL"), (81, "CRITICAL"), (80, "HIGH"), (51, "HIGH"), (50, "MEDIUM"), (21, "MEDIUM"), (20, "LOW"), (0, "LOW")],
)
def test_threat_band(score, band):
    assert threat_band(score) == band


@pytest.mark.parametrize(
    "score,band,expected",
    [
        (81, "CRITICAL", True),
        (80, "CRITICAL", False),
        (95, "HIGH", True),
        (51, "HIGH", True),
        (50, "HIGH", False),
        (90, "MEDIUM", True),
        (20, "MEDIUM", False),
        (20, "LOW", True),
        (21, "LOW", False),
    ],
)
def test_in_band(score, band, expected):
    assert in_band(score, band) is expected


class TestFilterRecords:
    @pytest.fixture
    def records(self, make_record):
        return [
            make_record(query="www.Example.com", id="a1", threat_score=10),
            make_record(
                query="x9.tunnel.bad",
                id="b2",
                type="TXT",
                response_code="NXDOMAIN",
                threat_score=90,
                source_ip="45.33.22.11",
                reputation=Reputation.MALICIOUS,
            ),
            make_record(query="mail.example.net", id="c3", type="MX", threat_score=55),
        ]

    def test_no_criteria_keeps_everything(self, records):
        assert filter_records(records) == records

    def test_search_is_case_insensitive_on_query(self, records):
        assert [r.id for r in filter_records(records, search="EXAMPLE")] == ["a1", "c3"]

    def test_search_matches_source_ip_and_id(self, records):
        assert [r.id for r in filter_records(records, search="45.33")] == ["b2"]
        assert [r.id for r in filter_records(records, search="C3")] == ["c3"]

    def test_type_and_rcode(self, records):
        assert [r.id for r in filter_records(records, query_type="txt")] == ["b2"]
        assert [r.id for r in filter_records(records, response_code="noerror")] == ["a1", "c3"]

    def test_band_is_open_ended(self, records):
        assert [r.id for r in filter_records(records, band="CRITICAL")] == ["b2"]
        assert [r.id for r in filter_records(records, band="HIGH")] == ["b2", "c3"]
        assert [r.id for r in filter_records(records, band="MEDIUM")] == ["b2", "c3"]
        assert [r.id for r in filter_records(records, band="LOW")] == ["a1"]

    def test_reputation(self, records):
        assert [r.id for r in filter_records(records, reputation=Reputation.MALICIOUS)] == ["b2"]

    def test_criteria_combine(self, records):
        assert filter_records(records, search="example", band="CRITICAL") == []
