"""Alert derivation and record filtering.

Alerts are raised for every record labelled Tunneling. Tracking which
alerts have been read is left to the consumer.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Literal
from uuid import uuid4

from tunnelscope.models.alert import Alert, AlertSeverity, AlertType
from tunnelscope.models.record import DNSQueryRecord, Label, Reputation

ThreatBand = Literal["CRITICAL", "HIGH", "MEDIUM", "LOW"]

C2_PATTERN_SCORE = 80
HIGH_ENTROPY = 4.5
CRITICAL_SCORE = 85
HIGH_SCORE = 60

MAX_ALERTS = 100


def alert_type(record: DNSQueryRecord) -> AlertType:
    if record.threat_score > C2_PATTERN_SCORE:
        return AlertType.C2_PATTERN
    if record.entropy > HIGH_ENTROPY:
        return AlertType.HIGH_ENTROPY
    return AlertType.TUNNELING_DETECTED


def alert_severity(record: DNSQueryRecord) -> AlertSeverity:
    if record.threat_score > CRITICAL_SCORE:
        return AlertSeverity.CRITICAL
    if record.threat_score > HIGH_SCORE:
        return AlertSeverity.HIGH
    return AlertSeverity.MEDIUM


def build_alert(
    record: DNSQueryRecord,
    id_factory: Callable[[], str] = lambda: uuid4().hex[:9],
) -> Alert | None:
    """Alert for a tunneling record, or None for a normal one."""
    if record.label is not Label.TUNNELING:
        return None

    return Alert(
        id=id_factory(),
        timestamp=record.timestamp,
        type=alert_type(record),
        severity=alert_severity(record),
        message=f"Suspicious activity detected from {record.source_ip} targeting {record.query}",
        query_id=record.id,
    )


def build_alerts(records: Iterable[DNSQueryRecord], limit: int = MAX_ALERTS) -> list[Alert]:
    """Alerts for a batch, newest first, capped at ``limit``.

    Records are assumed to be in arrival order.
    """
    alerts = [alert for alert in map(build_alert, records) if alert is not None]
    alerts.reverse()
    return alerts[:limit]


BAND_FLOORS: dict[ThreatBand, int] = {
    "CRITICAL": 80,
    "HIGH": 50,
    "MEDIUM": 20,
}


def threat_band(score: int) -> ThreatBand:
    """Coarse band for a threat score."""
    for band, floor in BAND_FLOORS.items():
        if score > floor:
            return band
    return "LOW"


def in_band(score: int, band: ThreatBand) -> bool:
    """Whether a score reaches a band.

    Bands are open-ended: HIGH also admits CRITICAL scores. LOW admits
    only scores at or below the MEDIUM floor.
    """
    if band == "LOW":
        return score <= BAND_FLOORS["MEDIUM"]
    return score > BAND_FLOORS[band]


def filter_records(
    records: Sequence[DNSQueryRecord],
    search: str | None = None,
    query_type: str | None = None,
    response_code: str | None = None,
    band: ThreatBand | None = None,
    reputation: Reputation | None = None,
) -> list[DNSQueryRecord]:
    """Select records matching every given criterion.

    ``search`` matches case-insensitively against query and id, and
    literally against the source address.
    """
    needle = search.lower() if search else None

    def matches(record: DNSQueryRecord) -> bool:
        if needle and not (
            needle in record.query.lower()
            or search in record.source_ip
            or needle in record.id.lower()
        ):
            return False
        if query_type and record.type != query_type.upper():
            return False
        if response_code and record.response_code != response_code.upper():
            return False
        if band and not in_band(record.threat_score, band):
            return False
        if reputation and record.reputation is not reputation:
            return False
        return True

    return [record for record in records if matches(record)]
