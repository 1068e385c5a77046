"""Tests for the reputation checker."""

import pytest

from tunnelscope.detection.reputation import ReputationChecker
from tunnelscope.models.config import ReputationTables
from tunnelscope.models.record import Reputation


@pytest.mark.parametrize(
    "ip,expected",
    [
        ("192.168.1.105", Reputation.MALICIOUS),
        ("45.33.22.11", Reputation.MALICIOUS),
        ("192.168.1.200", Reputation.SUSPICIOUS),
        ("104.16.132.229", Reputation.SUSPICIOUS),
        ("192.168.50.1", Reputation.CLEAN),
        ("8.8.8.8", Reputation.UNKNOWN),
        ("", Reputation.UNKNOWN),
    ],
)
def test_default_tables(ip, expected):
    assert ReputationChecker().check(ip) is expected


def test_lists_take_precedence_over_private_prefix():
    # Both addresses are in 192.168.0.0/16 but listed explicitly.
    checker = ReputationChecker()
    assert checker.check("192.168.1.105") is Reputation.MALICIOUS
    assert checker.check("192.168.1.200") is Reputation.SUSPICIOUS


def test_custom_tables():
    tables = ReputationTables(
        malicious=frozenset({"203.0.113.9"}),
        suspicious=frozenset(),
        clean_prefix="10.",
    )
    checker = ReputationChecker(tables)
    assert checker.check("203.0.113.9") is Reputation.MALICIOUS
    assert checker.check("10.1.1.1") is Reputation.CLEAN
    assert checker.check("192.168.1.105") is Reputation.UNKNOWN
