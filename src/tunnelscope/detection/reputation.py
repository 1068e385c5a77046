"""Static IP reputation lookup."""

from tunnelscope.models.config import ReputationTables
from tunnelscope.models.record import Reputation


class ReputationChecker:
    """Classifies source addresses against reputation tables.

    Lookup order: malicious set, suspicious set, clean private prefix.
    Anything else is UNKNOWN.
    """

    def __init__(self, tables: ReputationTables | None = None) -> None:
        self.tables = tables or ReputationTables()

    def check(self, ip: str) -> Reputation:
        if ip in self.tables.malicious:
            return Reputation.MALICIOUS
        if ip in self.tables.suspicious:
            return Reputation.SUSPICIOUS
        if ip.startswith(self.tables.clean_prefix):
            return Reputation.CLEAN
        return Reputation.UNKNOWN
