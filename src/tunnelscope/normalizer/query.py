"""DNS query normalizer.

Turns one loosely-typed field map from any log source into a canonical
DNSQueryRecord. Field names are resolved through an ordered alias table;
keys the table does not name are kept verbatim in ``metadata``.

Pipeline order is fixed:

1. resolve the query name
2. compute entropy and length
3. classify with a threat score of 0
4. resolve reputation from the source address
5. compute the final threat score over the populated record

The label from step 3 is never revisited, so the classifier's score
threshold cannot fire inside this pipeline.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from tunnelscope.core.errors import MissingQueryError
from tunnelscope.detection.classifier import Classifier, RandomSource
from tunnelscope.detection.entropy import shannon_entropy
from tunnelscope.detection.reputation import ReputationChecker
from tunnelscope.detection.scoring import ThreatScorer
from tunnelscope.models.config import DetectionConfig, NormalizerDefaults
from tunnelscope.models.record import DNSQueryRecord, FieldMap, FieldValue


@dataclass(frozen=True)
class AliasRule:
    """Candidate source keys for one canonical field, in priority order."""

    target: str
    candidates: tuple[str, ...]
    upper: bool = False


ALIAS_RULES: tuple[AliasRule, ...] = (
    AliasRule("id", ("id",)),
    AliasRule("query", ("query", "domain", "qname", "Question")),
    AliasRule("source_ip", ("sourceIp", "src_ip", "client_ip", "SourceIP")),
    AliasRule("timestamp", ("timestamp", "time", "Timestamp")),
    AliasRule("type", ("type", "qtype", "QueryType"), upper=True),
    AliasRule("response_code", ("responseCode", "rcode", "ResponseCode")),
)

CORE_KEYS = frozenset(key for rule in ALIAS_RULES for key in rule.candidates)


def _as_text(value: FieldValue) -> str | None:
    """Text form of a scalar field value; None for empty or nested values."""
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return None if not value else str(value).lower()
    text = str(value)
    return text or None


def resolve_aliases(fields: FieldMap, rules: tuple[AliasRule, ...] = ALIAS_RULES) -> dict[str, str]:
    """Resolve canonical fields from a raw field map.

    First non-empty candidate wins. Unresolved targets are absent from
    the result.
    """
    resolved: dict[str, str] = {}
    for rule in rules:
        for key in rule.candidates:
            text = _as_text(fields.get(key))
            if text is not None:
                resolved[rule.target] = text.upper() if rule.upper else text
                break
    return resolved


def extract_metadata(fields: FieldMap) -> dict[str, FieldValue]:
    """Input fields not named by any alias rule."""
    return {key: value for key, value in fields.items() if key not in CORE_KEYS}


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _generate_id() -> str:
    return uuid4().hex[:9]


@dataclass
class LogNormalizer:
    """Builds canonical records from raw field maps."""

    checker: ReputationChecker = field(default_factory=ReputationChecker)
    scorer: ThreatScorer = field(default_factory=ThreatScorer)
    classifier: Classifier = field(default_factory=Classifier)
    defaults: NormalizerDefaults = field(default_factory=NormalizerDefaults)
    clock: Callable[[], datetime] = _utc_now
    id_factory: Callable[[], str] = _generate_id

    @classmethod
    def from_config(
        cls,
        config: DetectionConfig | None = None,
        rng: RandomSource | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> "LogNormalizer":
        """Wire a normalizer and its detection components from configuration."""
        config = config or DetectionConfig()
        return cls(
            checker=ReputationChecker(config.reputation),
            scorer=ThreatScorer(config.scoring),
            classifier=Classifier(config.thresholds, rng=rng),
            defaults=config.defaults,
            clock=clock or _utc_now,
        )

    def normalize(self, fields: FieldMap) -> DNSQueryRecord:
        """Normalize one field map.

        Raises:
            MissingQueryError: If no query name can be resolved
        """
        resolved = resolve_aliases(fields)

        query = resolved.get("query")
        if not query:
            raise MissingQueryError(sorted(fields.keys()))

        entropy = shannon_entropy(query)
        length = len(query)

        # Score is not known yet; classification only sees entropy and length.
        classification = self.classifier.classify(entropy=entropy, length=length, score=0)

        source_ip = resolved.get("source_ip", self.defaults.source_ip)

        record = DNSQueryRecord(
            id=resolved.get("id") or self.id_factory(),
            timestamp=resolved.get("timestamp") or self._now_iso(),
            source_ip=source_ip,
            query=query,
            type=resolved.get("type", self.defaults.type),
            response_code=resolved.get("response_code", self.defaults.response_code),
            length=length,
            entropy=entropy,
            reputation=self.checker.check(source_ip),
            label=classification.label,
            confidence=classification.confidence,
            metadata=extract_metadata(fields),
        )
        record.threat_score = self.scorer.score(record)
        return record

    def _now_iso(self) -> str:
        return self.clock().isoformat(timespec="milliseconds").replace("+00:00", "Z")
