"""Threshold classifier for DNS tunneling."""

import random
from dataclasses import dataclass
from typing import Protocol

from tunnelscope.detection.entropy import shannon_entropy
from tunnelscope.models.config import ClassifierThresholds
from tunnelscope.models.record import Label

MAX_CONFIDENCE = 0.99

TUNNELING_BASE_CONFIDENCE = 0.7
TUNNELING_JITTER = 0.1
NORMAL_BASE_CONFIDENCE = 0.8
NORMAL_JITTER = 0.15


class RandomSource(Protocol):
    """Anything that yields floats in [0, 1), like random.Random."""

    def random(self) -> float: ...


@dataclass(frozen=True)
class Classification:
    """Classifier verdict."""

    label: Label
    confidence: float

    @property
    def is_tunneling(self) -> bool:
        return self.label is Label.TUNNELING


class Classifier:
    """Labels a query as Normal or Tunneling.

    The label is deterministic. Confidence carries a bounded random
    jitter that simulates model uncertainty; inject a seeded or fixed
    generator through ``rng`` to make it reproducible.
    """

    def __init__(
        self,
        thresholds: ClassifierThresholds | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.thresholds = thresholds or ClassifierThresholds()
        self.rng = rng or random.Random()

    def classify(
        self,
        entropy: float | None = None,
        length: int | None = None,
        score: int = 0,
        query: str | None = None,
    ) -> Classification:
        """Classify a query from its entropy, length and threat score.

        Args:
            entropy: Precomputed entropy, computed from query when None
            length: Precomputed length, computed from query when None
            score: Precomputed threat score (0 when not yet known)
            query: Raw query text, used only as a fallback

        Returns:
            Classification with label and confidence in (0, 0.99]
        """
        if entropy is None:
            entropy = shannon_entropy(query or "")
        if length is None:
            length = len(query or "")

        t = self.thresholds
        if entropy > t.entropy or length > t.length or score > t.score:
            jitter = self.rng.random() * TUNNELING_JITTER
            confidence = min(MAX_CONFIDENCE, TUNNELING_BASE_CONFIDENCE + score / 200 + jitter)
            return Classification(Label.TUNNELING, confidence)

        jitter = self.rng.random() * NORMAL_JITTER
        confidence = min(MAX_CONFIDENCE, NORMAL_BASE_CONFIDENCE + jitter)
        return Classification(Label.NORMAL, confidence)
