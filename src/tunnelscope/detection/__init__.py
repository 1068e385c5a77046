"""Detection components: entropy, reputation, classification and scoring."""

from tunnelscope.detection.classifier import Classification, Classifier, RandomSource
from tunnelscope.detection.entropy import shannon_entropy
from tunnelscope.detection.reputation import ReputationChecker
from tunnelscope.detection.scoring import ScoreBreakdown, ThreatScorer

__all__ = [
    "Classification",
    "Classifier",
    "RandomSource",
    "ReputationChecker",
    "ScoreBreakdown",
    "ThreatScorer",
    "shannon_entropy",
]
