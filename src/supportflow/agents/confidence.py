"""
Confidence Gate

Decides whether a classification is trusted as-is or flagged for manual review.
"""

import structlog

from supportflow.config import settings
from supportflow.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

MIN_THRESHOLD = 0
MAX_THRESHOLD = 100


def validate_threshold(threshold: float) -> float:
    """Return the threshold unchanged or raise ConfigurationError if out of range."""
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise ConfigurationError(
            "Confidence threshold must be a number",
            details={"threshold": threshold},
        )
    if not MIN_THRESHOLD <= threshold <= MAX_THRESHOLD:
        raise ConfigurationError(
            f"Confidence threshold must be between {MIN_THRESHOLD} and {MAX_THRESHOLD}",
            details={"threshold": threshold},
        )
    return threshold


class ConfidenceGate:
    """
    Flags classifications whose confidence falls below a threshold.

    A result needs manual review exactly when ``confidence < threshold``.
    Invalid threshold updates are rejected and leave the previous value in place.
    """

    def __init__(self, threshold: float | None = None):
        if threshold is None:
            threshold = settings.classification_confidence_threshold
        self._threshold = validate_threshold(threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    def update_threshold(self, threshold: float) -> None:
        self._threshold = validate_threshold(threshold)
        logger.info("Confidence threshold updated", threshold=threshold)

    def needs_manual_review(self, confidence: float) -> bool:
        return confidence < self._threshold
