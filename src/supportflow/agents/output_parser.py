"""
Classification Output Parser

Turns raw completion text into a ClassificationResult through three tiers:

1. strict - the whole normalized text must be a schema-valid JSON object
2. repaired - the first ``{`` ... last ``}`` span of the text must be
3. defaulted - a conservative fallback record, flagged by low confidence

The parser never raises; schema failures are reported on the returned
ParsedClassification and in the logs.
"""

import re
from dataclasses import dataclass, field

import structlog
from pydantic import ValidationError

from supportflow.exceptions import OutputValidationError
from supportflow.models.classification import (
    ClassificationResult,
    ImpactLevel,
    ParseTier,
    Priority,
    Severity,
    UrgencyLevel,
)
from supportflow.models.ticket import DEFAULT_CUSTOMER_NAME
from supportflow.utils.text import normalize_text

logger = structlog.get_logger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

FALLBACK_RESPONSE = (
    "Thank you for contacting us. We'll review your request and get back to you soon."
)


@dataclass(frozen=True)
class ParsedClassification:
    """Tagged parser outcome: the tier that succeeded and the record it produced."""

    tier: ParseTier
    result: ClassificationResult
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_fallback(self) -> bool:
        return self.tier == ParseTier.DEFAULTED


def default_classification(customer_name: str | None = None) -> ClassificationResult:
    """Conservative record used when the model output cannot be recovered."""
    name = customer_name or DEFAULT_CUSTOMER_NAME
    return ClassificationResult(
        category="General Inquiry",
        priority=Priority.MEDIUM,
        severity=Severity.MODERATE,
        confidence=50,
        summary="Unable to parse classification result",
        reasoning="Classification parsing failed, using default values",
        tags=["parsing-error"],
        suggested_response=FALLBACK_RESPONSE,
        personalized_response=(
            f"Dear {name}, thank you for contacting us. "
            "We'll review your request and get back to you soon."
        ),
        resolution_steps=[
            "Review ticket details",
            "Assign to appropriate team",
            "Provide resolution",
        ],
        estimated_resolution_time="1-2 business days",
        escalation_required=False,
        impact_level=ImpactLevel.INDIVIDUAL,
        urgency_level=UrgencyLevel.NORMAL,
    )


class ClassificationOutputParser:
    """Validator/repair chain for classification completions."""

    def parse_strict(self, raw: str) -> ClassificationResult:
        """Validate the entire normalized text as a classification object."""
        return self._validate(normalize_text(raw))

    def parse_extracted(self, raw: str) -> ClassificationResult:
        """Validate the JSON object embedded in surrounding prose or fences."""
        match = _JSON_OBJECT.search(normalize_text(raw))
        if match is None:
            raise OutputValidationError("No JSON object found in model output")
        return self._validate(match.group(0))

    def parse(self, raw: str | None, customer_name: str | None = None) -> ParsedClassification:
        """Run the tiers in order; the first success wins."""
        raw = raw or ""
        errors: list[str] = []

        try:
            return ParsedClassification(tier=ParseTier.PARSED, result=self.parse_strict(raw))
        except OutputValidationError as e:
            errors.append(f"strict: {e.message}")

        try:
            result = self.parse_extracted(raw)
            logger.info("Repaired model output", first_error=errors[0])
            return ParsedClassification(
                tier=ParseTier.REPAIRED, result=result, errors=tuple(errors)
            )
        except OutputValidationError as e:
            errors.append(f"extracted: {e.message}")

        logger.warning(
            "Model output unusable, falling back to default classification",
            errors=errors,
            output_preview=raw[:200],
        )
        return ParsedClassification(
            tier=ParseTier.DEFAULTED,
            result=default_classification(customer_name),
            errors=tuple(errors),
        )

    def _validate(self, text: str) -> ClassificationResult:
        if not text:
            raise OutputValidationError("Model output is empty")
        try:
            return ClassificationResult.model_validate_json(text, strict=True)
        except ValidationError as e:
            raise OutputValidationError(
                f"{e.error_count()} schema error(s)",
                details={"errors": e.errors(include_url=False, include_input=False)},
            ) from e
