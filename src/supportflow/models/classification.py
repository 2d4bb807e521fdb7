"""
Classification Data Models

The structured-output contract the model must satisfy, and the records the
engine hands back to callers.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CATEGORIES = [
    "Technical",
    "Billing",
    "General Inquiry",
    "Bug Report",
    "Feature Request",
    "Account",
    "Security",
    "Performance",
    "Integration",
]


class Priority(str, Enum):
    """Business impact of a ticket."""

    URGENT = "Urgent"
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Severity(str, Enum):
    """Technical impact of a ticket."""

    EMERGENCY = "Emergency"
    CRITICAL = "Critical"
    MAJOR = "Major"
    MODERATE = "Moderate"
    MINOR = "Minor"


class ImpactLevel(str, Enum):
    """Blast radius of the reported issue."""

    SYSTEM_WIDE = "System-wide"
    ORGANIZATION = "Organization"
    DEPARTMENT = "Department"
    INDIVIDUAL = "Individual"


class UrgencyLevel(str, Enum):
    """How quickly the ticket must be resolved."""

    IMMEDIATE = "Immediate"
    ASAP = "ASAP"
    SOON = "Soon"
    NORMAL = "Normal"
    CAN_WAIT = "Can wait"


class ParseTier(str, Enum):
    """Which output validator tier produced a classification."""

    PARSED = "parsed"
    REPAIRED = "repaired"
    DEFAULTED = "defaulted"


class ClassificationResult(BaseModel):
    """
    Structured classification decision.

    JSON keys are camelCase (``suggestedResponse``, ``impactLevel``, ...).
    Every field is required; unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    category: str
    priority: Priority
    severity: Severity
    confidence: float = Field(..., ge=0, le=100, allow_inf_nan=False)
    summary: str
    reasoning: str
    tags: list[str]
    suggested_response: str
    personalized_response: str
    resolution_steps: list[str]
    estimated_resolution_time: str
    escalation_required: bool
    impact_level: ImpactLevel
    urgency_level: UrgencyLevel


class TicketClassification(BaseModel):
    """Result of one successful pipeline run. Never mutated after creation."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        protected_namespaces=(),
    )

    ticket_id: str
    classification: ClassificationResult
    classified_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    model_version: str
    processing_time_ms: int = Field(..., ge=0)
    needs_manual_review: bool
    parse_tier: ParseTier = ParseTier.PARSED


class BatchFailure(BaseModel):
    """A ticket that could not be classified within a batch."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    ticket_id: str
    error: str


class BatchResult(BaseModel):
    """Outcome of a batch run. Both lists keep input order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    results: list[TicketClassification] = Field(default_factory=list)
    failures: list[BatchFailure] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results) + len(self.failures)

    @property
    def successful(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.failures)
