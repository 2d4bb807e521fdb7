"""
SupportFlow Data Models

Pydantic models for tickets and classification results.
"""

from supportflow.models.classification import (
    CATEGORIES,
    BatchFailure,
    BatchResult,
    ClassificationResult,
    ImpactLevel,
    ParseTier,
    Priority,
    Severity,
    TicketClassification,
    UrgencyLevel,
)
from supportflow.models.ticket import (
    CustomerInfo,
    CustomerPriority,
    TicketInput,
    TicketSource,
)

__all__ = [
    # Ticket models
    "TicketInput",
    "CustomerInfo",
    "CustomerPriority",
    "TicketSource",
    # Classification models
    "CATEGORIES",
    "ClassificationResult",
    "TicketClassification",
    "Priority",
    "Severity",
    "ImpactLevel",
    "UrgencyLevel",
    "ParseTier",
    # Batch models
    "BatchResult",
    "BatchFailure",
]
