"""
Admin Routes

Runtime configuration of the classification engine and memory management.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from supportflow.config import settings
from supportflow.exceptions import ConfigurationError
from supportflow.models.classification import (
    CATEGORIES,
    ImpactLevel,
    Priority,
    Severity,
    UrgencyLevel,
)
from supportflow.models.ticket import TicketSource
from supportflow.services.classification import ClassificationEngine, get_classification_engine

logger = structlog.get_logger(__name__)

router = APIRouter()


class ThresholdUpdate(BaseModel):
    """Confidence threshold update. Range is checked by the engine."""

    threshold: float


class RetryAttemptsUpdate(BaseModel):
    retry_attempts: int


class ModelUpdate(BaseModel):
    model: str = Field(..., min_length=1)


class ConfigResponse(BaseModel):
    """Current engine configuration and the classification vocabularies."""

    model_config = ConfigDict(protected_namespaces=())

    confidence_threshold: float
    retry_attempts: int
    model_version: str
    categories: list[str]
    priority_levels: list[str]
    severity_levels: list[str]
    impact_levels: list[str]
    urgency_levels: list[str]
    sources: list[str]
    environment: str


def _config_response(engine: ClassificationEngine) -> ConfigResponse:
    return ConfigResponse(
        **engine.get_stats(),
        categories=CATEGORIES,
        priority_levels=[p.value for p in Priority],
        severity_levels=[s.value for s in Severity],
        impact_levels=[i.value for i in ImpactLevel],
        urgency_levels=[u.value for u in UrgencyLevel],
        sources=[s.value for s in TicketSource],
        environment=settings.environment,
    )


def _reject(e: ConfigurationError) -> HTTPException:
    logger.warning("Rejected configuration update", error=e.message, **e.details)
    return HTTPException(status_code=400, detail={"error": "Invalid configuration", "message": e.message})


@router.get("/config", response_model=ConfigResponse)
async def get_config(engine: ClassificationEngine = Depends(get_classification_engine)):
    """Get the current engine configuration."""
    return _config_response(engine)


@router.put("/config/confidence-threshold", response_model=ConfigResponse)
async def update_confidence_threshold(
    update: ThresholdUpdate,
    engine: ClassificationEngine = Depends(get_classification_engine),
):
    """Update the manual-review threshold. Values outside 0-100 are rejected."""
    try:
        engine.update_confidence_threshold(update.threshold)
    except ConfigurationError as e:
        raise _reject(e) from e
    return _config_response(engine)


@router.put("/config/retry-attempts", response_model=ConfigResponse)
async def update_retry_attempts(
    update: RetryAttemptsUpdate,
    engine: ClassificationEngine = Depends(get_classification_engine),
):
    """Update the per-ticket retry budget."""
    try:
        engine.retry_attempts = update.retry_attempts
    except ConfigurationError as e:
        raise _reject(e) from e
    logger.info("Retry attempts updated", retry_attempts=update.retry_attempts)
    return _config_response(engine)


@router.put("/config/model", response_model=ConfigResponse)
async def update_model(
    update: ModelUpdate,
    engine: ClassificationEngine = Depends(get_classification_engine),
):
    """Switch the model used for classification."""
    try:
        engine.model_name = update.model
    except ConfigurationError as e:
        raise _reject(e) from e
    return _config_response(engine)


@router.delete("/memory")
async def clear_memory(
    engine: ClassificationEngine = Depends(get_classification_engine),
) -> dict[str, Any]:
    """Clear the classification memory."""
    engine.clear_memory()
    return {"success": True, "message": "Classification memory cleared"}
