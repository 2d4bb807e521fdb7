"""
Ticket Classification Routes

Endpoints for single and batch ticket classification.
"""

from uuid import uuid4

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from supportflow.models.classification import BatchFailure, TicketClassification
from supportflow.models.ticket import TicketInput
from supportflow.services.classification import ClassificationEngine, get_classification_engine

router = APIRouter()


class ClassifyRequest(BaseModel):
    """Request model for single classification."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ticket_id: str | None = Field(default=None, description="Generated when omitted")
    ticket: TicketInput


class BatchItem(BaseModel):
    """One ticket in a batch request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ticket_id: str = Field(..., min_length=1)
    ticket: TicketInput


class BatchRequest(BaseModel):
    """Request model for batch classification."""

    tickets: list[BatchItem] = Field(..., min_length=1, max_length=1000)


class BatchResponse(BaseModel):
    """Batch outcome with summary counters."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    results: list[TicketClassification]
    failures: list[BatchFailure]
    total: int
    successful: int
    failed: int


@router.post("/classify", response_model=TicketClassification)
async def classify_ticket(
    request: ClassifyRequest,
    engine: ClassificationEngine = Depends(get_classification_engine),
):
    """
    Classify a single ticket.

    Runs prompt composition, model inference, output repair, response
    generation and the confidence gate, with retries on transient failures.
    """
    ticket_id = request.ticket_id or f"TICKET-{uuid4().hex[:12]}"
    return await engine.process_ticket(ticket_id, request.ticket)


@router.post("/batch", response_model=BatchResponse)
async def classify_batch(
    request: BatchRequest,
    engine: ClassificationEngine = Depends(get_classification_engine),
):
    """
    Classify tickets sequentially.

    Failed tickets are listed in ``failures`` and never abort the batch.
    """
    batch = await engine.batch_process([(item.ticket_id, item.ticket) for item in request.tickets])

    return BatchResponse(
        results=batch.results,
        failures=batch.failures,
        total=batch.total,
        successful=batch.successful,
        failed=batch.failed,
    )
