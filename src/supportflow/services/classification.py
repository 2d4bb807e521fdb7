"""
Classification Engine

High-level service for ticket classification operations:
- Single ticket classification with bounded retries
- Sequential batch classification with per-ticket failure isolation
- Runtime configuration (confidence threshold, retry budget, model)
- Classification memory management
"""

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import structlog

from supportflow.agents.classification_agent import AttemptOutcome, ClassificationAgent
from supportflow.agents.confidence import ConfidenceGate
from supportflow.agents.memory import ClassificationMemory, get_classification_memory
from supportflow.config import settings
from supportflow.exceptions import ClassificationFailedError, ConfigurationError
from supportflow.models.classification import BatchFailure, BatchResult, TicketClassification
from supportflow.models.ticket import TicketInput
from supportflow.services.batch import process_isolated
from supportflow.services.llm import InferenceClient
from supportflow.services.retry import RetryExhausted, exponential_delay, retry_with_backoff

logger = structlog.get_logger(__name__)


class ClassificationEngine:
    """
    Orchestrates classification attempts.

    Each attempt runs the full agent graph. A failed attempt n is retried after
    ``retry_backoff_seconds * 2 ** (n - 1)`` seconds (2s, 4s, 8s, ... by default)
    until the retry budget is spent. Configuration errors are never retried.
    """

    def __init__(
        self,
        inference_client: InferenceClient | None = None,
        memory: ClassificationMemory | None = None,
        confidence_threshold: float | None = None,
        retry_attempts: int | None = None,
        model_name: str | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.inference_client = inference_client or InferenceClient(model_name=model_name)
        if model_name and inference_client is not None:
            self.inference_client.model_name = model_name

        self.memory = memory if memory is not None else get_classification_memory()
        self.confidence_gate = ConfidenceGate(confidence_threshold)
        self.retry_attempts = settings.retry_attempts if retry_attempts is None else retry_attempts
        self.retry_backoff_seconds = settings.retry_backoff_seconds
        self.attempt_timeout_seconds = settings.attempt_timeout_seconds
        self.batch_item_delay_seconds = settings.batch_item_delay_seconds
        self._sleep = sleep

        self.agent = ClassificationAgent(
            inference_client=self.inference_client,
            memory=self.memory,
            confidence_gate=self.confidence_gate,
        )

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def confidence_threshold(self) -> float:
        return self.confidence_gate.threshold

    def update_confidence_threshold(self, threshold: float) -> None:
        """Set the review threshold; values outside [0, 100] are rejected."""
        self.confidence_gate.update_threshold(threshold)

    @property
    def retry_attempts(self) -> int:
        return self._retry_attempts

    @retry_attempts.setter
    def retry_attempts(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigurationError(
                "Retry attempts must be an integer of at least 1",
                details={"retry_attempts": value},
            )
        self._retry_attempts = value

    @property
    def model_name(self) -> str:
        return self.inference_client.model_name

    @model_name.setter
    def model_name(self, value: str) -> None:
        self.inference_client.model_name = value

    def get_stats(self) -> dict[str, Any]:
        """Current runtime configuration."""
        return {
            "confidence_threshold": self.confidence_threshold,
            "retry_attempts": self.retry_attempts,
            "model_version": self.model_name,
        }

    def clear_memory(self) -> None:
        self.memory.clear()

    # =========================================================================
    # Classification
    # =========================================================================

    async def process_ticket(self, ticket_id: str, ticket: TicketInput) -> TicketClassification:
        """
        Classify a single ticket.

        Raises:
            ClassificationFailedError: every attempt failed
            ConfigurationError: missing credentials or rejected model configuration
        """
        start_time = time.perf_counter()

        async def attempt(n: int) -> AttemptOutcome:
            logger.info("Processing ticket", ticket_id=ticket_id, attempt=n)
            return await asyncio.wait_for(
                self.agent.run(ticket_id, ticket, attempt=n),
                timeout=self.attempt_timeout_seconds,
            )

        try:
            outcome = await retry_with_backoff(
                attempt,
                attempts=self.retry_attempts,
                delay=exponential_delay(self.retry_backoff_seconds),
                give_up_on=(ConfigurationError,),
                sleep=self._sleep,
                ticket_id=ticket_id,
            )
        except RetryExhausted as e:
            logger.error(
                "Classification failed",
                ticket_id=ticket_id,
                attempts=e.attempts,
                error=str(e.last_error),
            )
            raise ClassificationFailedError(ticket_id, e.attempts, e.last_error) from e.last_error

        result = TicketClassification(
            ticket_id=ticket_id,
            classification=outcome.classification,
            model_version=self.model_name,
            processing_time_ms=int((time.perf_counter() - start_time) * 1000),
            needs_manual_review=outcome.needs_manual_review,
            parse_tier=outcome.parse_tier,
        )

        self._log_classification(result)
        return result

    async def batch_process(self, tickets: Sequence[tuple[str, TicketInput]]) -> BatchResult:
        """
        Classify tickets one after another.

        A ticket that fails is reported in ``failures`` and does not stop the
        rest of the batch. Results keep input order.
        """
        logger.info("Starting batch classification", count=len(tickets))

        results, failures = await process_isolated(
            tickets,
            self.process_ticket,
            pause_seconds=self.batch_item_delay_seconds,
            sleep=self._sleep,
        )

        batch = BatchResult(
            results=results,
            failures=[BatchFailure(ticket_id=tid, error=message) for tid, message in failures],
        )

        logger.info(
            "Batch classification complete",
            total=batch.total,
            successful=batch.successful,
            failed=batch.failed,
        )
        return batch

    def _log_classification(self, result: TicketClassification) -> None:
        classification = result.classification
        logger.info(
            "Classification completed",
            ticket_id=result.ticket_id,
            category=classification.category,
            priority=classification.priority.value,
            severity=classification.severity.value,
            confidence=classification.confidence,
            impact_level=classification.impact_level.value,
            urgency_level=classification.urgency_level.value,
            escalation_required=classification.escalation_required,
            estimated_resolution_time=classification.estimated_resolution_time,
            processing_time_ms=result.processing_time_ms,
            needs_manual_review=result.needs_manual_review,
            model_version=result.model_version,
            parse_tier=result.parse_tier.value,
        )


# Singleton engine instance
_classification_engine: ClassificationEngine | None = None


def get_classification_engine() -> ClassificationEngine:
    """Get or create the classification engine singleton."""
    global _classification_engine
    if _classification_engine is None:
        _classification_engine = ClassificationEngine()
    return _classification_engine
