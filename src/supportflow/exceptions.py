"""
SupportFlow Exceptions

Typed errors raised by the classification pipeline.

Only ClassificationFailedError and ConfigurationError reach callers of the
engine. OutputValidationError is recovered inside the output parser and
TransientInferenceError is retried by the engine.
"""

from typing import Any


class SupportFlowError(Exception):
    """Base exception for all SupportFlow errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class OutputValidationError(SupportFlowError):
    """Model output did not match the classification schema."""


class InferenceError(SupportFlowError):
    """Base exception for completion service failures."""


class TransientInferenceError(InferenceError):
    """Network or service failure that is worth retrying."""


class ConfigurationError(SupportFlowError):
    """Missing credentials or an out-of-range configuration value. Never retried."""


class ClassificationFailedError(SupportFlowError):
    """Raised once every attempt for a ticket has failed."""

    def __init__(self, ticket_id: str, attempts: int, last_error: BaseException | None):
        self.ticket_id = ticket_id
        self.attempts = attempts
        self.last_error = last_error
        reason = str(last_error) if last_error is not None else "unknown error"
        super().__init__(
            f"Failed to classify ticket {ticket_id} after {attempts} attempts: {reason}",
            details={
                "ticket_id": ticket_id,
                "attempts": attempts,
                "last_error": reason,
                "error_type": type(last_error).__name__ if last_error is not None else None,
            },
        )
