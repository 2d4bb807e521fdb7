"""
SupportFlow Services

Completion client, retry and batch combinators, and the classification engine.
"""

from supportflow.services.llm import InferenceClient
from supportflow.services.retry import RetryExhausted, exponential_delay, retry_with_backoff

# The engine is imported lazily to avoid circular imports
# Use: from supportflow.services.classification import ClassificationEngine

__all__ = [
    "InferenceClient",
    "RetryExhausted",
    "exponential_delay",
    "retry_with_backoff",
]
