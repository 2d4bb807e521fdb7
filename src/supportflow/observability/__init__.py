"""
SupportFlow Observability

structlog configuration for the service entry points.
"""

from supportflow.observability.logging import configure_logging

__all__ = ["configure_logging"]
