"""
SupportFlow - Resilient LLM Support Ticket Classification

Turns free-text support tickets into validated, structured classification
records using a generative model under a strict output contract, with output
repair, retries, a confidence gate and a bounded classification memory.
"""

__version__ = "0.1.0"
__author__ = "SupportFlow Team"

from supportflow.config import settings

__all__ = ["settings", "__version__"]
