"""
SupportFlow Agents

Prompting, output repair, memory and the LangGraph classification attempt.
"""

from supportflow.agents.confidence import ConfidenceGate
from supportflow.agents.memory import (
    NO_HISTORY,
    ClassificationMemory,
    MemoryEntry,
    get_classification_memory,
)
from supportflow.agents.output_parser import ClassificationOutputParser, ParsedClassification

# ClassificationAgent is imported lazily to avoid circular imports
# Use: from supportflow.agents.classification_agent import ClassificationAgent

__all__ = [
    "ConfidenceGate",
    "ClassificationMemory",
    "MemoryEntry",
    "NO_HISTORY",
    "get_classification_memory",
    "ClassificationOutputParser",
    "ParsedClassification",
]
