"""
Text normalization for model output and caller-facing text fields.
"""

import re
from typing import Any

_LINE_BREAKS = re.compile(r"[\n\r\t]+")
_MULTI_SPACE = re.compile(r"\s{2,}")
_SPACE_BEFORE_PUNCT = re.compile(r"\s+([.!?])")
_SENTENCE_BOUNDARY = re.compile(r"([.!?])\s*([A-Z])")


def normalize_text(text: str) -> str:
    """
    Normalize whitespace and sentence spacing in a piece of text.

    Rules run in a fixed order; punctuation spacing must come after the
    whitespace collapse or doubled spaces reappear. The function is idempotent.
    """
    text = _LINE_BREAKS.sub(" ", text)
    text = _MULTI_SPACE.sub(" ", text)
    text = text.strip()
    text = _SPACE_BEFORE_PUNCT.sub(r"\1", text)
    text = _SENTENCE_BOUNDARY.sub(r"\1 \2", text)
    return text.strip()


def normalize_structure(value: Any) -> Any:
    """Apply normalize_text to every string inside nested lists, tuples and dicts."""
    if isinstance(value, str):
        return normalize_text(value)
    if isinstance(value, list):
        return [normalize_structure(item) for item in value]
    if isinstance(value, tuple):
        return tuple(normalize_structure(item) for item in value)
    if isinstance(value, dict):
        return {key: normalize_structure(item) for key, item in value.items()}
    return value
