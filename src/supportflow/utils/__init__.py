"""
SupportFlow Utilities
"""

from supportflow.utils.text import normalize_structure, normalize_text

__all__ = ["normalize_text", "normalize_structure"]
