"""Tests for text normalization."""

import pytest

from supportflow.utils.text import normalize_structure, normalize_text


class TestNormalizeText:
    """Test the rule chain on single strings."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Hello\nworld", "Hello world"),
            ("Hello\r\n\r\nworld", "Hello world"),
            ("tab\tseparated\t\tvalues", "tab separated values"),
            ("too    many   spaces", "too many spaces"),
            ("   padded   ", "padded"),
            ("Done .", "Done."),
            ("Really ?  Yes !", "Really? Yes!"),
            ("First.Second", "First. Second"),
            ("End.   Next", "End. Next"),
            ("Dear Jane,\n\nWe are on it .\nRegards", "Dear Jane, We are on it. Regards"),
            ("", ""),
        ],
    )
    def test_rules(self, raw, expected):
        assert normalize_text(raw) == expected

    def test_lowercase_after_period_untouched(self):
        """Only uppercase letters start a new sentence."""
        assert normalize_text("version 1.5 and e.g.x") == "version 1.5 and e.g.x"

    @pytest.mark.parametrize(
        "raw",
        [
            "Hello\n\n  world .Next sentence !Again",
            "A . . B",
            "  multiple\t\twhitespace \r\n kinds ?Yes",
            '{"summary": "Outage .", "tags": ["a",  "b"]}',
            "Already clean. Nothing to do!",
        ],
    )
    def test_idempotent(self, raw):
        once = normalize_text(raw)
        assert normalize_text(once) == once


class TestNormalizeStructure:
    """Test recursive normalization."""

    def test_nested_record(self):
        record = {
            "summary": "Line one\nline two .",
            "tags": ["  spaced  ", "new\nline"],
            "nested": {"steps": ("Step one .", "Step\ttwo")},
            "confidence": 85,
            "escalation_required": True,
        }

        cleaned = normalize_structure(record)

        assert cleaned == {
            "summary": "Line one line two.",
            "tags": ["spaced", "new line"],
            "nested": {"steps": ("Step one.", "Step two")},
            "confidence": 85,
            "escalation_required": True,
        }

    def test_keys_untouched(self):
        assert normalize_structure({"a  key": "v"}) == {"a  key": "v"}

    def test_non_text_passthrough(self):
        assert normalize_structure(None) is None
        assert normalize_structure(3.5) == 3.5
