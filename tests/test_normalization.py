"""
Unit tests for header normalization.

Tests specific header spellings and row key handling.
"""

import string

import pytest
from hypothesis import given, strategies as st, settings
from utils.normalization import normalize_header, normalize_row_keys


class TestNormalizeHeader:
    """Test single header normalization."""

    @pytest.mark.parametrize("raw, expected", [
        ("question", "question"),
        ("Class Code", "class_code"),
        ("CLASS-CODE", "class_code"),
        ("class_code", "class_code"),
        ("  Sub Topic Code ", "sub_topic_code"),
        ("Sub-Topic Code", "sub_topic_code"),
        ("Step By Step Solution", "step_by_step_solution"),
        ("Question\tImage", "question_image"),
        ("Question?", "question"),
        ("ID", "id"),
    ])
    def test_known_spellings(self, raw, expected):
        """Test common spellings of canonical headers."""
        assert normalize_header(raw) == expected

    def test_separator_runs_collapse(self):
        """Test that mixed runs of spaces and hyphens become one underscore."""
        assert normalize_header("topic -  code") == "topic_code"

    def test_outer_whitespace_is_trimmed(self):
        """Test that leading/trailing whitespace does not become an underscore."""
        assert normalize_header(" question") == "question"
        assert normalize_header("question\t") == "question"

    def test_non_ascii_letters_are_dropped(self):
        """Test that only ASCII word characters survive."""
        assert normalize_header("Café") == "caf"
        assert normalize_header("问题") == ""

    def test_empty_and_none(self):
        """Test empty input."""
        assert normalize_header("") == ""
        assert normalize_header(None) == ""

    def test_punctuation_only(self):
        """Test a header made only of punctuation."""
        assert normalize_header("***") == ""


class TestNormalizeRowKeys:
    """Test normalization of whole rows."""

    def test_keys_are_normalized(self):
        """Test that values are kept under normalized keys."""
        row = {"Class Code": "10", "Question": "What?"}

        assert normalize_row_keys(row) == {"class_code": "10", "question": "What?"}

    def test_rightmost_duplicate_wins(self):
        """Test headers that normalize to the same key."""
        row = {"Question": "left", "QUESTION": "right"}

        assert normalize_row_keys(row) == {"question": "right"}

    def test_empty_keys_are_discarded(self):
        """Test headers that normalize to nothing."""
        row = {"???": "lost", "id": "1"}

        assert normalize_row_keys(row) == {"id": "1"}

    def test_values_are_untouched(self):
        """Test that values are not trimmed or converted."""
        row = {"Question": "  spaced  ", "Typed": None}

        assert normalize_row_keys(row) == {"question": "  spaced  ", "typed": None}


header_text = st.text(alphabet=string.ascii_letters + string.digits + " -_?.", max_size=30)


# Feature: study-content-viewer, Property 5: Header normalization is idempotent
@given(st.text(max_size=40))
@settings(max_examples=200, deadline=None)
def test_normalize_header_idempotent(raw):
    """For any header, normalizing twice equals normalizing once."""
    once = normalize_header(raw)

    assert normalize_header(once) == once


# Feature: study-content-viewer, Property 6: Normalized headers are word characters
@given(st.text(max_size=40))
@settings(max_examples=200, deadline=None)
def test_normalize_header_charset(raw):
    """For any header, the result holds only lowercase ASCII word characters."""
    assert set(normalize_header(raw)) <= set(string.ascii_lowercase + string.digits + "_")


# Feature: study-content-viewer, Property 7: Case and padding do not matter
@given(header_text)
@settings(max_examples=200, deadline=None)
def test_normalize_header_case_and_padding_insensitive(raw):
    """For any ASCII header, case and surrounding whitespace do not change the key."""
    expected = normalize_header(raw)

    assert normalize_header(raw.upper()) == expected
    assert normalize_header(raw.lower()) == expected
    assert normalize_header("  " + raw + "\t") == expected
