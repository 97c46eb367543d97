"""
Unit tests for record assembly.

Tests building QuestionRecord values from raw rows.
"""

from models import CANONICAL_KEYS, QuestionRecord
from services.record_assembler import assemble_records, build_record


def make_row(**overrides):
    """Helper building a raw row with display-style headers."""
    row = {
        "ID": "Q1",
        "Class Code": "10",
        "Subject Code": "MATH",
        "Topic Code": "ALG",
        "Sub-Topic Code": "QUAD",
        "Question": "Solve $x^2 = 4$.",
        "Question Image": "",
        "Typed": "Solved",
        "Context": "",
        "Step By Step Solution": '["Take roots.", "$x = \\\\pm 2$"]',
        "Concepts": "",
    }
    row.update(overrides)
    return row


class TestBuildRecord:
    """Test building a single record."""

    def test_full_row(self):
        """Test a row with display-style headers."""
        record = build_record(make_row())

        assert record == QuestionRecord(
            id="Q1",
            class_code="10",
            subject_code="MATH",
            topic_code="ALG",
            sub_topic_code="QUAD",
            question="Solve $x^2 = 4$.",
            typed="Solved",
            step_by_step_solution='["Take roots.", "$x = \\\\pm 2$"]'
        )
        assert [step.content for step in record.solution_steps()] == ["Take roots.", "$x = \\pm 2$"]

    def test_values_are_trimmed(self):
        """Test surrounding whitespace removal."""
        record = build_record(make_row(**{"Question": "  What?  ", "Typed": " Exercise\n"}))

        assert record.question == "What?"
        assert record.typed == "Exercise"

    def test_missing_question_column(self):
        """Test a row without any question column."""
        row = make_row()
        del row["Question"]

        assert build_record(row) is None

    def test_blank_question(self):
        """Test empty and whitespace-only questions."""
        assert build_record(make_row(Question="")) is None
        assert build_record(make_row(Question="   \n")) is None
        assert build_record(make_row(Question=None)) is None

    def test_unknown_columns_are_ignored(self):
        """Test extra columns that are not canonical fields."""
        record = build_record(make_row(Difficulty="hard", Source="book"))

        assert set(record.to_dict()) == set(CANONICAL_KEYS)

    def test_missing_optional_columns_default_to_empty(self):
        """Test a row holding only a question."""
        record = build_record({"question": "Only a question"})

        assert record == QuestionRecord(question="Only a question")

    def test_base64_image_is_wrapped(self):
        """Test a bare base64 payload in the image column."""
        record = build_record(make_row(**{"Question Image": "iVBORw0KGgo="}))

        assert record.question_image == "data:image/png;base64,iVBORw0KGgo="

    def test_image_url_is_kept(self):
        """Test an image URL."""
        record = build_record(make_row(**{"Question Image": " https://example.com/q1.png "}))

        assert record.question_image == "https://example.com/q1.png"

    def test_snake_case_headers(self):
        """Test headers already in canonical form."""
        record = build_record({"id": "7", "question": "Why?", "sub_topic_code": "S1"})

        assert record.id == "7"
        assert record.sub_topic_code == "S1"


class TestAssembleRecords:
    """Test assembling many rows."""

    def test_order_is_preserved_and_invalid_rows_dropped(self):
        """Test filtering of rows without questions."""
        rows = [
            make_row(ID="1", Question="First"),
            make_row(ID="2", Question=""),
            make_row(ID="3", Question="Third"),
        ]

        records = assemble_records(rows)

        assert [record.id for record in records] == ["1", "3"]

    def test_duplicate_ids_are_kept(self):
        """Test that ids are not deduplicated."""
        rows = [make_row(ID="Q1", Question="A"), make_row(ID="Q1", Question="B")]

        records = assemble_records(rows)

        assert [record.question for record in records] == ["A", "B"]

    def test_empty_input(self):
        """Test no rows."""
        assert assemble_records([]) == []

    def test_accepts_any_iterable(self):
        """Test a generator of rows."""
        records = assemble_records(make_row(ID=str(i)) for i in range(3))

        assert len(records) == 3
