"""
Unit tests for RenderEngine.

Tests Markdown/LaTeX rendering, plain text extraction and question cards.
"""

import pytest
from models import QuestionRecord
from services import RenderEngine
from services.render_engine import EMPTY_LIST_MESSAGE


@pytest.fixture
def engine():
    return RenderEngine()


class TestRenderMarkdownLatex:
    """Test Markdown + LaTeX to HTML rendering."""

    def test_empty(self, engine):
        assert engine.render_markdown_latex("") == ""

    def test_markdown(self, engine):
        """Test basic Markdown and the KaTeX render marker."""
        html = engine.render_markdown_latex("**bold** and *italic*")

        assert "<strong>bold</strong>" in html
        assert "<em>italic</em>" in html
        assert 'data-katex-render="true"' in html

    def test_inline_math_is_preserved(self, engine):
        """Test that inline math reaches the page untouched."""
        html = engine.render_markdown_latex("Area $a_1 * b_1$ here")

        assert "$a_1 * b_1$" in html
        assert "<em>" not in html

    def test_display_math_is_preserved(self, engine):
        """Test $$ blocks."""
        html = engine.render_markdown_latex("$$x_1 + x_2$$")

        assert "$$x_1 + x_2$$" in html

    def test_bracket_delimiters_are_converted(self, engine):
        r"""Test \( \) and \[ \] delimiters."""
        html = engine.render_markdown_latex(r"Inline \(a+b\) and block \[c+d\]")

        assert "$a+b$" in html
        assert "$$c+d$$" in html

    def test_environment_is_display_math(self, engine):
        """Test equation environments."""
        html = engine.render_markdown_latex(r"\begin{equation}E = mc^2\end{equation}")

        assert "$$E = mc^2$$" in html

    def test_formula_html_is_escaped(self, engine):
        """Test comparison operators inside math."""
        html = engine.render_markdown_latex("$a < b$")

        assert "$a &lt; b$" in html

    def test_raw_html_allowed_by_default(self, engine):
        """Test inline HTML in editor content."""
        html = engine.render_markdown_latex("<b>hi</b>")

        assert "<b>hi</b>" in html

    def test_raw_html_escaped_for_uploads(self, engine):
        """Test that uploaded content cannot inject markup."""
        html = engine.render_markdown_latex("<script>alert(1)</script>", allow_html=False)

        assert "<script>" not in html

    def test_table(self, engine):
        """Test tables from the extra extension."""
        html = engine.render_markdown_latex("| a | b |\n|---|---|\n| 1 | 2 |")

        assert "<table>" in html


class TestMarkdownToPlain:
    """Test plain text extraction."""

    def test_empty(self, engine):
        assert engine.markdown_to_plain("") == ""

    def test_headings_and_emphasis(self, engine):
        """Test that formatting markers are removed."""
        assert engine.markdown_to_plain("# Title\n\nSome **bold** text") == "Title\n\nSome bold text"

    def test_math_keeps_formula_text(self, engine):
        """Test that math delimiters are dropped."""
        assert engine.markdown_to_plain(r"Area is $\pi r^2$.") == r"Area is \pi r^2."

    def test_display_math(self, engine):
        """Test display math on its own line."""
        assert engine.markdown_to_plain("Before\n\n$$x^2$$\n\nAfter") == "Before\n\nx^2\n\nAfter"

    def test_blockquote_removed(self, engine):
        """Test that block quotes are dropped."""
        text = "Keep\n\n> Tip: drop me\n\nAlso keep"

        assert engine.markdown_to_plain(text) == "Keep\n\nAlso keep"

    def test_image_removed(self, engine):
        """Test that images are dropped."""
        plain = engine.markdown_to_plain("Look ![diagram](http://example.com/d.png) here")

        assert "diagram" not in plain
        assert plain.startswith("Look")
        assert plain.endswith("here")

    def test_entities_are_decoded(self, engine):
        """Test characters Markdown escapes."""
        assert engine.markdown_to_plain("Tom & Jerry < 3") == "Tom & Jerry < 3"

    def test_lists(self, engine):
        """Test list items on separate lines."""
        assert engine.markdown_to_plain("- one\n- two") == "one\ntwo"

    def test_code_block(self, engine):
        """Test fenced code keeps its content."""
        assert engine.markdown_to_plain("```\nx = 1\n```") == "x = 1"

    def test_newline_runs_collapse(self, engine):
        """Test that long runs of blank lines collapse to one blank line."""
        assert engine.markdown_to_plain("a\n\n\n\n\nb") == "a\n\nb"

    def test_line_breaks_are_kept(self, engine):
        """Test single line breaks inside a paragraph."""
        assert engine.markdown_to_plain("line1\nline2") == "line1\nline2"


class TestQuestionCards:
    """Test question card rendering."""

    def test_full_card(self, engine):
        """Test all sections of a card."""
        record = QuestionRecord(
            id="Q1",
            class_code="10",
            subject_code="MATH",
            topic_code="ALG",
            sub_topic_code="QUAD",
            question="Solve $x^2 = 4$",
            question_image="https://example.com/q.png",
            typed="Solved",
            context="Roots",
            step_by_step_solution='["Take roots.", "Done."]',
            concepts='[{"concept": "Square roots", "chapter": "Ch 2", "example": "$\\\\sqrt{4}$"}]'
        )

        html = engine.render_question_card(record, 3)

        assert 'data-question-index="3"' in html
        assert "ID: Q1" in html
        assert "Class 10 · Subject MATH · Topic ALG · Sub-topic QUAD" in html
        assert ">Solved</span>" in html
        assert "Context" in html
        assert 'src="https://example.com/q.png"' in html
        assert "$x^2 = 4$" in html
        assert "Step-by-Step Solution" in html
        assert '<span class="step-number">2</span>' in html
        assert "Square roots" in html
        assert "Chapter: Ch 2" in html
        assert "Example:" in html

    def test_minimal_card(self, engine):
        """Test a record with only a question."""
        html = engine.render_question_card(QuestionRecord(question="Why?"))

        assert "—" in html
        assert "ID:" not in html
        assert "Step-by-Step Solution" not in html
        assert "Concepts" not in html
        assert "<img" not in html

    def test_plain_text_solution(self, engine):
        """Test a solution that is not JSON."""
        html = engine.render_question_card(QuestionRecord(question="Q", step_by_step_solution="Just add."))

        assert '<span class="step-number">1</span>' in html
        assert "Just add." in html

    def test_metadata_is_escaped(self, engine):
        """Test markup in metadata fields."""
        html = engine.render_question_card(QuestionRecord(id="<b>x</b>", question="Q"))

        assert "<b>x</b>" not in html
        assert "&lt;b&gt;x&lt;/b&gt;" in html

    def test_image_src_is_escaped(self, engine):
        """Test quotes in the image reference."""
        record = QuestionRecord(question="Q", question_image='https://x.com/a.png?a=1&b="2"')

        html = engine.render_question_card(record)

        assert 'src="https://x.com/a.png?a=1&amp;b=&quot;2&quot;"' in html

    def test_empty_list(self, engine):
        """Test the hint shown when nothing is loaded."""
        assert EMPTY_LIST_MESSAGE in engine.render_questions_list([])

    def test_list_window(self, engine):
        """Test rendering a slice of the list."""
        records = [QuestionRecord(id=str(i), question=f"Q{i}") for i in range(5)]

        html = engine.render_questions_list(records, start=1, limit=2)

        assert html.count('class="question-card"') == 2
        assert 'data-question-index="1"' in html
        assert 'data-question-index="2"' in html
        assert 'data-question-index="0"' not in html

    def test_list_all(self, engine):
        """Test rendering the whole list."""
        records = [QuestionRecord(question=f"Q{i}") for i in range(4)]

        assert engine.render_questions_list(records).count('class="question-card"') == 4


def test_katex_header(engine):
    """Test the KaTeX page header."""
    header = engine.get_katex_header()

    assert "katex.min.js" in header
    assert "auto-render.min.js" in header
    assert "renderMathInElement" in header
