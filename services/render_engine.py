"""
RenderEngine for Markdown and LaTeX rendering.

Converts Markdown + LaTeX to HTML (math is left for KaTeX auto-render in the
browser), strips Markdown down to plain text, and builds the question card
HTML shown in the question list.
"""

import html
import logging
import re
import uuid
from typing import List, Optional, Sequence, Tuple

import markdown

from models import Concept, QuestionRecord, SolutionStep

logger = logging.getLogger(__name__)


EMPTY_LIST_MESSAGE = "Upload a CSV/TSV to see questions here. You can also try the sample data."


class RenderEngine:
    """
    Rendering engine for Markdown, LaTeX and question cards.

    Provides methods to:
    - Render Markdown + LaTeX to HTML
    - Extract plain text from Markdown + LaTeX
    - Render question records as cards
    - Emit the KaTeX header for the page
    """

    # LaTeX delimiters, display forms before inline forms
    LATEX_PATTERNS = [
        (r'\$\$(.+?)\$\$', 'display'),
        (r'\\\[(.+?)\\\]', 'display'),
        (r'\$([^\$\n]+?)\$', 'inline'),
        (r'\\\((.+?)\\\)', 'inline'),
        (r'\\begin\{equation\*?\}(.+?)\\end\{equation\*?\}', 'display'),
        (r'\\begin\{align\*?\}(.+?)\\end\{align\*?\}', 'display'),
        (r'\\begin\{gather\*?\}(.+?)\\end\{gather\*?\}', 'display'),
    ]

    # Block-level closing tags that end a line in plain-text output
    _BLOCK_END = re.compile(r'</(p|h[1-6]|pre|table|ul|ol|div|dl)>|<br\s*/?>\n?|<hr\s*/?>', re.IGNORECASE)

    def __init__(self):
        """Initialize RenderEngine with Markdown processor."""
        self.md = markdown.Markdown(extensions=['extra', 'nl2br', 'sane_lists'])

    def _escape_html_in_latex(self, latex_content: str) -> str:
        """Escape &, < and > inside a formula; KaTeX reads the decoded text."""
        result = latex_content.replace('&', '&amp;')
        result = result.replace('<', '&lt;')
        result = result.replace('>', '&gt;')
        return result

    def _protect_latex(self, text: str) -> Tuple[str, List[dict]]:
        """
        Swap LaTeX formulas for placeholder tokens so Markdown leaves them alone.

        Returns:
            (text with placeholders, list of placeholder records)
        """
        if not text:
            return text, []

        latex_placeholders = []

        def replace_latex(match, display_type):
            placeholder = f"LATEXPH{uuid.uuid4().hex}X"
            latex_placeholders.append({
                'placeholder': placeholder,
                'formula': match.group(1).strip(),
                'display': display_type,
            })
            return placeholder

        result = text
        for pattern, display_type in self.LATEX_PATTERNS:
            result = re.sub(
                pattern,
                lambda m, dt=display_type: replace_latex(m, dt),
                result,
                flags=re.DOTALL
            )

        return result, latex_placeholders

    def _restore_latex(self, html_text: str, latex_placeholders: list) -> str:
        """Put formulas back as $...$ / $$...$$ for KaTeX auto-render."""
        result = html_text

        for item in latex_placeholders:
            formula = self._escape_html_in_latex(item['formula'])
            if item['display'] == 'display':
                latex_html = f'$${formula}$$'
            else:
                latex_html = f'${formula}$'
            result = result.replace(item['placeholder'], latex_html)

        return result

    def _convert(self, text: str) -> str:
        try:
            return self.md.convert(text)
        finally:
            self.md.reset()

    def render_markdown_latex(self, text: str, allow_html: bool = True, css_class: str = "markdown-body") -> str:
        """
        Render Markdown and LaTeX to HTML.

        Args:
            text: Text containing Markdown and/or LaTeX
            allow_html: Pass raw HTML in the source through; False escapes it
                (used for uploaded question content)
            css_class: Class of the wrapping div

        Returns:
            HTML string, "" for empty input
        """
        if not text:
            return ""

        try:
            protected_text, latex_placeholders = self._protect_latex(text)
            if not allow_html:
                protected_text = protected_text.replace('<', '&lt;')

            html_content = self._convert(protected_text)

            if latex_placeholders:
                html_content = self._restore_latex(html_content, latex_placeholders)

            return (
                f'<div class="{css_class} katex-render-target" data-katex-render="true">'
                f'{html_content}</div>'
            )
        except Exception as e:
            # Markdown extensions can fail on pathological input; show the source instead
            logger.warning("Markdown rendering failed: %s", e)
            escaped_text = html.escape(text)
            return (
                f'<div class="{css_class}">'
                f'<pre style="white-space: pre-wrap; word-wrap: break-word;">{escaped_text}</pre></div>'
            )

    def markdown_to_plain(self, text: str) -> str:
        """
        Strip Markdown formatting, keeping readable text.

        Block quotes, images, scripts and styles are removed, other tags are
        dropped with their text kept, and math is kept as its formula text.

        Args:
            text: Markdown + LaTeX source

        Returns:
            Plain text with at most one blank line between blocks
        """
        if not text:
            return ""

        protected_text, latex_placeholders = self._protect_latex(text)
        html_content = self._convert(protected_text)

        html_content = re.sub(r'<blockquote>.*?</blockquote>', '', html_content, flags=re.DOTALL)
        html_content = re.sub(r'<(script|style)\b.*?</\1>', '', html_content, flags=re.DOTALL | re.IGNORECASE)
        html_content = re.sub(r'<img\b[^>]*>', '', html_content, flags=re.IGNORECASE)
        html_content = re.sub(r'</t[dh]>\s*', ' ', html_content)
        html_content = self._BLOCK_END.sub('\n', html_content)
        plain = html.unescape(re.sub(r'<[^>]+>', '', html_content))

        for item in latex_placeholders:
            plain = plain.replace(item['placeholder'], item['formula'])

        plain = '\n'.join(line.rstrip() for line in plain.split('\n'))
        plain = re.sub(r'\n{3,}', '\n\n', plain)
        return plain.strip()

    def render_solution_steps(self, steps: Sequence[SolutionStep]) -> str:
        """Numbered solution steps block, "" when there are none."""
        if not steps:
            return ""

        items = []
        for number, step in enumerate(steps, start=1):
            items.append(
                '<div class="solution-step">'
                f'<span class="step-number">{number}</span>'
                f'<div class="step-content">{self.render_markdown_latex(step.content, allow_html=False)}</div>'
                '</div>'
            )

        return (
            '<div class="solution-block">'
            '<p class="section-label">Step-by-Step Solution</p>'
            f'{"".join(items)}</div>'
        )

    def render_concepts(self, concepts: Sequence[Concept]) -> str:
        """Concepts block, "" when there are none."""
        if not concepts:
            return ""

        items = []
        for concept in concepts:
            parts = []
            if concept.concept:
                parts.append(f'<p class="concept-title">{html.escape(concept.concept)}</p>')
            if concept.chapter:
                parts.append(f'<p class="concept-chapter">Chapter: {html.escape(concept.chapter)}</p>')
            for label, value in (
                ("Explanation", concept.explanation),
                ("Example", concept.example),
                ("Application", concept.application),
            ):
                if value:
                    parts.append(
                        f'<div class="concept-field"><p class="field-label">{label}:</p>'
                        f'{self.render_markdown_latex(value, allow_html=False)}</div>'
                    )
            items.append(f'<div class="concept-item">{"".join(parts)}</div>')

        return (
            '<div class="concepts-block">'
            '<p class="section-label">Concepts</p>'
            f'{"".join(items)}</div>'
        )

    def render_question_card(self, record: QuestionRecord, index: int = 0) -> str:
        """
        Render one question record as a card.

        Args:
            record: Question to render
            index: Position of the record in the displayed list

        Returns:
            HTML <li> element
        """
        header = []
        if record.id:
            header.append(f'<span class="badge badge-id">ID: {html.escape(record.id)}</span>')
        header.append(f'<span class="meta-line">{html.escape(record.meta_line() or "—")}</span>')
        typed_badge = (
            f'<span class="badge badge-type">{html.escape(record.typed)}</span>' if record.typed else ''
        )

        sections = [
            '<div class="question-header">'
            f'<div class="question-meta">{"".join(header)}</div>{typed_badge}</div>'
        ]

        if record.context:
            sections.append(
                '<div class="context-block"><p class="section-label">Context</p>'
                f'{self.render_markdown_latex(record.context, allow_html=False)}</div>'
            )

        if record.question_image:
            sections.append(
                '<div class="question-image">'
                f'<img src="{html.escape(record.question_image, quote=True)}" alt="Question related" '
                'crossorigin="anonymous"></div>'
            )

        sections.append(
            '<div class="question-body"><p class="section-label">Question</p>'
            f'{self.render_markdown_latex(record.question, allow_html=False)}</div>'
        )
        sections.append(self.render_solution_steps(record.solution_steps()))
        sections.append(self.render_concepts(record.concept_items()))

        return f'<li class="question-card" data-question-index="{index}">{"".join(sections)}</li>'

    def render_questions_list(
        self,
        records: Sequence[QuestionRecord],
        start: int = 0,
        limit: Optional[int] = None
    ) -> str:
        """
        Render a list of question cards.

        Args:
            records: Records to render
            start: Index of the first record to show
            limit: Maximum number of records to show (None for all)

        Returns:
            HTML <ul>, or a hint paragraph when there is nothing to show
        """
        if not records:
            return f'<p class="questions-empty">{EMPTY_LIST_MESSAGE}</p>'

        end = len(records) if limit is None else min(start + limit, len(records))
        cards = [
            self.render_question_card(records[index], index)
            for index in range(start, end)
        ]
        return f'<ul class="questions-list">{"".join(cards)}</ul>'

    def get_katex_header(self) -> str:
        """
        Get KaTeX CSS and JS headers for LaTeX rendering.

        Containers marked with data-katex-render="true" are rendered when they
        appear in the DOM and then marked "done".

        Returns:
            HTML string for the page <head>
        """
        return '''
        <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/katex@0.16.9/dist/katex.min.css">
        <script src="https://cdn.jsdelivr.net/npm/katex@0.16.9/dist/katex.min.js"></script>
        <script src="https://cdn.jsdelivr.net/npm/katex@0.16.9/dist/contrib/auto-render.min.js"></script>
        <script>
        function renderAllMath() {
            if (typeof renderMathInElement === 'undefined') {
                return;
            }
            document.querySelectorAll('[data-katex-render="true"]').forEach(function(elem) {
                try {
                    renderMathInElement(elem, {
                        delimiters: [
                            {left: '$$', right: '$$', display: true},
                            {left: '$', right: '$', display: false}
                        ],
                        throwOnError: false,
                        errorColor: '#cc0000',
                        strict: false
                    });
                    elem.setAttribute('data-katex-render', 'done');
                } catch (e) {
                    console.error('KaTeX render failed:', e);
                }
            });
        }

        function waitForKaTeX(callback) {
            if (typeof renderMathInElement !== 'undefined') {
                callback();
            } else {
                setTimeout(function() { waitForKaTeX(callback); }, 100);
            }
        }

        waitForKaTeX(function() {
            renderAllMath();
            const observer = new MutationObserver(function() {
                setTimeout(renderAllMath, 50);
            });
            function observeBody() {
                if (document.body) {
                    observer.observe(document.body, {childList: true, subtree: true});
                } else {
                    setTimeout(observeBody, 100);
                }
            }
            observeBody();
        });
        </script>
        <style>
        .katex { font-size: 1.1em !important; }
        .katex-display { margin: 12px 0 !important; }
        </style>
        '''
