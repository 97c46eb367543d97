"""
UI layout components for the Study Content Viewer.

Defines the Gradio layout: Markdown + LaTeX editor with preview and plain
text, question upload with search/filter, and the question list with
auto-scroll controls.
"""

import gradio as gr
from typing import Dict, Any, Optional

from config import ViewerConfig, get_config
from services.render_engine import EMPTY_LIST_MESSAGE


SAMPLE_MARKDOWN = r"""# LaTeX + Markdown Preview

Inline math like $a^2 + b^2 = c^2$ and block math:

$$
\int_0^{\infty} e^{-x^2} \, dx = \frac{\sqrt{\pi}}{2}
$$

- Supports **bold**, _italics_, and tables:

| Symbol | Meaning        |
|-------:|----------------|
|  $\alpha$ | Alpha letter   |
|  $\sum$   | Summation sign |

> Tip: Edit the text above to see changes below.

Code:
```python
area = lambda r: math.pi * r ** 2
```
"""


# Global styles: card layout for questions, blue accents, compact rows
GLOBAL_CSS = """
<style>
.gradio-container {
    font-size: 16px !important;
}

/* Section titles */
.column-title {
    background: #e3f2fd;
    padding: 8px 12px;
    border-radius: 6px;
    border-left: 4px solid #1976d2;
    font-size: 18px !important;
    font-weight: bold;
    margin-bottom: 8px;
}

.section-hint {
    font-size: 14px;
    color: #666;
    margin: 0 0 6px 0;
}

/* Load status */
.load-status {
    padding: 10px 15px !important;
    border-radius: 6px !important;
    font-size: 15px !important;
    background: #fafafa !important;
    border: 2px solid #90caf9 !important;
}

.load-status.error {
    border-color: #f44336 !important;
    color: #c62828 !important;
}

/* Rendered preview */
#preview_display {
    border: 2px solid #1976d2 !important;
    border-radius: 8px !important;
    min-height: 260px;
    max-height: 600px;
    overflow-y: auto !important;
    background: #fafafa !important;
}

.markdown-body {
    line-height: 1.7 !important;
    padding: 10px;
}

.markdown-body table {
    border-collapse: collapse;
}

.markdown-body th, .markdown-body td {
    border: 1px solid #ddd;
    padding: 4px 8px;
}

/* Question list */
.questions-list {
    list-style: none;
    padding: 0;
    margin: 0;
}

.questions-empty {
    color: #666;
    font-size: 15px;
}

.question-card {
    border: 1px solid #90caf9;
    border-radius: 8px;
    padding: 14px;
    margin-bottom: 14px;
    background: #fff;
}

.question-header {
    display: flex;
    justify-content: space-between;
    align-items: flex-start;
    gap: 10px;
    margin-bottom: 8px;
}

.question-meta {
    display: flex;
    flex-wrap: wrap;
    gap: 8px;
    align-items: center;
    font-size: 14px;
    color: #555;
}

.badge {
    display: inline-block;
    padding: 2px 8px;
    border-radius: 10px;
    font-size: 13px;
    font-weight: bold;
}

.badge-id {
    background: #eceff1;
    color: #37474f;
}

.badge-type {
    background: #e3f2fd;
    color: #1976d2;
    border: 1px solid #1976d2;
}

.section-label {
    font-weight: bold;
    color: #1976d2;
    margin: 8px 0 4px 0 !important;
}

.context-block {
    background: #f5f5f5;
    border-left: 3px solid #bdbdbd;
    padding: 4px 10px;
    margin-bottom: 8px;
}

.question-image img {
    max-width: 100%;
    max-height: 320px;
    border-radius: 6px;
}

.solution-step {
    display: flex;
    gap: 10px;
    align-items: flex-start;
    margin: 6px 0;
}

.step-number {
    flex: 0 0 26px;
    height: 26px;
    border-radius: 13px;
    background: #1976d2;
    color: white;
    text-align: center;
    line-height: 26px;
    font-size: 13px;
    font-weight: bold;
}

.step-content {
    flex: 1;
}

.concept-item {
    border: 1px solid #e0e0e0;
    border-radius: 6px;
    padding: 8px 10px;
    margin: 6px 0;
}

.concept-title {
    font-weight: bold;
    margin: 0 !important;
}

.concept-chapter, .field-label {
    font-size: 13px;
    color: #666;
    margin: 2px 0 !important;
}

/* Auto-scroll status */
.scroll-status {
    font-size: 13px;
    color: #666;
}

.scroll-dot {
    display: inline-block;
    width: 8px;
    height: 8px;
    border-radius: 4px;
    margin-right: 6px;
}

.scroll-dot.running {
    background: #4CAF50;
}

.scroll-dot.paused {
    background: #ffc107;
}

/* Button colors */
.primary-btn {
    background: #1976d2 !important;
    color: white !important;
}

.success-btn {
    background: #4CAF50 !important;
    color: white !important;
}

.danger-btn {
    background: #f44336 !important;
    color: white !important;
}

.secondary-btn {
    background: #e3f2fd !important;
    color: #1976d2 !important;
    border: 1px solid #1976d2 !important;
}

.compact-row {
    margin: 3px 0 !important;
}
</style>
"""


def get_global_css() -> str:
    """Return the global CSS block."""
    return GLOBAL_CSS


def create_header_with_instructions(components: Dict[str, Any]) -> None:
    """Title row with usage instructions and export settings."""
    with gr.Row():
        with gr.Column(scale=3):
            gr.Markdown("# 📚 LaTeX to Text, with Markdown Preview")
            gr.Markdown(
                "Type Markdown and LaTeX, preview it with KaTeX, extract clean plain text, "
                "and browse question banks uploaded as CSV/TSV."
            )

        with gr.Column(scale=3):
            with gr.Accordion("📖 How to use", open=False):
                gr.Markdown("""
**1. Editor:** type Markdown + LaTeX; the rendered preview and the plain text update as you type.

**2. Upload questions:** choose a CSV or TSV file. Comma, tab, pipe and semicolon separated files are detected automatically. The first row must be the header, and rows without a `question` are skipped.

**3. Sample data:** click "Load Sample Data" to try the bundled question set.

**4. Search and filter:** search matches the question text and the class/subject/topic codes; the type filter keeps Exercise or Solved questions.

**5. Auto-scroll:** pick an interval and press Start; the list steps forward one question per interval and stops at the last one.

**6. Export:** writes the questions currently shown to CSV, TSV or JSON.
                """)

        with gr.Column(scale=2):
            with gr.Accordion("⚙️ Settings", open=False):
                components['delimiter_dropdown'] = gr.Dropdown(
                    choices=[
                        ("Auto-detect", ""),
                        ("Comma (,)", ","),
                        ("Tab", "\t"),
                        ("Pipe (|)", "|"),
                        ("Semicolon (;)", ";")
                    ],
                    value="",
                    label="Upload delimiter"
                )

                components['export_format_dropdown'] = gr.Dropdown(
                    choices=[("CSV", "csv"), ("TSV", "tsv"), ("JSON", "json")],
                    value="csv",
                    label="Export format"
                )

    gr.HTML('<hr style="border: 2px solid #1976d2; margin: 3px 0;">')


def create_editor_section(components: Dict[str, Any]) -> None:
    """Editor with snippet buttons, rendered preview and plain text."""
    gr.HTML('<div class="column-title">📝 Editor</div>')
    components['editor'] = gr.Textbox(
        value=SAMPLE_MARKDOWN,
        label="Markdown + LaTeX",
        lines=10,
        max_lines=30,
        placeholder="Type your Markdown + LaTeX here...",
        show_copy_button=True,
        interactive=True
    )

    with gr.Row(elem_classes=["compact-row"]):
        components['insert_quadratic_btn'] = gr.Button(
            "➕ Insert Quadratic Formula",
            size="sm",
            elem_classes=["secondary-btn"]
        )
        components['insert_physics_btn'] = gr.Button(
            "➕ Insert Physics",
            size="sm",
            elem_classes=["secondary-btn"]
        )

    with gr.Row():
        with gr.Column(scale=1):
            gr.HTML('<div class="column-title">👁️ Rendered Preview</div>')
            components['preview_display'] = gr.HTML(
                value="",
                elem_id="preview_display"
            )

        with gr.Column(scale=1):
            gr.HTML('<div class="column-title">📄 Plain Text</div>')
            components['plain_text'] = gr.Textbox(
                value="",
                label="Markdown + LaTeX stripped",
                lines=12,
                max_lines=30,
                show_copy_button=True,
                interactive=False
            )


def create_upload_section(components: Dict[str, Any]) -> None:
    """Upload, sample/clear buttons, search/filter and export."""
    gr.HTML('<div class="column-title">📁 Upload Questions (CSV / TSV)</div>')
    gr.HTML('<p class="section-hint">Comma or tab separated is detected automatically. Headers required.</p>')

    with gr.Row():
        with gr.Column(scale=3):
            components['csv_upload'] = gr.File(
                label="📁 Upload CSV or TSV file",
                file_types=[".csv", ".tsv", ".txt"],
                type="filepath",
                height=100
            )

        with gr.Column(scale=1):
            components['load_sample_btn'] = gr.Button(
                "🧪 Load Sample Data",
                elem_classes=["primary-btn"]
            )
            components['clear_btn'] = gr.Button(
                "🗑️ Clear",
                elem_classes=["danger-btn"]
            )

    with gr.Row(elem_classes=["compact-row"]):
        with gr.Column(scale=3):
            components['search_input'] = gr.Textbox(
                label="Search",
                placeholder="Search questions or metadata…",
                show_label=False
            )

        with gr.Column(scale=1):
            components['type_filter'] = gr.Dropdown(
                choices=[("All types", "all"), ("Exercise", "Exercise"), ("Solved", "Solved")],
                value="all",
                show_label=False
            )

    with gr.Row(elem_classes=["compact-row"]):
        with gr.Column(scale=3):
            components['upload_status'] = gr.HTML(
                '<div class="load-status">Loaded <strong>0</strong> rows. Showing <strong>0</strong>.</div>'
            )

        with gr.Column(scale=1):
            components['export_btn'] = gr.Button(
                "💾 Export Shown Questions",
                elem_classes=["success-btn"]
            )

    components['export_file'] = gr.File(
        label="📥 Export download",
        interactive=False,
        height=80,
        visible=False
    )


def create_questions_section(components: Dict[str, Any], config: ViewerConfig) -> None:
    """Question list with auto-scroll controls and the driving timer."""
    gr.HTML('<div class="column-title">❓ Questions</div>')

    with gr.Row(elem_classes=["compact-row"]):
        with gr.Column(scale=1):
            components['interval_dropdown'] = gr.Dropdown(
                choices=[(f"{seconds}s", seconds) for seconds in config.scroll_interval_choices],
                value=config.default_scroll_interval,
                label="⏱️ Auto-scroll every"
            )

        with gr.Column(scale=1):
            components['start_scroll_btn'] = gr.Button(
                "▶ Start",
                elem_classes=["primary-btn"]
            )
            components['stop_scroll_btn'] = gr.Button(
                "⏹ Stop",
                visible=False,
                elem_classes=["danger-btn"]
            )

        with gr.Column(scale=1):
            components['pause_scroll_btn'] = gr.Button(
                "⏸ Pause",
                visible=False,
                elem_classes=["secondary-btn"]
            )

        with gr.Column(scale=2):
            components['scroll_status'] = gr.HTML('<div class="scroll-status"></div>')

    components['questions_display'] = gr.HTML(
        value=f'<p class="questions-empty">{EMPTY_LIST_MESSAGE}</p>',
        elem_id="questions_display"
    )

    components['scroll_timer'] = gr.Timer(
        value=config.default_scroll_interval,
        active=False
    )


def create_viewer_layout(config: Optional[ViewerConfig] = None) -> Dict[str, Any]:
    """
    Create the complete viewer layout.

    Args:
        config: Configuration for interval choices (default: process configuration)

    Returns:
        Dictionary of all UI components by name
    """
    config = config or get_config()
    components = {}

    gr.HTML(get_global_css())

    create_header_with_instructions(components)
    create_editor_section(components)

    gr.HTML('<hr style="border: 1px solid #90caf9; margin: 8px 0;">')
    create_upload_section(components)

    gr.HTML('<hr style="border: 1px solid #90caf9; margin: 8px 0;">')
    create_questions_section(components, config)

    return components
