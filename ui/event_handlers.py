"""
Event handlers for UI components.

Handles user interactions and state updates. Handlers take the session
ApplicationState and return output tuples in the order wired up in app.py.
"""

import html
import logging
import os
from typing import Optional, Tuple

import gradio as gr

from config import get_config
from models import ApplicationState, AutoScroll
from services import DataManager, ExportManager, IngestionError, RenderEngine
from utils.validation import validate_scroll_interval, validate_type_filter, validate_upload_path

logger = logging.getLogger(__name__)


QUADRATIC_SNIPPET = r"$$\frac{-b \pm \sqrt{b^2-4ac}}{2a}$$"
PHYSICS_SNIPPET = "`E = mc^2` and $F = ma$"


def generate_status_html(state: ApplicationState, shown: int) -> str:
    """
    Build the load status line.

    Args:
        state: Current application state
        shown: Number of records passing the current filters

    Returns:
        HTML for the status area
    """
    if state.error:
        return f'<div class="load-status error">Error: {html.escape(state.error)}</div>'

    total = state.get_total_loaded()
    plural = "" if total == 1 else "s"
    return (
        f'<div class="load-status">Loaded <strong>{total}</strong> row{plural}. '
        f'Showing <strong>{shown}</strong>.</div>'
    )


def generate_scroll_status_html(auto_scroll: AutoScroll) -> str:
    """Indicator shown next to the auto-scroll buttons."""
    if not auto_scroll.enabled:
        return '<div class="scroll-status"></div>'

    if auto_scroll.paused:
        return '<div class="scroll-status"><span class="scroll-dot paused"></span>Paused</div>'

    return (
        '<div class="scroll-status"><span class="scroll-dot running"></span>'
        f'Scrolling every {auto_scroll.interval}s</div>'
    )


def scroll_controls(auto_scroll: AutoScroll) -> Tuple:
    """
    Updates for the auto-scroll controls.

    Returns:
        Tuple of (start_btn, stop_btn, pause_btn, interval_dropdown,
        scroll_status, scroll_timer)
    """
    enabled = auto_scroll.enabled
    return (
        gr.update(visible=not enabled),
        gr.update(visible=enabled),
        gr.update(visible=enabled, value="▶ Resume" if auto_scroll.paused else "⏸ Pause"),
        gr.update(interactive=not enabled),
        generate_scroll_status_html(auto_scroll),
        gr.Timer(value=auto_scroll.interval, active=auto_scroll.timer_active)
    )


def render_questions_view(state: ApplicationState) -> Tuple[str, str]:
    """
    Render the status line and the visible part of the question list.

    While auto-scroll is on, only a window of records starting at the
    scroll position is shown.

    Returns:
        Tuple of (status_html, questions_html)
    """
    config = get_config()
    filtered = DataManager.filter_records(state.records, state.query, state.typed_filter)
    start, end = state.auto_scroll.window(len(filtered), config.auto_scroll_page_size)

    questions_html = RenderEngine().render_questions_list(filtered, start, end - start)
    return generate_status_html(state, len(filtered)), questions_html


def _view(state: ApplicationState) -> Tuple:
    """Full output tuple: state, status, questions and the scroll controls."""
    status_html, questions_html = render_questions_view(state)
    return (state, status_html, questions_html) + scroll_controls(state.auto_scroll)


def _count_filtered(state: ApplicationState) -> int:
    return len(DataManager.filter_records(state.records, state.query, state.typed_filter))


async def handle_file_upload(file_path: Optional[str], delimiter: Optional[str], state: ApplicationState) -> Tuple:
    """
    Load an uploaded CSV/TSV file into the state.

    On failure the previous records stay loaded and the error is shown in
    the status line.

    Args:
        file_path: Path of the uploaded file
        delimiter: Explicit delimiter, or ""/None to auto-detect
        state: Current application state

    Returns:
        Output tuple (see _view)
    """
    is_valid, error_msg = validate_upload_path(file_path)
    if not is_valid:
        gr.Warning(error_msg, duration=2.0)
        return _view(state)

    try:
        records = await DataManager().load_file_async(file_path, delimiter or None)
        state.publish(records, os.path.basename(file_path))
        gr.Info(f"Loaded {len(records)} questions", duration=2.0)

    except IngestionError as e:
        logger.warning("Upload failed for %s: %s", file_path, e)
        state.publish_error(str(e))

    except ValueError as e:
        logger.warning("Upload rejected for %s: %s", file_path, e)
        state.publish_error(str(e))

    except Exception as e:
        logger.warning("Unexpected upload failure for %s: %s", file_path, e)
        state.publish_error(f"Failed to load questions: {e}")

    return _view(state)


async def handle_load_sample(state: ApplicationState) -> Tuple:
    """
    Load the bundled sample dataset into the state.

    Returns:
        Output tuple (see _view)
    """
    try:
        records = await DataManager().load_sample_async()
        state.publish(records, "sample-questions")
        gr.Info(f"Loaded {len(records)} sample questions", duration=2.0)

    except IngestionError as e:
        logger.warning("Sample load failed: %s", e)
        state.publish_error(str(e))

    except Exception as e:
        logger.warning("Unexpected sample load failure: %s", e)
        state.publish_error(f"Failed to load sample data: {e}")

    return _view(state)


def handle_clear(state: ApplicationState) -> Tuple:
    """Drop all loaded questions."""
    state.clear()
    return _view(state)


def handle_filter_change(query: str, typed_filter: str, state: ApplicationState) -> Tuple:
    """
    Apply a new search query / type filter.

    Returns:
        Output tuple (see _view)
    """
    is_valid, error_msg = validate_type_filter(typed_filter or "all")
    if not is_valid:
        gr.Warning(error_msg, duration=2.0)
        typed_filter = "all"

    state.set_filters(query, typed_filter)
    return _view(state)


def handle_editor_change(content: str) -> Tuple[str, str]:
    """
    Render the editor content.

    Returns:
        Tuple of (preview_html, plain_text)
    """
    render_engine = RenderEngine()
    return render_engine.render_markdown_latex(content), render_engine.markdown_to_plain(content)


def insert_snippet(content: str, snippet: str) -> str:
    """Append a snippet to the editor content after a blank line."""
    return f"{content or ''}\n\n{snippet}"


def handle_start_scroll(state: ApplicationState) -> Tuple:
    """Start auto-scroll from the first visible question."""
    if not state.auto_scroll.start(_count_filtered(state)):
        gr.Warning("No questions to scroll", duration=2.0)
    return _view(state)


def handle_stop_scroll(state: ApplicationState) -> Tuple:
    """Stop auto-scroll and show the full list again."""
    state.auto_scroll.stop()
    return _view(state)


def handle_toggle_pause(state: ApplicationState) -> Tuple:
    """Pause or resume auto-scroll."""
    state.auto_scroll.toggle_pause()
    return _view(state)


def handle_scroll_tick(state: ApplicationState) -> Tuple:
    """
    Advance auto-scroll by one question (timer tick).

    Stops at the last question.
    """
    was_enabled = state.auto_scroll.enabled
    state.auto_scroll.tick(_count_filtered(state))
    if was_enabled and state.auto_scroll.reached_end:
        gr.Info("Reached the last question", duration=2.0)
    return _view(state)


def handle_interval_change(interval, state: ApplicationState) -> Tuple:
    """
    Change the auto-scroll interval.

    Returns:
        Tuple of (state, scroll_timer)
    """
    is_valid, error_msg = validate_scroll_interval(interval, state.auto_scroll.interval_choices)
    if not is_valid:
        gr.Warning(error_msg, duration=2.0)
    else:
        try:
            state.auto_scroll.set_interval(int(interval))
        except ValueError as e:
            gr.Warning(str(e), duration=2.0)

    return state, gr.Timer(value=state.auto_scroll.interval, active=state.auto_scroll.timer_active)


def handle_export(export_format: str, state: ApplicationState) -> Tuple:
    """
    Export the questions currently shown.

    Returns:
        Tuple of (export_file update, status_html)
    """
    records = DataManager.filter_records(state.records, state.query, state.typed_filter)

    try:
        export_manager = ExportManager(format=export_format)
        file_path = export_manager.export_records(records, state.source_name or "questions")
        gr.Info(f"Exported {len(records)} questions", duration=2.0)
        return (
            gr.update(value=file_path, visible=True),
            f'<div class="load-status">✅ Exported {len(records)} questions to: {html.escape(file_path)}</div>'
        )

    except ValueError as e:
        gr.Warning(str(e), duration=2.0)
        return gr.update(value=None, visible=False), f'<div class="load-status">⚠️ {html.escape(str(e))}</div>'

    except Exception as e:
        logger.warning("Export failed: %s", e)
        gr.Warning(f"Export failed: {e}", duration=2.0)
        return gr.update(value=None, visible=False), f'<div class="load-status error">❌ Export failed: {html.escape(str(e))}</div>'
