"""UI components for the Study Content Viewer."""

from .layout import (
    create_viewer_layout,
    get_global_css
)
from .event_handlers import (
    generate_status_html,
    render_questions_view,
    scroll_controls,
    handle_file_upload,
    handle_load_sample,
    handle_clear,
    handle_filter_change,
    handle_editor_change,
    insert_snippet,
    handle_start_scroll,
    handle_stop_scroll,
    handle_toggle_pause,
    handle_scroll_tick,
    handle_interval_change,
    handle_export
)

__all__ = [
    "create_viewer_layout",
    "get_global_css",
    "generate_status_html",
    "render_questions_view",
    "scroll_controls",
    "handle_file_upload",
    "handle_load_sample",
    "handle_clear",
    "handle_filter_change",
    "handle_editor_change",
    "insert_snippet",
    "handle_start_scroll",
    "handle_stop_scroll",
    "handle_toggle_pause",
    "handle_scroll_tick",
    "handle_interval_change",
    "handle_export"
]
