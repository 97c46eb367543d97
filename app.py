"""
Study Content Viewer

Main entry point for the Gradio application.
"""

import gradio as gr

from config import get_config
from models import ApplicationState, AutoScroll
from services import RenderEngine
from ui.layout import create_viewer_layout
from ui.event_handlers import (
    PHYSICS_SNIPPET,
    QUADRATIC_SNIPPET,
    handle_clear,
    handle_editor_change,
    handle_export,
    handle_file_upload,
    handle_filter_change,
    handle_interval_change,
    handle_load_sample,
    handle_scroll_tick,
    handle_start_scroll,
    handle_stop_scroll,
    handle_toggle_pause,
    insert_snippet
)


def main():
    """Main application entry point."""
    config = get_config()
    # Initialize render engine for KaTeX support
    render_engine = RenderEngine()

    with gr.Blocks(
        title="Study Content Viewer",
        theme=gr.themes.Soft(),
        head=render_engine.get_katex_header()
    ) as app:

        # Application State (copied per browser session)
        app_state = gr.State(ApplicationState(
            auto_scroll=AutoScroll(
                interval=config.default_scroll_interval,
                interval_choices=config.scroll_interval_choices
            )
        ))

        components = create_viewer_layout(config)

        # ========== Event Handlers ==========

        # Outputs shared by every handler that changes the question list
        view_outputs = [
            app_state,
            components['upload_status'],
            components['questions_display'],
            components['start_scroll_btn'],
            components['stop_scroll_btn'],
            components['pause_scroll_btn'],
            components['interval_dropdown'],
            components['scroll_status'],
            components['scroll_timer']
        ]

        # Editor: preview and plain text follow the content
        editor_outputs = [components['preview_display'], components['plain_text']]

        components['editor'].change(
            fn=handle_editor_change,
            inputs=[components['editor']],
            outputs=editor_outputs
        )
        app.load(
            fn=handle_editor_change,
            inputs=[components['editor']],
            outputs=editor_outputs
        )

        components['insert_quadratic_btn'].click(
            fn=lambda content: insert_snippet(content, QUADRATIC_SNIPPET),
            inputs=[components['editor']],
            outputs=[components['editor']]
        )
        components['insert_physics_btn'].click(
            fn=lambda content: insert_snippet(content, PHYSICS_SNIPPET),
            inputs=[components['editor']],
            outputs=[components['editor']]
        )

        # Ingestion
        components['csv_upload'].upload(
            fn=handle_file_upload,
            inputs=[components['csv_upload'], components['delimiter_dropdown'], app_state],
            outputs=view_outputs
        )
        components['load_sample_btn'].click(
            fn=handle_load_sample,
            inputs=[app_state],
            outputs=view_outputs
        )
        components['clear_btn'].click(
            fn=handle_clear,
            inputs=[app_state],
            outputs=view_outputs
        )

        # Search / type filter
        filter_inputs = [components['search_input'], components['type_filter'], app_state]
        components['search_input'].change(
            fn=handle_filter_change,
            inputs=filter_inputs,
            outputs=view_outputs
        )
        components['type_filter'].change(
            fn=handle_filter_change,
            inputs=filter_inputs,
            outputs=view_outputs
        )

        # Auto-scroll
        components['start_scroll_btn'].click(
            fn=handle_start_scroll,
            inputs=[app_state],
            outputs=view_outputs
        )
        components['stop_scroll_btn'].click(
            fn=handle_stop_scroll,
            inputs=[app_state],
            outputs=view_outputs
        )
        components['pause_scroll_btn'].click(
            fn=handle_toggle_pause,
            inputs=[app_state],
            outputs=view_outputs
        )
        components['scroll_timer'].tick(
            fn=handle_scroll_tick,
            inputs=[app_state],
            outputs=view_outputs
        )
        components['interval_dropdown'].change(
            fn=handle_interval_change,
            inputs=[components['interval_dropdown'], app_state],
            outputs=[app_state, components['scroll_timer']]
        )

        # Export
        components['export_btn'].click(
            fn=handle_export,
            inputs=[components['export_format_dropdown'], app_state],
            outputs=[components['export_file'], components['upload_status']]
        )

        # Footer
        gr.HTML('<hr style="border: 1px solid #e0e0e0; margin: 20px 0;">')
        gr.Markdown("✅ Ready. Upload a CSV/TSV file or load the sample data to browse questions.")

    return app


def run():
    """Build the app and serve it on the configured host and port."""
    config = get_config()
    app = main()
    app.launch(
        server_name=config.server_name,
        server_port=config.server_port,
        show_error=True,
        quiet=False
    )


if __name__ == "__main__":
    run()
