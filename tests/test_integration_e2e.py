"""
End-to-end integration tests for complete workflow.

Tests the full workflow: Load sample → Filter → Auto-scroll → Export →
Upload the export again
"""

import asyncio
import os

from models import ApplicationState
from ui.event_handlers import (
    handle_clear,
    handle_export,
    handle_file_upload,
    handle_filter_change,
    handle_load_sample,
    handle_scroll_tick,
    handle_start_scroll
)


def test_complete_workflow(tmp_path, monkeypatch):
    """
    Test complete workflow on the sample data:
    Load sample → Filter → Export → Re-upload the export
    """
    monkeypatch.chdir(tmp_path)
    state = ApplicationState()

    # Step 1: Load sample data (one draft row has no question)
    outputs = asyncio.run(handle_load_sample(state))
    assert "Loaded <strong>5</strong> rows" in outputs[1]
    assert outputs[2].count('class="question-card"') == 5

    # Step 2: Filter by type
    outputs = handle_filter_change("", "Solved", state)
    assert "Showing <strong>3</strong>" in outputs[1]

    # Step 3: Search within metadata
    outputs = handle_filter_change("chem", "all", state)
    assert outputs[2].count('class="question-card"') == 1
    assert "ID: Q004" in outputs[2]

    # Concepts are not searched
    outputs = handle_filter_change("pythagorean", "all", state)
    assert "Showing <strong>0</strong>" in outputs[1]

    # Step 4: Export the math questions
    handle_filter_change("math", "all", state)
    file_update, status = handle_export("tsv", state)
    export_path = file_update["value"]
    assert os.path.exists(export_path)
    assert "Exported 3 questions" in status
    assert os.path.basename(export_path).startswith("sample-questions_")

    # Step 5: Upload the export into a fresh session
    fresh = ApplicationState()
    outputs = asyncio.run(handle_file_upload(export_path, "\t", fresh))
    assert fresh.error == ""
    assert [record.id for record in fresh.records] == ["Q001", "Q003", "Q005"]
    assert list(fresh.records) == [r for r in state.records if r.subject_code == "MATH"]


def test_sample_cards_render_all_sections():
    """Test that sample cards show images, steps and concepts."""
    state = ApplicationState()

    html = asyncio.run(handle_load_sample(state))[2]

    assert 'src="https://example.com/images/force-diagram.png"' in html
    assert 'src="data:image/png;base64,iVBORw0KGgo' in html
    assert "Step-by-Step Solution" in html
    assert "Chapter: Structure of the Atom" in html
    assert ">Solved</span>" in html


def test_auto_scroll_through_sample():
    """Test auto-scrolling the sample from the first to the last question."""
    state = ApplicationState()
    asyncio.run(handle_load_sample(state))

    outputs = handle_start_scroll(state)
    assert outputs[2].count('class="question-card"') == 3
    assert 'data-question-index="0"' in outputs[2]

    for _ in range(4):
        outputs = handle_scroll_tick(state)
    assert outputs[2].count('class="question-card"') == 1
    assert 'data-question-index="4"' in outputs[2]

    outputs = handle_scroll_tick(state)
    assert state.auto_scroll.reached_end
    assert outputs[2].count('class="question-card"') == 5
    assert outputs[8].active is False


def test_upload_replaces_and_error_keeps(tmp_path):
    """Test replacing the sample with an upload, then a failed upload."""
    state = ApplicationState()
    asyncio.run(handle_load_sample(state))

    path = tmp_path / "pipe.txt"
    path.write_text("ID|Question|Typed\nP1|What is $1+1$?|Exercise\n", encoding="utf-8")
    outputs = asyncio.run(handle_file_upload(str(path), "", state))
    assert "Loaded <strong>1</strong> row." in outputs[1]
    assert state.records[0].question == "What is $1+1$?"

    outputs = asyncio.run(handle_file_upload(str(tmp_path / "gone.csv"), "", state))
    assert "Error:" in outputs[1]
    assert 'data-question-index="0"' in outputs[2]
    assert state.records[0].id == "P1"

    handle_clear(state)
    assert state.get_total_loaded() == 0
