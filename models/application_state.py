"""
Application state model for the Study Content Viewer.

Holds the loaded question records, the active search/type filter, the last
ingestion error and the auto-scroll controller for one browser session.
"""

from dataclasses import dataclass, field
from typing import Iterable, Tuple

from .auto_scroll import AutoScroll
from .question import QuestionRecord


@dataclass
class ApplicationState:
    """
    Per-session application state container.

    Attributes:
        records: Records from the last successful ingestion
        source_name: Name of the file (or sample) the records came from
        query: Free-text search
        typed_filter: "all" or a question type
        error: Message of the last failed ingestion, "" after a success
        auto_scroll: Auto-scroll controller
    """

    records: Tuple[QuestionRecord, ...] = ()
    source_name: str = ""
    query: str = ""
    typed_filter: str = "all"
    error: str = ""
    auto_scroll: AutoScroll = field(default_factory=AutoScroll)

    def publish(self, records: Iterable[QuestionRecord], source_name: str = ""):
        """
        Replace the loaded records wholesale with a finished ingestion result.

        The last call to complete wins; earlier results are simply overwritten.
        """
        self.records = tuple(records)
        self.source_name = source_name
        self.error = ""
        self.auto_scroll.stop()
        self.auto_scroll.reset_position()

    def publish_error(self, message: str):
        """Record a failed ingestion, leaving the loaded records untouched."""
        self.error = message

    def clear(self):
        """Drop all loaded records."""
        self.records = ()
        self.source_name = ""
        self.error = ""
        self.auto_scroll.stop()
        self.auto_scroll.reset_position()

    def set_filters(self, query: str, typed_filter: str):
        """Update search/type filter; the visible list restarts from the top."""
        self.query = query or ""
        self.typed_filter = typed_filter or "all"
        self.auto_scroll.reset_position()

    def get_total_loaded(self) -> int:
        """Get total number of loaded records."""
        return len(self.records)
