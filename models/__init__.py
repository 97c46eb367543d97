"""Data models for the Study Content Viewer."""

from .question import (
    CANONICAL_KEYS,
    Concept,
    QuestionRecord,
    RawRow,
    SolutionStep,
)
from .auto_scroll import AutoScroll, ScrollState
from .application_state import ApplicationState

__all__ = [
    "CANONICAL_KEYS",
    "Concept",
    "QuestionRecord",
    "RawRow",
    "SolutionStep",
    "AutoScroll",
    "ScrollState",
    "ApplicationState",
]
