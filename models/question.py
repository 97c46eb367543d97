"""
Question data models for the Study Content Viewer.

Represents a normalized question record and the items derived from its
structured sub-fields (solution steps and concepts).
"""

from dataclasses import dataclass, fields
from typing import Dict, List, Optional


# Literal header text -> raw cell value, one per input line
RawRow = Dict[str, Optional[str]]

CANONICAL_KEYS = (
    "id",
    "class_code",
    "subject_code",
    "topic_code",
    "sub_topic_code",
    "question",
    "question_image",
    "typed",
    "context",
    "step_by_step_solution",
    "concepts",
)

# Fields matched by free-text search
SEARCHABLE_KEYS = (
    "question",
    "class_code",
    "subject_code",
    "topic_code",
    "sub_topic_code",
    "typed",
)


@dataclass(frozen=True)
class SolutionStep:
    """One step of a step-by-step solution."""

    content: str = ""


@dataclass(frozen=True)
class Concept:
    """
    A concept referenced by a question.

    Attributes:
        concept: Concept name
        chapter: Chapter the concept belongs to
        explanation: Explanation text (Markdown + LaTeX)
        example: Worked example (Markdown + LaTeX)
        application: Where the concept is applied (Markdown + LaTeX)
    """

    concept: str = ""
    chapter: str = ""
    explanation: str = ""
    example: str = ""
    application: str = ""


@dataclass(frozen=True)
class QuestionRecord:
    """
    A single normalized question record.

    Every field is a string; missing source data is stored as "".
    Records are never mutated after creation.

    Attributes:
        id: Identifier from the source file (not necessarily unique)
        class_code: Class/grade code
        subject_code: Subject code
        topic_code: Topic code
        sub_topic_code: Sub-topic code
        question: Question text (Markdown + LaTeX), never empty
        question_image: data: URI or URL of the question image
        typed: Question type, e.g. "Exercise" or "Solved"
        context: Context shown above the question
        step_by_step_solution: JSON array of steps or plain text
        concepts: JSON array of concept objects or plain text
    """

    id: str = ""
    class_code: str = ""
    subject_code: str = ""
    topic_code: str = ""
    sub_topic_code: str = ""
    question: str = ""
    question_image: str = ""
    typed: str = ""
    context: str = ""
    step_by_step_solution: str = ""
    concepts: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Return the eleven canonical fields in canonical order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def solution_steps(self) -> List[SolutionStep]:
        """Parse step_by_step_solution into steps (recomputed on every call)."""
        from utils.coercion import parse_solution_steps
        return parse_solution_steps(self.step_by_step_solution)

    def concept_items(self) -> List[Concept]:
        """Parse concepts into Concept items (recomputed on every call)."""
        from utils.coercion import parse_concepts
        return parse_concepts(self.concepts)

    def meta_line(self) -> str:
        """Class/subject/topic/sub-topic summary, joined with middle dots."""
        parts = [
            f"Class {self.class_code}" if self.class_code else "",
            f"Subject {self.subject_code}" if self.subject_code else "",
            f"Topic {self.topic_code}" if self.topic_code else "",
            f"Sub-topic {self.sub_topic_code}" if self.sub_topic_code else "",
        ]
        return " · ".join(part for part in parts if part)

    def matches_query(self, query: str) -> bool:
        """Case-insensitive substring match over the searchable fields."""
        needle = (query or "").strip().lower()
        if not needle:
            return True

        haystack = " ".join(
            getattr(self, key) for key in SEARCHABLE_KEYS if getattr(self, key)
        )
        return needle in haystack.lower()

    def matches_type(self, typed: str) -> bool:
        """Match the question type; "all" (or empty) matches everything."""
        if not typed or typed == "all":
            return True
        return self.typed.lower() == typed.lower()
