"""
Field coercion utilities.

Per-field transforms applied while assembling question records:
- to_text: trimmed plain text
- to_image_ref: image URL / data URI classification
- parse_solution_steps / parse_concepts: JSON array or plain text

All functions are total: bad input is defaulted, never raised.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, List, Union

import pandas as pd

from models import Concept, SolutionStep


DATA_URI_PREFIX = "data:"
BASE64_IMAGE_PREFIX = "data:image/png;base64,"

_BASE64_PAYLOAD = re.compile(r'[A-Za-z0-9+/=]+')

CONCEPT_FIELDS = ("concept", "chapter", "explanation", "example", "application")


def to_text(value: Any) -> str:
    """
    Coerce a cell value to trimmed text.

    Args:
        value: Raw cell value (str, None, NaN, number, ...)

    Returns:
        Stripped string, "" for missing values
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    return str(value).strip()


def is_base64_payload(value: str) -> bool:
    """True when the value consists only of base64 alphabet characters."""
    return bool(value) and _BASE64_PAYLOAD.fullmatch(value) is not None


def to_image_ref(value: Any) -> str:
    """
    Classify an image cell.

    - "" stays ""
    - a data: URI passes through unchanged
    - a bare base64 payload is wrapped as a PNG data URI
    - anything else is treated as a URL and passed through

    A URL made only of base64 characters (e.g. a bare hostname without dots)
    is indistinguishable from a payload and gets wrapped.

    Args:
        value: Raw cell value

    Returns:
        data: URI, URL or ""
    """
    if value is None:
        return ""

    text = value if isinstance(value, str) else to_text(value)
    if not text:
        return ""

    if text.startswith(DATA_URI_PREFIX):
        return text

    trimmed = text.strip()
    if is_base64_payload(trimmed):
        return f"{BASE64_IMAGE_PREFIX}{trimmed}"

    return text


@dataclass(frozen=True)
class Structured:
    """Cell that held a JSON array."""

    items: list


@dataclass(frozen=True)
class Plain:
    """Cell that held anything else; kept as its trimmed text."""

    text: str


def parse_structured(value: Any) -> Union[Structured, Plain]:
    """
    Try to read a cell as a JSON array.

    Args:
        value: Raw cell value

    Returns:
        Structured(items) for a JSON array, Plain(trimmed text) otherwise
    """
    text = to_text(value)
    try:
        parsed = json.loads(text)
    except (ValueError, TypeError, RecursionError):
        return Plain(text)

    if isinstance(parsed, list):
        return Structured(parsed)
    return Plain(text)


def _stringify(item: Any) -> str:
    """Strings as-is, everything else as compact JSON."""
    if isinstance(item, str):
        return item
    return json.dumps(item, ensure_ascii=False, separators=(',', ':'))


def parse_solution_steps(value: Any) -> List[SolutionStep]:
    """
    Parse a step-by-step solution cell.

    Args:
        value: JSON array of steps, or plain text

    Returns:
        One SolutionStep per array element, or a single step holding the
        whole text; [] for an empty or whitespace-only cell
    """
    if not to_text(value):
        return []

    result = parse_structured(value)
    if isinstance(result, Structured):
        return [SolutionStep(content=_stringify(item)) for item in result.items]

    return [SolutionStep(content=result.text)]


def _concept_from_item(item: Any) -> Concept:
    if isinstance(item, dict):
        return Concept(**{
            name: _stringify(item[name]) if item.get(name) else ""
            for name in CONCEPT_FIELDS
        })
    return Concept(concept=_stringify(item))


def parse_concepts(value: Any) -> List[Concept]:
    """
    Parse a concepts cell.

    Args:
        value: JSON array of concept objects, or plain text

    Returns:
        One Concept per array element (missing sub-fields default to ""),
        or a single Concept whose name is the whole text; [] for an empty or
        whitespace-only cell
    """
    if not to_text(value):
        return []

    result = parse_structured(value)
    if isinstance(result, Structured):
        return [_concept_from_item(item) for item in result.items]

    return [Concept(concept=result.text)]
