"""
Header normalization utilities.

Maps free-form column header spellings ("Class Code", "CLASS-CODE",
"class_code") onto canonical field names.
"""

import re
from typing import Dict, Optional

from models import RawRow


_SEPARATOR_RUN = re.compile(r'[\s\-]+')
_NON_WORD = re.compile(r'[^a-z0-9_]', re.ASCII)


def normalize_header(raw_key: str) -> str:
    """
    Normalize a column header to its canonical spelling.

    Lowercases, trims outer whitespace (so " question" is "question", not
    "_question"), turns each inner run of whitespace or hyphens into a single
    underscore and drops everything that is not an ASCII letter, digit or
    underscore. Never fails; may return "".

    Args:
        raw_key: Header text as it appeared in the file

    Returns:
        Normalized key
    """
    if raw_key is None:
        return ""

    key = str(raw_key).lower().strip()
    key = _SEPARATOR_RUN.sub('_', key)
    return _NON_WORD.sub('', key)


def normalize_row_keys(row: RawRow) -> Dict[str, Optional[str]]:
    """
    Normalize every key of a raw row.

    Keys are processed in the row's left-to-right order, so when two headers
    normalize to the same key the rightmost value wins. Keys that normalize
    to "" are discarded.

    Args:
        row: Raw row keyed by literal header text

    Returns:
        Row keyed by normalized header names
    """
    normalized = {}
    for raw_key, value in row.items():
        key = normalize_header(raw_key)
        if key:
            normalized[key] = value
    return normalized
