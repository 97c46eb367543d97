"""
Record assembler.

Builds canonical QuestionRecord values from raw rows and drops rows that
have no question text.
"""

import logging
from typing import Iterable, List, Optional

from models import CANONICAL_KEYS, QuestionRecord, RawRow
from utils.coercion import to_image_ref, to_text
from utils.normalization import normalize_row_keys

logger = logging.getLogger(__name__)


def build_record(row: RawRow) -> Optional[QuestionRecord]:
    """
    Build one record from a raw row.

    Headers are normalized, unknown columns ignored, every field trimmed and
    the image field classified as URL or data URI.

    Args:
        row: Raw row keyed by literal header text

    Returns:
        QuestionRecord, or None if the row has no question text
    """
    normalized = normalize_row_keys(row)

    values = {}
    for key in CANONICAL_KEYS:
        text = to_text(normalized.get(key))
        values[key] = to_image_ref(text) if key == "question_image" else text

    if not values["question"]:
        return None

    return QuestionRecord(**values)


def assemble_records(rows: Iterable[RawRow]) -> List[QuestionRecord]:
    """
    Build records for all rows, keeping input order.

    Rows without question text are left out. Duplicate ids are kept as
    separate records.

    Args:
        rows: Raw rows from the tabular parser

    Returns:
        Valid records in input order
    """
    records = []
    dropped = 0

    for row in rows:
        record = build_record(row)
        if record is None:
            dropped += 1
            continue
        records.append(record)

    if dropped:
        logger.debug("Dropped %d rows without question text", dropped)

    return records
