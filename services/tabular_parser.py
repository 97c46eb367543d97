"""
Delimiter-aware tabular parser.

Turns delimited text (comma, tab, pipe or semicolon separated) into raw rows
keyed by the header row's literal column names. User uploads are assumed to
be dirty: short rows are padded, long rows are truncated, and only
structurally empty input is rejected.
"""

import csv
import io
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd

from models import RawRow
from utils.performance import monitor_performance

logger = logging.getLogger(__name__)


# Checked in this order; ties go to the earlier candidate
CANDIDATE_DELIMITERS = (',', '\t', '|', ';')
DEFAULT_DELIMITER = ','
DEFAULT_SAMPLE_LINES = 10

# Tried in order when decoding bytes
INPUT_ENCODINGS = ('utf-8-sig', 'gbk')


def _raise_field_size_limit():
    """Lift the csv module cap on field size (131072 characters by default)."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            # C long is 32 bits on some platforms
            limit //= 2


_raise_field_size_limit()


class IngestionError(Exception):
    """Base class for errors that abort a whole ingestion."""


class InputReadError(IngestionError):
    """The source file or bytes could not be read at all."""


class ParseError(IngestionError, ValueError):
    """The input has no usable header row."""


def decode_input(data: Union[str, bytes, bytearray]) -> str:
    """
    Decode raw input to text.

    Args:
        data: Text, or bytes in UTF-8 (with or without BOM) or GBK

    Returns:
        Decoded text

    Raises:
        InputReadError: If the bytes match none of the supported encodings
    """
    if isinstance(data, str):
        return data

    if isinstance(data, (bytes, bytearray)):
        for encoding in INPUT_ENCODINGS:
            try:
                return bytes(data).decode(encoding)
            except UnicodeDecodeError:
                continue
        raise InputReadError("Unable to decode input: file encoding is not UTF-8 or GBK")

    raise InputReadError(f"Unsupported input type: {type(data).__name__}")


def _sample_field_counts(text: str, delimiter: str, sample_lines: int) -> List[int]:
    """Quote-aware field counts of the first non-blank records."""
    counts = []
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    try:
        for fields in reader:
            if not fields or (len(fields) == 1 and not fields[0]):
                continue
            counts.append(len(fields))
            if len(counts) >= sample_lines:
                break
    except csv.Error:
        # Unterminated quotes etc.: judge on what was read so far
        pass
    return counts


def detect_delimiter(
    text: str,
    sample_lines: int = DEFAULT_SAMPLE_LINES,
    candidates: Sequence[str] = CANDIDATE_DELIMITERS,
) -> str:
    """
    Guess the field delimiter from a sample of records.

    For each candidate, the field count of each sampled record is measured.
    A candidate is preferred when its field counts vary no more than the
    current best (sum of differences between consecutive records), its
    average field count is higher, and it splits records into at least two
    fields on average.

    Args:
        text: Decoded input text
        sample_lines: Number of non-blank records to inspect
        candidates: Delimiters to try

    Returns:
        The chosen delimiter, comma if no candidate qualifies
    """
    best_delimiter = None
    best_delta = None
    best_average = None

    for delimiter in candidates:
        counts = _sample_field_counts(text, delimiter, sample_lines)
        if not counts:
            continue

        average = sum(counts) / len(counts)
        delta = sum(abs(current - previous) for previous, current in zip(counts, counts[1:]))

        if (
            (best_delta is None or delta <= best_delta)
            and (best_average is None or average > best_average)
            and average > 1.99
        ):
            best_delimiter = delimiter
            best_delta = delta
            best_average = average

    if best_delimiter is None:
        logger.debug("No delimiter candidate qualified, defaulting to %r", DEFAULT_DELIMITER)
        return DEFAULT_DELIMITER

    logger.debug("Detected delimiter %r (delta=%s, avg=%.2f)", best_delimiter, best_delta, best_average)
    return best_delimiter


def _read_frame(text: str, delimiter: str, **kwargs) -> pd.DataFrame:
    """Run pandas over the text with every cell kept as the raw string."""
    # pandas treats multi-character separators as regular expressions
    sep = delimiter if len(delimiter) == 1 else re.escape(delimiter)
    try:
        return pd.read_csv(
            io.StringIO(text),
            sep=sep,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
            engine='python',
            **kwargs
        )
    except pd.errors.EmptyDataError as e:
        raise ParseError("Input has no header row") from e
    except (pd.errors.ParserError, csv.Error) as e:
        raise ParseError(f"Malformed delimited text: {e}") from e


def _cell(value) -> str:
    """Cells pandas padded for short rows come back as NaN/None."""
    return value if isinstance(value, str) else ""


@monitor_performance("parse_table")
def parse_table(
    data: Union[str, bytes, bytearray],
    delimiter: Optional[str] = None,
    sample_lines: int = DEFAULT_SAMPLE_LINES,
) -> List[RawRow]:
    """
    Parse delimited text into raw rows.

    The first non-blank line is the header. Every later non-blank line
    becomes one row keyed by the header's literal names, with values kept
    verbatim. Rows shorter than the header are padded with "", extra fields
    are dropped, and duplicate header names keep the rightmost value.

    Args:
        data: Text or bytes
        delimiter: Field delimiter; None or "" to auto-detect
        sample_lines: Records inspected when auto-detecting

    Returns:
        Raw rows in input order

    Raises:
        InputReadError: If bytes cannot be decoded
        ParseError: If there is no header row
    """
    text = decode_input(data)
    if not text.strip():
        raise ParseError("Input is empty: no header row found")

    if not delimiter:
        delimiter = detect_delimiter(text, sample_lines)

    width = _read_frame(text, delimiter, nrows=1).shape[1]
    if width < 1:
        raise ParseError("Header row has no columns")

    frame = _read_frame(
        text,
        delimiter,
        on_bad_lines=lambda fields: fields[:width]
    )

    lines = frame.values.tolist()
    header = [_cell(name) for name in lines[0]]

    rows = []
    for line in lines[1:]:
        row = {}
        for name, value in zip(header, line):
            row[name] = _cell(value)
        rows.append(row)

    logger.info("Parsed %d rows with %d columns (delimiter %r)", len(rows), len(header), delimiter)
    return rows


def read_table_file(
    path: Union[str, Path],
    delimiter: Optional[str] = None,
    sample_lines: int = DEFAULT_SAMPLE_LINES,
) -> List[RawRow]:
    """
    Read and parse a delimited file.

    Args:
        path: File path
        delimiter: Field delimiter; None to auto-detect
        sample_lines: Records inspected when auto-detecting

    Returns:
        Raw rows in file order

    Raises:
        InputReadError: If the file cannot be opened, read or decoded
        ParseError: If the file has no header row
    """
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError as e:
        raise InputReadError(f"File not found: {path}") from e
    except OSError as e:
        raise InputReadError(f"Cannot read file {path}: {e}") from e

    return parse_table(data, delimiter=delimiter, sample_lines=sample_lines)
