"""
Validation utilities for user input.

Provides validation functions for delimiters, filters, auto-scroll
intervals, export formats and uploaded file paths.
"""

import os
from typing import Optional, Sequence, Tuple


EXPORT_FORMATS = ("csv", "tsv", "json")
TYPE_FILTERS = ("all", "Exercise", "Solved")
UPLOAD_EXTENSIONS = (".csv", ".tsv", ".txt")


def validate_delimiter(delimiter: Optional[str]) -> Tuple[bool, str]:
    """
    Validate an explicit delimiter.

    None or "" means auto-detect and is valid.

    Args:
        delimiter: Delimiter to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not delimiter:
        return True, ""

    if '\n' in delimiter or '\r' in delimiter:
        return False, "Delimiter cannot contain line breaks"

    if '"' in delimiter:
        return False, "Delimiter cannot contain the quote character"

    return True, ""


def validate_scroll_interval(interval, choices: Sequence[int]) -> Tuple[bool, str]:
    """
    Validate an auto-scroll interval.

    Args:
        interval: Interval in seconds (int or numeric string from a dropdown)
        choices: Allowed intervals

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        seconds = int(interval)
    except (TypeError, ValueError):
        return False, f"Interval must be a number of seconds, got {interval!r}"

    if seconds not in choices:
        return False, f"Interval must be one of {list(choices)} seconds"

    return True, ""


def validate_type_filter(typed_filter: str) -> Tuple[bool, str]:
    """
    Validate the question type filter.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if typed_filter not in TYPE_FILTERS:
        return False, f"Unknown type filter: {typed_filter}. Must be one of {list(TYPE_FILTERS)}"

    return True, ""


def validate_export_format(export_format: str) -> Tuple[bool, str]:
    """
    Validate an export format.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if export_format not in EXPORT_FORMATS:
        return False, f"Invalid format: {export_format}. Must be one of {list(EXPORT_FORMATS)}"

    return True, ""


def validate_upload_path(file_path: Optional[str]) -> Tuple[bool, str]:
    """
    Validate an uploaded file path before ingestion.

    Only checks presence and extension; readability is checked by the parser.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not file_path:
        return False, "Please choose a CSV or TSV file first"

    extension = os.path.splitext(str(file_path))[1].lower()
    if extension not in UPLOAD_EXTENSIONS:
        return False, f"Unsupported file type '{extension}'. Upload one of {list(UPLOAD_EXTENSIONS)}"

    return True, ""
