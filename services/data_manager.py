"""
DataManager for question ingestion and filtering.

Entry points for loading question records from an uploaded file, pasted
text or the bundled sample dataset, plus search/type filtering of loaded
records.
"""

import asyncio
import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from config import ViewerConfig, get_config
from models import QuestionRecord
from utils.performance import monitor_performance
from utils.validation import validate_delimiter
from .record_assembler import assemble_records
from .tabular_parser import InputReadError, parse_table, read_table_file

logger = logging.getLogger(__name__)


SAMPLE_DELIMITER = '\t'


class DataManager:
    """
    Loads question records and filters them for display.

    Each load call is a pure function of its input: it returns a fresh list
    of records and never touches shared state, so concurrent loads cannot
    interfere with each other.

    Attributes:
        config: Viewer configuration (sample path, sniffing depth)
    """

    def __init__(self, config: Optional[ViewerConfig] = None):
        """
        Initialize DataManager.

        Args:
            config: Configuration to use (default: process configuration)
        """
        self.config = config or get_config()

    def _check_delimiter(self, delimiter: Optional[str]):
        is_valid, error_msg = validate_delimiter(delimiter)
        if not is_valid:
            raise ValueError(error_msg)

    @monitor_performance("load_file")
    def load_file(self, file_path: Union[str, Path], delimiter: Optional[str] = None) -> List[QuestionRecord]:
        """
        Load question records from a delimited file.

        Args:
            file_path: Path to a CSV/TSV file
            delimiter: Explicit delimiter, or None to auto-detect

        Returns:
            Valid records in file order

        Raises:
            InputReadError: If the file cannot be read
            ParseError: If the file has no header row
            ValueError: If the explicit delimiter is invalid
        """
        self._check_delimiter(delimiter)

        rows = read_table_file(file_path, delimiter, self.config.sniff_sample_lines)
        records = assemble_records(rows)

        logger.info("Loaded %d questions from %d rows in %s", len(records), len(rows), file_path)
        return records

    @monitor_performance("load_text")
    def load_text(self, text: Union[str, bytes], delimiter: Optional[str] = None) -> List[QuestionRecord]:
        """
        Load question records from in-memory text.

        Args:
            text: Delimited text (or bytes)
            delimiter: Explicit delimiter (e.g. "\\t"), or None to auto-detect

        Returns:
            Valid records in input order

        Raises:
            InputReadError: If bytes cannot be decoded
            ParseError: If the text has no header row
            ValueError: If the explicit delimiter is invalid
        """
        self._check_delimiter(delimiter)

        rows = parse_table(text, delimiter, self.config.sniff_sample_lines)
        records = assemble_records(rows)

        logger.info("Loaded %d questions from %d rows of text", len(records), len(rows))
        return records

    def load_sample(self) -> List[QuestionRecord]:
        """
        Load the bundled sample dataset (tab separated).

        Raises:
            InputReadError: If the sample file is missing or unreadable
        """
        path = Path(self.config.sample_data_path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise InputReadError(f"Failed to load sample data from {path}: {e}") from e

        return self.load_text(data, delimiter=SAMPLE_DELIMITER)

    async def load_file_async(self, file_path: Union[str, Path], delimiter: Optional[str] = None) -> List[QuestionRecord]:
        """Run load_file in a worker thread."""
        return await asyncio.to_thread(self.load_file, file_path, delimiter)

    async def load_text_async(self, text: Union[str, bytes], delimiter: Optional[str] = None) -> List[QuestionRecord]:
        """Run load_text in a worker thread."""
        return await asyncio.to_thread(self.load_text, text, delimiter)

    async def load_sample_async(self) -> List[QuestionRecord]:
        """Run load_sample in a worker thread."""
        return await asyncio.to_thread(self.load_sample)

    @staticmethod
    def filter_records(
        records: Iterable[QuestionRecord],
        query: str = "",
        typed: str = "all"
    ) -> List[QuestionRecord]:
        """
        Filter records by free-text query and question type.

        Args:
            records: Records to filter
            query: Case-insensitive text matched against question and metadata
            typed: "all" or a question type (case-insensitive)

        Returns:
            Matching records in their original order
        """
        return [
            record for record in records
            if record.matches_type(typed) and record.matches_query(query)
        ]

    @staticmethod
    def get_type_counts(records: Iterable[QuestionRecord]) -> Dict[str, int]:
        """
        Count records per question type.

        Returns:
            Mapping of type -> count; untyped records are counted under ""
        """
        return dict(Counter(record.typed for record in records))
