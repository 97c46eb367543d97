"""
ExportManager for question record export.

Writes loaded (or filtered) question records back out as CSV, TSV or JSON
with the canonical column set, so an export can be uploaded again.
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from config import get_config
from models import CANONICAL_KEYS, QuestionRecord
from utils.performance import measure_time
from utils.validation import validate_export_format

logger = logging.getLogger(__name__)


class ExportManager:
    """
    Exports question records to files.

    Supported formats:
    - csv: comma separated, canonical header row
    - tsv: tab separated, canonical header row
    - json: list of objects with the eleven canonical fields

    Attributes:
        format: Selected export format
        export_dir: Directory receiving exported files
    """

    EXTENSIONS = {"csv": "csv", "tsv": "tsv", "json": "json"}
    DELIMITERS = {"csv": ",", "tsv": "\t"}

    def __init__(self, format: str = "csv", export_dir: Optional[Union[str, Path]] = None):
        """
        Initialize ExportManager.

        Args:
            format: Export format (csv/tsv/json)
            export_dir: Output directory (default: configured export_dir)

        Raises:
            ValueError: If format is not supported
        """
        is_valid, error_msg = validate_export_format(format)
        if not is_valid:
            raise ValueError(error_msg)

        self.format = format
        self.export_dir = Path(export_dir) if export_dir is not None else get_config().export_dir

    @staticmethod
    def to_frame(records: Sequence[QuestionRecord]) -> pd.DataFrame:
        """Records as a DataFrame with canonical columns in canonical order."""
        return pd.DataFrame(
            [record.to_dict() for record in records],
            columns=list(CANONICAL_KEYS)
        )

    def to_rows(self, records: Sequence[QuestionRecord]) -> List[Dict[str, Any]]:
        """Records as JSON-ready dictionaries."""
        return [record.to_dict() for record in records]

    def to_text(self, records: Sequence[QuestionRecord]) -> str:
        """
        Serialize records in the selected format.

        Args:
            records: Records to serialize

        Returns:
            File contents as text
        """
        if self.format == "json":
            return json.dumps(self.to_rows(records), ensure_ascii=False, indent=2)

        return self.to_frame(records).to_csv(
            index=False,
            sep=self.DELIMITERS[self.format],
            lineterminator="\n"
        )

    def export_records(self, records: Sequence[QuestionRecord], original_filename: str = "questions") -> str:
        """
        Write records to a new export file.

        The file is named {original_name}_{timestamp}_{count}.{ext}.

        Args:
            records: Records to export
            original_filename: Source file name (extension is dropped)

        Returns:
            Path of the written file

        Raises:
            ValueError: If there are no records to export
            PermissionError: If the export directory is not writable
        """
        if not records:
            raise ValueError("No questions to export")

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_name = os.path.splitext(os.path.basename(original_filename))[0] or "questions"
        output_path = self.export_dir / f"{base_name}_{timestamp}_{len(records)}.{self.EXTENSIONS[self.format]}"

        with measure_time("export_records"):
            content = self.to_text(records)
            try:
                self.export_dir.mkdir(parents=True, exist_ok=True)
                output_path.write_text(content, encoding="utf-8")
            except PermissionError:
                raise PermissionError(f"Cannot write export file: {output_path}")

        logger.info("Exported %d questions to %s", len(records), output_path)
        return str(output_path)
