"""Business logic services for the Study Content Viewer."""

from .tabular_parser import (
    IngestionError,
    InputReadError,
    ParseError,
    detect_delimiter,
    parse_table,
    read_table_file
)
from .record_assembler import assemble_records, build_record
from .data_manager import DataManager
from .render_engine import RenderEngine
from .export_manager import ExportManager

__all__ = [
    "IngestionError",
    "InputReadError",
    "ParseError",
    "detect_delimiter",
    "parse_table",
    "read_table_file",
    "assemble_records",
    "build_record",
    "DataManager",
    "RenderEngine",
    "ExportManager"
]
