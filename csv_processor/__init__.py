"""CSV transformation core: parse, process, standardize dates, generate."""

from .dates import (
    CalendarDate,
    convert_date,
    detect_date_format,
    format_date,
    parse_date,
    standardize_date_formats,
)
from .delimiter import detect_delimiter
from .errors import CSVProcessingError, EmptyInputError, NoDataError, NoDocumentError
from .generate import generate_csv
from .models import ColumnMappings, Configuration, RawDocument
from .parser import parse_csv
from .transform import process_csv, process_csv_with_report

__all__ = [
    "CSVProcessingError",
    "CalendarDate",
    "ColumnMappings",
    "Configuration",
    "EmptyInputError",
    "NoDataError",
    "NoDocumentError",
    "RawDocument",
    "convert_date",
    "detect_date_format",
    "detect_delimiter",
    "format_date",
    "generate_csv",
    "parse_csv",
    "parse_date",
    "process_csv",
    "process_csv_with_report",
    "standardize_date_formats",
]
