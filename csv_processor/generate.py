"""
CSV generation from processed records.

Output rules:
- header line is the union of record keys in first-seen order
- a record missing a key gets an empty cell in that column
- cells holding a comma, a double quote or a line break are quoted, with
  inner quotes doubled
- lines joined with LF, no trailing newline
"""

from __future__ import annotations

import datetime as dt
import math
from typing import Any, Dict, List, Optional, Sequence

from .logging_setup import get_logger
from .models import ProcessedRecord
from .rules import DOWNLOAD_BASENAME, OUTPUT_DELIMITER, OUTPUT_LINE_TERMINATOR

logger = get_logger(__name__)

_NEEDS_QUOTING = (OUTPUT_DELIMITER, '"', "\n", "\r")


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            # 100.0 -> "100", -0.0 -> "0"
            return str(int(value))
        return repr(value)
    return str(value)


def _escape(cell: str) -> str:
    if any(token in cell for token in _NEEDS_QUOTING):
        return '"' + cell.replace('"', '""') + '"'
    return cell


def collect_headers(records: Sequence[ProcessedRecord]) -> List[str]:
    seen: Dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)


def generate_csv(records: Sequence[ProcessedRecord]) -> str:
    if not records:
        return ""

    headers = collect_headers(records)
    lines = [OUTPUT_DELIMITER.join(_escape(h) for h in headers)]
    for record in records:
        lines.append(OUTPUT_DELIMITER.join(_escape(_stringify(record.get(h))) for h in headers))

    logger.info("Generated CSV with %d columns and %d data lines", len(headers), len(records))
    return OUTPUT_LINE_TERMINATOR.join(lines)


def download_filename(today: Optional[dt.date] = None) -> str:
    """``csv_data_processed_YYYY-MM-DD.csv`` for ``today`` (UTC date by default)."""
    today = today or dt.datetime.now(dt.timezone.utc).date()
    return f"{DOWNLOAD_BASENAME}_processed_{today.isoformat()}.csv"
