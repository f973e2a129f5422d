"""
Tolerant CSV parsing into a RawDocument.

Quoting follows the csv module's defaults: a field opening with the quote
character may hold delimiters and newlines, a doubled quote inside it is one
literal quote, and unquoted fields are taken as-is.
"""

from __future__ import annotations

import csv
import io
from typing import List, Optional

from .delimiter import detect_delimiter
from .errors import CSVProcessingError, EmptyInputError, NoDataError
from .logging_setup import get_logger
from .models import RawDocument
from .rules import DEFAULT_QUOTE_CHAR

logger = get_logger(__name__)


def _is_blank(row: List[str]) -> bool:
    return all(cell == "" for cell in row)


def parse_csv(
    text: str,
    *,
    delimiter: Optional[str] = None,
    quote_char: Optional[str] = None,
    skip_empty_lines: bool = True,
) -> RawDocument:
    """Split ``text`` into rows of string cells.

    Rows made only of empty cells are always dropped. ``skip_empty_lines`` is
    accepted for callers that pass it; blank lines are dropped either way.

    Raises ``EmptyInputError`` for empty or whitespace-only text and
    ``NoDataError`` when every row turns out to be blank (e.g. ``",,,"``).
    """
    if not text or not text.strip():
        raise EmptyInputError()

    used_delimiter = delimiter or detect_delimiter(text)
    used_quote = quote_char or DEFAULT_QUOTE_CHAR

    rows: List[List[str]] = []
    skipped = 0
    # A single field may span the whole input (one unclosed quote).
    csv.field_size_limit(max(csv.field_size_limit(), len(text) + 1))
    try:
        reader = csv.reader(
            io.StringIO(text, newline=""),
            delimiter=used_delimiter,
            quotechar=used_quote,
            doublequote=True,
        )
        for row in reader:
            if _is_blank(row):
                skipped += 1
                continue
            rows.append(row)
    except (csv.Error, TypeError) as exc:
        raise CSVProcessingError(f"Failed to parse CSV: {exc}") from exc

    if not rows:
        raise NoDataError()

    logger.info(
        "Parsed %d rows (delimiter=%r, skipped %d blank rows)",
        len(rows),
        used_delimiter,
        skipped,
    )
    return RawDocument(text=text, rows=rows)
