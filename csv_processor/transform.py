"""
Row transformation: parsed rows + configuration -> processed records.

Responsibilities:
- header row selection and column role lookup (exact string match)
- copying original columns
- US_DATE / UK_DATE / ISO_DATE derivation
- CLEAN_AMOUNT derivation (income/expense or amount/type conventions)
- reporting cells that could not be read
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from .dates import detect_date_format, parse_date, standardize_date_formats
from .logging_setup import get_logger
from .models import Configuration, ProcessedRecord, RawDocument, ReportItem
from .rules import AUTO, CLEAN_AMOUNT, DATE_TARGETS, DEBIT_MARKERS, PREVIEW_ROWS

logger = get_logger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.-]")
_LEADING_FLOAT = re.compile(r"^-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


def _header_row(doc: RawDocument, header_row_index: int) -> List[str]:
    if 0 <= header_row_index < len(doc.rows):
        return doc.rows[header_row_index]
    return []


def _column_index(header_row: Sequence[str], name: Optional[str]) -> int:
    if not name:
        return -1
    try:
        return list(header_row).index(name)
    except ValueError:
        return -1


def _cell(row: Sequence[str], index: int) -> str:
    if 0 <= index < len(row):
        return row[index] or ""
    return ""


def parse_amount(value: Optional[str]) -> Optional[float]:
    """Read the numeric part of ``value``; None when nothing numeric is left.

    Everything but digits, "." and "-" is stripped first, then the longest
    leading number is taken, so "$1,234.50" reads as 1234.5 and "12-3" as 12.
    """
    if not value:
        return None
    match = _LEADING_FLOAT.match(_NON_NUMERIC.sub("", value))
    if not match:
        return None
    return float(match.group(0))


def _amount_or_zero(value: str) -> float:
    parsed = parse_amount(value)
    return 0.0 if parsed is None else parsed


def _is_debit(amount_type: str) -> bool:
    upper = amount_type.upper()
    return any(marker in upper for marker in DEBIT_MARKERS)


def process_csv_with_report(
    doc: Optional[RawDocument], config: Configuration
) -> Tuple[List[ProcessedRecord], List[ReportItem]]:
    """Build one record per data row and collect warnings for unreadable cells."""
    if doc is None or not doc.rows:
        return [], []

    header_row = _header_row(doc, config.header_row_index)
    first_data_row = config.header_row_index + 1

    mappings = config.column_mappings
    date_idx = _column_index(header_row, mappings.date)
    amount_idx = _column_index(header_row, mappings.amount)
    amount_type_idx = _column_index(header_row, mappings.amount_type)
    income_idx = _column_index(header_row, mappings.income)
    expense_idx = _column_index(header_row, mappings.expense)

    income_expense_mode = income_idx >= 0 and expense_idx >= 0

    records: List[ProcessedRecord] = []
    warnings: List[ReportItem] = []

    for offset, row in enumerate(doc.rows[first_data_row:]):
        row_number = first_data_row + offset + 1
        record: ProcessedRecord = {}

        for i, header in enumerate(header_row):
            if header:
                record[header] = _cell(row, i)

        # --- Dates ---
        if date_idx >= 0:
            raw_date = _cell(row, date_idx)
            record.update(standardize_date_formats(raw_date, config.date_format))
            if raw_date.strip() and parse_date(raw_date, config.date_format) is None:
                warnings.append(ReportItem(
                    row=row_number,
                    column=mappings.date,
                    issue="date_unparsed",
                    value=raw_date,
                    action="left_blank",
                ))
        else:
            for target in DATE_TARGETS:
                record[target] = ""

        # --- Amount ---
        amount_cells: List[Tuple[str, str]] = []
        if income_expense_mode:
            income_raw = _cell(row, income_idx)
            expense_raw = _cell(row, expense_idx)
            amount_cells = [(mappings.income, income_raw), (mappings.expense, expense_raw)]
            clean_amount = _amount_or_zero(income_raw) - _amount_or_zero(expense_raw)
        elif amount_idx >= 0:
            amount_raw = _cell(row, amount_idx)
            amount_cells = [(mappings.amount, amount_raw)]
            clean_amount = _amount_or_zero(amount_raw)
            # A leading minus already carries the sign.
            if not amount_raw.strip().startswith("-") and amount_type_idx >= 0:
                if _is_debit(_cell(row, amount_type_idx)):
                    clean_amount = -clean_amount
        else:
            clean_amount = 0.0

        for column, raw in amount_cells:
            if raw.strip() and parse_amount(raw) is None:
                warnings.append(ReportItem(
                    row=row_number,
                    column=column,
                    issue="amount_unparsed",
                    value=raw,
                    action="defaulted_to_0",
                ))

        if config.invert_amounts:
            clean_amount = -clean_amount

        record[CLEAN_AMOUNT] = clean_amount
        records.append(record)

    logger.info(
        "Processed %d data rows (header row %d, %d warnings)",
        len(records),
        config.header_row_index,
        len(warnings),
    )
    return records, warnings


def process_csv(doc: Optional[RawDocument], config: Configuration) -> List[ProcessedRecord]:
    """Apply ``config`` to ``doc``. Pure: returns a fresh list on every call."""
    records, _ = process_csv_with_report(doc, config)
    return records


def header_labels(doc: RawDocument, header_row_index: int) -> List[str]:
    """Header cells with "Column N" standing in for blank ones."""
    return [
        header or f"Column {i + 1}"
        for i, header in enumerate(_header_row(doc, header_row_index))
    ]


def preview_rows(doc: RawDocument, header_row_index: int, limit: int = PREVIEW_ROWS) -> List[List[str]]:
    start = header_row_index + 1
    return [list(row) for row in doc.rows[start:start + limit]]


def column_values(doc: RawDocument, header_row_index: int, header: Optional[str]) -> List[str]:
    index = _column_index(_header_row(doc, header_row_index), header)
    if index < 0:
        return []
    values = (_cell(row, index) for row in doc.rows[header_row_index + 1:])
    return [value for value in values if value]


def resolve_date_format(doc: Optional[RawDocument], config: Configuration) -> Configuration:
    """Swap ``auto`` for the format detected in the mapped date column.

    Returns ``config`` itself when nothing can be detected.
    """
    if doc is None or config.date_format != AUTO or not config.column_mappings.date:
        return config

    values = column_values(doc, config.header_row_index, config.column_mappings.date)
    detected = detect_date_format(values)
    if detected == AUTO:
        return config

    logger.debug("Detected date format %s for column %r", detected, config.column_mappings.date)
    return config.updated(date_format=detected)
