"""
Deterministic processing rules.

Fixed constants shared by the parser, the transformer and the generator,
plus the few settings that can be overridden from the environment.
"""

import os

# Candidate delimiters in tie-break preference order.
CANDIDATE_DELIMITERS = (",", ";", "\t", "|")
DEFAULT_DELIMITER = ","
DEFAULT_QUOTE_CHAR = '"'
DELIMITER_SAMPLE_LINES = 5

OUTPUT_DELIMITER = ","
OUTPUT_LINE_TERMINATOR = "\n"
TARGET_ENCODING = "utf-8"

# Derived columns appended to every processed record.
US_DATE = "US_DATE"
UK_DATE = "UK_DATE"
ISO_DATE = "ISO_DATE"
CLEAN_AMOUNT = "CLEAN_AMOUNT"
DATE_TARGETS = (US_DATE, UK_DATE, ISO_DATE)

# Source date conventions.
DD_MM = "DD/MM"
MM_DD = "MM/DD"
DD_MMM = "DD MMM"
AUTO = "auto"
DATE_FORMATS = (DD_MM, MM_DD, DD_MMM, AUTO)
DATE_SAMPLE_SIZE = 20

# Amount-type markers that flag a debit.
DEBIT_MARKERS = ("D", "DR", "DEBIT")

PREVIEW_ROWS = 10
DOWNLOAD_BASENAME = "csv_data"

LOG_LEVEL_ENV = "CSV_PROCESSOR_LOG_LEVEL"
MAX_UPLOAD_BYTES = int(os.getenv("CSV_PROCESSOR_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
