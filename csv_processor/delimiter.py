"""Delimiter detection over the first few lines of a CSV document."""

from __future__ import annotations

import re

from .logging_setup import get_logger
from .rules import CANDIDATE_DELIMITERS, DEFAULT_DELIMITER, DELIMITER_SAMPLE_LINES

logger = get_logger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")


def _count_outside_quotes(line: str, delimiter: str) -> int:
    in_quote = False
    count = 0
    for i, ch in enumerate(line):
        if ch == '"' and (i == 0 or line[i - 1] != "\\"):
            in_quote = not in_quote
        elif not in_quote and ch == delimiter:
            count += 1
    return count


def detect_delimiter(text: str) -> str:
    """
    Return the most probable field separator in ``text``.

    Rules:
    - Sample up to the first 5 non-blank lines.
    - Count each candidate per line, ignoring occurrences inside double quotes.
    - Highest total wins; ties go to the earlier candidate (comma, semicolon, tab, pipe).
    - Empty input, or no candidate present at all, yields a comma.
    """
    if not text or not text.strip():
        return DEFAULT_DELIMITER

    sample = [line for line in _LINE_SPLIT.split(text) if line.strip()][:DELIMITER_SAMPLE_LINES]

    totals = {
        delimiter: sum(_count_outside_quotes(line, delimiter) for line in sample)
        for delimiter in CANDIDATE_DELIMITERS
    }
    present = [d for d in CANDIDATE_DELIMITERS if totals[d] > 0]
    if not present:
        return DEFAULT_DELIMITER

    # max() keeps the first of equal maxima, which is the preference order.
    best = max(present, key=lambda d: totals[d])
    logger.debug("Delimiter counts %s, picked %r", totals, best)
    return best
