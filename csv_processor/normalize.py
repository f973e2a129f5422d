"""
Upload decoding.

Turns the raw bytes of an uploaded file into text the parser can work on:
- encoding detection via charset-normalizer
- UTF-8 BOM removal
- newline normalization (CRLF/CR -> LF)
"""

from __future__ import annotations

from typing import Any, Dict

from charset_normalizer import from_bytes

from .logging_setup import get_logger

logger = get_logger(__name__)


def decode_upload(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes into LF-terminated text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - If detection is uncertain, still attempt decode using best guess.
    - If decode fails, fall back to UTF-8, then to replacement characters, and report it.
    """
    detected = None

    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    # Strip a UTF-8 BOM so it does not end up glued to the first header.
    if raw.startswith(b"\xef\xbb\xbf") and (decode_used.lower().replace("-", "_") in ("utf_8", "utf8")):
        decode_used = "utf-8-sig"

    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8")
            decode_used = "utf-8"
            decode_fallback = True
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
            decode_fallback = True

    if decode_fallback:
        logger.warning("Decoding with %s failed, fell back to %s", detected, decode_used)

    nl_before = {
        "crlf": text.count("\r\n"),
        "cr": text.count("\r") - text.count("\r\n"),
        "lf": text.count("\n"),
    }

    text = text.replace("\r\n", "\n").replace("\r", "\n")

    report = {
        "encoding": {
            "detected": detected,
            "decode_used": decode_used,
            "decode_fallback": decode_fallback,
        },
        "newlines": {
            "policy": "lf",
            "before": nl_before,
            "changed": (nl_before["crlf"] > 0) or (nl_before["cr"] > 0),
        },
    }

    logger.debug("Decoded %d bytes as %s", len(raw), decode_used)
    return text, report
