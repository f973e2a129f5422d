"""
Wizard state driven by discrete events.

The caller feeds events (file loaded, configuration changed, apply clicked,
step navigation) and reads back the current document, configuration,
records and error message. Every configuration change replaces the whole
``Configuration`` value and reprocesses the loaded document.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, List, Optional

from .errors import CSVProcessingError, NoDocumentError
from .generate import generate_csv
from .logging_setup import get_logger
from .models import Configuration, ProcessedRecord, RawDocument, ReportItem
from .normalize import decode_upload
from .parser import parse_csv
from .transform import process_csv_with_report, resolve_date_format

logger = get_logger(__name__)


class WizardStep(IntEnum):
    UPLOAD = 0
    CONFIGURE_HEADERS = 1
    CONFIGURE_COLUMNS = 2
    CONFIGURE_DATES = 3
    PREVIEW = 4
    DOWNLOAD = 5


class CSVWizard:
    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.document: Optional[RawDocument] = None
        self.configuration = Configuration()
        self.records: List[ProcessedRecord] = []
        self.warnings: List[ReportItem] = []
        self.step = WizardStep.UPLOAD
        self.error: Optional[str] = None

    # --- events ---

    def load_text(self, text: str) -> bool:
        """Parse ``text`` and move on to header selection.

        Returns False and records the message in ``error`` when parsing fails;
        the previous document, if any, is kept.
        """
        self.error = None
        try:
            document = parse_csv(text)
        except CSVProcessingError as exc:
            logger.warning("Upload rejected: %s", exc)
            self.error = str(exc)
            return False

        self.document = document
        self.step = WizardStep.CONFIGURE_HEADERS
        self.process()
        return True

    def load_file(self, raw: bytes) -> bool:
        text, _ = decode_upload(raw)
        return self.load_text(text)

    def update_configuration(self, **changes: Any) -> Configuration:
        self.configuration = self.configuration.updated(**changes)
        if self.document is not None and self.step >= WizardStep.CONFIGURE_HEADERS:
            self.process()
        return self.configuration

    def process(self) -> List[ProcessedRecord]:
        """Reprocess the loaded document with the current configuration."""
        self.error = None
        if self.document is None:
            self.error = str(NoDocumentError())
            self.records, self.warnings = [], []
            return self.records

        self.configuration = resolve_date_format(self.document, self.configuration)
        self.records, self.warnings = process_csv_with_report(self.document, self.configuration)
        return self.records

    def go_to(self, step: WizardStep) -> WizardStep:
        step = WizardStep(step)
        if step > WizardStep.UPLOAD and self.document is None:
            raise NoDocumentError()
        self.step = step
        return self.step

    def advance(self) -> WizardStep:
        if self.step == WizardStep.DOWNLOAD:
            return self.step
        return self.go_to(WizardStep(self.step + 1))

    def generate(self) -> str:
        return generate_csv(self.records)
