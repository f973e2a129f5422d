from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DateFormat = Literal["DD/MM", "MM/DD", "DD MMM", "auto"]
TargetDateFormat = Literal["US_DATE", "UK_DATE", "ISO_DATE"]

# One output row: original headers plus US_DATE/UK_DATE/ISO_DATE/CLEAN_AMOUNT.
ProcessedRecord = Dict[str, Union[str, float]]


class RawDocument(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(default="", alias="rawText")
    rows: List[List[str]] = Field(default_factory=list)


class ColumnMappings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    date: Optional[str] = None
    amount: Optional[str] = None
    amount_type: Optional[str] = None
    income: Optional[str] = None
    expense: Optional[str] = None
    description: Optional[str] = None
    reference: Optional[str] = None


class Configuration(BaseModel):
    """Processing settings chosen by the user.

    Immutable: every change goes through ``updated`` and yields a new value.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    header_row_index: int = Field(default=0, ge=0)
    column_mappings: ColumnMappings = Field(default_factory=ColumnMappings)
    date_format: DateFormat = "auto"
    invert_amounts: bool = False

    def updated(self, **changes: Any) -> "Configuration":
        if isinstance(changes.get("column_mappings"), dict):
            changes["column_mappings"] = self.column_mappings.model_copy(update=changes["column_mappings"])
        return self.model_validate({**self.model_dump(), **changes})


class ReportItem(BaseModel):
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class ParseResponse(BaseModel):
    document: RawDocument
    delimiter: str
    headers: List[str] = Field(default_factory=list)
    preview: List[List[str]] = Field(default_factory=list)
    decoding: Dict[str, Any] = Field(default_factory=dict)


class ProcessRequest(BaseModel):
    document: RawDocument
    configuration: Configuration = Field(default_factory=Configuration)


class ProcessResponse(BaseModel):
    records: List[ProcessedRecord]
    warnings: List[ReportItem] = Field(default_factory=list)
    configuration: Configuration


class StandardizeDatesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    values: List[str]
    source_format: DateFormat = "auto"


class StandardizedDate(BaseModel):
    value: str
    US_DATE: str
    UK_DATE: str
    ISO_DATE: str


class StandardizeDatesResponse(BaseModel):
    detected_format: DateFormat
    example: str
    results: List[StandardizedDate]


class GenerateRequest(BaseModel):
    records: List[ProcessedRecord]


class ConvertedCsv(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    filename: str
    content_b64: str


class ReportSummary(BaseModel):
    rows: Optional[int] = Field(default=None, examples=[None])
    columns: Optional[int] = Field(default=None, examples=[None])
    warnings: int = 0
    errors: int = 0
    deterministic: bool = True


class ConversionReport(BaseModel):
    summary: ReportSummary
    normalizations: Dict[str, Any] = Field(default_factory=dict)
    warnings: List[ReportItem] = Field(default_factory=list)
    errors: List[ReportItem] = Field(default_factory=list)


class ConvertResponse(BaseModel):
    converted_csv: ConvertedCsv
    report: ConversionReport


class HealthResponse(BaseModel):
    ok: bool = True
