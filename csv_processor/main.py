import base64
import hashlib
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError

from .dates import date_format_example, detect_date_format, standardize_date_formats
from .delimiter import detect_delimiter
from .errors import CSVProcessingError
from .generate import collect_headers, download_filename, generate_csv
from .logging_setup import configure_logging, get_logger
from .models import (
    Configuration,
    ConversionReport,
    ConvertedCsv,
    ConvertResponse,
    GenerateRequest,
    HealthResponse,
    ParseResponse,
    ProcessRequest,
    ProcessResponse,
    ReportSummary,
    StandardizeDatesRequest,
    StandardizeDatesResponse,
    StandardizedDate,
)
from .normalize import decode_upload
from .parser import parse_csv
from .rules import MAX_UPLOAD_BYTES, TARGET_ENCODING
from .transform import header_labels, preview_rows, process_csv_with_report, resolve_date_format

configure_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="csv-processor",
    description="Bank statement CSV normalization: header selection, column roles, standard dates and amounts",
    version="0.1.0",
)


async def _read_csv_upload(file: UploadFile) -> bytes:
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    if len(raw) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"File exceeds {MAX_UPLOAD_BYTES} bytes")
    return raw


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/parse", response_model=ParseResponse)
async def parse(
    file: UploadFile = File(...),
    delimiter: Optional[str] = Form(None),
    quote_char: Optional[str] = Form(None),
    header_row_index: int = Form(0, ge=0),
):
    raw = await _read_csv_upload(file)
    text, decoding = decode_upload(raw)
    used_delimiter = delimiter or detect_delimiter(text)

    try:
        document = parse_csv(text, delimiter=used_delimiter, quote_char=quote_char)
    except CSVProcessingError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return ParseResponse(
        document=document,
        delimiter=used_delimiter,
        headers=header_labels(document, header_row_index),
        preview=preview_rows(document, header_row_index),
        decoding=decoding,
    )


@app.post("/process", response_model=ProcessResponse)
def process(request: ProcessRequest):
    configuration = resolve_date_format(request.document, request.configuration)
    records, warnings = process_csv_with_report(request.document, configuration)
    return ProcessResponse(records=records, warnings=warnings, configuration=configuration)


@app.post("/standardize-dates", response_model=StandardizeDatesResponse)
def standardize_dates(request: StandardizeDatesRequest):
    detected = detect_date_format(request.values)
    results = [
        StandardizedDate(value=value, **standardize_date_formats(value, request.source_format))
        for value in request.values
    ]
    return StandardizeDatesResponse(
        detected_format=detected,
        example=date_format_example(detected),
        results=results,
    )


@app.post("/generate")
def generate(request: GenerateRequest):
    content = generate_csv(request.records)
    return Response(
        content=content.encode(TARGET_ENCODING),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{download_filename()}"'},
    )


@app.post("/convert", response_model=ConvertResponse)
async def convert(
    file: UploadFile = File(...),
    configuration: str = Form("{}"),
):
    raw = await _read_csv_upload(file)

    try:
        config = Configuration.model_validate_json(configuration)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False)) from exc

    text, decoding = decode_upload(raw)
    try:
        document = parse_csv(text)
    except CSVProcessingError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    config = resolve_date_format(document, config)
    records, warnings = process_csv_with_report(document, config)
    output = generate_csv(records).encode(TARGET_ENCODING)

    logger.info("Converted %s: %d records, %d warnings", file.filename, len(records), len(warnings))

    return ConvertResponse(
        converted_csv=ConvertedCsv(
            sha256=_sha256_hex(output),
            encoding=TARGET_ENCODING,
            filename=download_filename(),
            content_b64=base64.b64encode(output).decode("ascii"),
        ),
        report=ConversionReport(
            summary=ReportSummary(
                rows=len(records),
                columns=len(collect_headers(records)),
                warnings=len(warnings),
                errors=0,
            ),
            normalizations={
                **decoding,
                "delimiter": {"detected": detect_delimiter(text), "output": ","},
                "date_format": config.date_format,
            },
            warnings=warnings,
        ),
    )
