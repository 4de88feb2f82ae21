"""Shadow-calendar parsing, submission and mapping endpoints."""

import asyncio
import time

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_reference_table
from api.logging import RequestLog, log_request
from api.models.responses import (
    ErrorCodes,
    MappingRequest,
    MappingResponse,
    OutputRecordModel,
    ParseRequest,
    SubmitRequest,
    SubmitResponse,
)
from core.config import DEFAULT_EMPLOYEE, MAX_TEXT_SIZE_BYTES, UNMAPPED
from core.database import create_submission_record, get_connection, insert_submission_rows
from core.errors import DateParseError, InputEmptyError
from services.pipeline import process_text, require_text, summarize
from services.reference_table import ReferenceTable

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def validate_text(text: str | None, request_log: RequestLog) -> str:
    """Check presence and size of the submitted text."""
    try:
        text = require_text(text)
    except InputEmptyError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": str(e),
                "code": ErrorCodes.INPUT_EMPTY,
                "details": [],
            },
        )

    size = len(text.encode("utf-8"))
    request_log.text_size_bytes = size
    if size > MAX_TEXT_SIZE_BYTES:
        max_kb = MAX_TEXT_SIZE_BYTES // 1024
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={
                "error": f"Text exceeds maximum size of {max_kb} KB",
                "code": ErrorCodes.TEXT_TOO_LARGE,
                "details": [f"Text size: {size / 1024:.1f} KB"],
            },
        )
    return text


def record_result(request_log: RequestLog, records: list[dict], start_time: float):
    """Fill success fields of the request log."""
    counts = summarize(records)
    request_log.status_code = 200
    request_log.entries_parsed = counts["total"]
    request_log.entries_unmapped = counts["unmapped"]
    for record in records:
        if record["task_code"] == UNMAPPED:
            request_log.details.append(("unmapped", record["description"]))
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)


def record_http_error(request_log: RequestLog, e: HTTPException, start_time: float):
    request_log.status_code = e.status_code
    if isinstance(e.detail, dict):
        request_log.error_code = e.detail.get("code")
        request_log.error_message = e.detail.get("error")
        for detail in e.detail.get("details", []):
            request_log.details.append(("validation_error", detail))
    else:
        request_log.error_message = str(e.detail)
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)


def date_parse_failure(request_log: RequestLog, e: DateParseError, start_time: float) -> HTTPException:
    request_log.status_code = 422
    request_log.error_code = ErrorCodes.DATE_PARSE_ERROR
    request_log.error_message = str(e)
    request_log.details.append(("validation_error", e.date_string))
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "error": "Date header could not be parsed",
            "code": ErrorCodes.DATE_PARSE_ERROR,
            "details": [e.date_string],
        },
    )


def internal_failure(request_log: RequestLog, e: Exception, start_time: float) -> HTTPException:
    request_log.status_code = 500
    request_log.error_code = ErrorCodes.INTERNAL_ERROR
    request_log.error_message = str(e)
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "Internal server error",
            "code": ErrorCodes.INTERNAL_ERROR,
            "details": [],
        },
    )


def write_log(request_log: RequestLog):
    try:
        log_request(request_log)
    except Exception:
        # Don't fail the request if logging fails
        pass


def store_submission(employee: str, source: str, records: list[dict]) -> int:
    """Persist a mock ERP submission and return its id."""
    conn = get_connection()
    try:
        submission_id = create_submission_record(conn, employee, source)
        insert_submission_rows(conn, submission_id, records)
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
    print(f"[MOCK ERP SUBMIT] submission {submission_id}: {len(records)} rows for {employee}")
    return submission_id


@router.post("/parse", response_model=list[OutputRecordModel])
async def parse_endpoint(
    request: Request,
    body: ParseRequest,
    table: ReferenceTable = Depends(get_reference_table),
):
    """
    Map shadow-calendar text to ERP rows.

    Unmatched rows come back with task code UNMAPPED; they can be resolved
    through POST /v1/mappings.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/parse",
        method="POST",
        client_ip=get_client_ip(request),
        employee=body.employee,
    )

    try:
        text = validate_text(body.text, request_log)
        records = await asyncio.to_thread(process_text, text, table, body.employee)
        record_result(request_log, records, start_time)
        return records

    except HTTPException as e:
        record_http_error(request_log, e, start_time)
        raise

    except DateParseError as e:
        raise date_parse_failure(request_log, e, start_time)

    except Exception as e:
        raise internal_failure(request_log, e, start_time)

    finally:
        write_log(request_log)


@router.post("/submit", response_model=SubmitResponse)
async def submit_endpoint(
    request: Request,
    body: SubmitRequest,
    table: ReferenceTable = Depends(get_reference_table),
):
    """
    Submit mapped rows (mock ERP call).

    Stores the given rows when present, otherwise maps and stores `text`.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/submit",
        method="POST",
        client_ip=get_client_ip(request),
        employee=body.employee,
    )

    try:
        if body.rows:
            records = [row.model_dump() for row in body.rows]
            source = "rows"
            employee = body.employee or records[0]["employee"]
        else:
            text = validate_text(body.text, request_log)
            records = await asyncio.to_thread(process_text, text, table, body.employee)
            source = "text"
            employee = body.employee or DEFAULT_EMPLOYEE

        submission_id = await asyncio.to_thread(store_submission, employee, source, records)
        record_result(request_log, records, start_time)
        return SubmitResponse(status="ok", submission_id=submission_id, rows=len(records))

    except HTTPException as e:
        record_http_error(request_log, e, start_time)
        raise

    except DateParseError as e:
        raise date_parse_failure(request_log, e, start_time)

    except Exception as e:
        raise internal_failure(request_log, e, start_time)

    finally:
        write_log(request_log)


@router.get("/tasks", response_model=list[str])
async def list_tasks(table: ReferenceTable = Depends(get_reference_table)):
    """Distinct ERP subtask codes known to the reference table."""
    return table.task_codes()


@router.post(
    "/mappings",
    response_model=MappingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_mapping(
    request: Request,
    body: MappingRequest,
    table: ReferenceTable = Depends(get_reference_table),
):
    """Learn a description -> task code mapping for future matches."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/mappings",
        method="POST",
        client_ip=get_client_ip(request),
    )

    try:
        record = await asyncio.to_thread(table.append, body.description, body.task_code)
        request_log.status_code = 201
        request_log.details.append(("learned", f"{record.description} -> {record.task_code}"))
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        return MappingResponse(
            description=record.description,
            normalized_description=record.normalized_description,
            task_code=record.task_code,
            reference_records=len(table),
        )

    except ValueError as e:
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Mapping could not be stored",
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": [str(e)],
            },
        )

    except Exception as e:
        raise internal_failure(request_log, e, start_time)

    finally:
        write_log(request_log)
