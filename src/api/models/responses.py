"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    reference_table_loaded: bool
    reference_records: int
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INPUT_EMPTY = "INPUT_EMPTY"
    TEXT_TOO_LARGE = "TEXT_TOO_LARGE"
    DATE_PARSE_ERROR = "DATE_PARSE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REFERENCE_LOAD_ERROR = "REFERENCE_LOAD_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class OutputRecordModel(BaseModel):
    """One mapped shadow-calendar row."""

    employee: str
    date: str  # YYYY-MM-DD
    start_time: str
    end_time: str
    description: str
    task_code: str
    confidence: float = Field(ge=0.0, le=1.0)


class ParseRequest(BaseModel):
    """Shadow-calendar text to map."""

    text: str | None = None
    employee: str | None = None


class SubmitRequest(ParseRequest):
    """
    Rows to submit.

    When `rows` is given (e.g. after manual task overrides in the UI) it is
    stored as-is; otherwise `text` is mapped and stored.
    """

    rows: list[OutputRecordModel] | None = None


class SubmitResponse(BaseModel):
    status: str
    submission_id: int
    rows: int


class MappingRequest(BaseModel):
    """A resolved description -> task code mapping to learn."""

    description: str = Field(min_length=1)
    task_code: str = Field(min_length=1)


class MappingResponse(BaseModel):
    description: str
    normalized_description: str
    task_code: str
    reference_records: int
