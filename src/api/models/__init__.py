"""API Pydantic models."""

from .responses import (
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    MappingRequest,
    MappingResponse,
    OutputRecordModel,
    ParseRequest,
    SubmitRequest,
    SubmitResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "MappingRequest",
    "MappingResponse",
    "OutputRecordModel",
    "ParseRequest",
    "SubmitRequest",
    "SubmitResponse",
]
