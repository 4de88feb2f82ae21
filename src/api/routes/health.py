"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Health check endpoint for monitoring.

    Returns 200 if the reference table is loaded, 503 otherwise.
    """
    table = getattr(request.app.state, "reference_table", None)
    timestamp = datetime.now(timezone.utc).isoformat()

    if table is not None:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            reference_table_loaded=True,
            reference_records=len(table),
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                reference_table_loaded=False,
                reference_records=0,
                timestamp=timestamp,
                error=getattr(request.app.state, "reference_error", None)
                or "Reference table not loaded",
            ).model_dump(),
        )
