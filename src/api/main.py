"""FastAPI application entry point."""

import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import health_router, shadow_hours_router
from core import config
from core.config import API_DEBUG, API_VERSION, CORS_ORIGINS
from core.errors import ReferenceLoadError
from services.reference_table import ReferenceTable


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: load the reference table once, unless one was injected
    if getattr(app.state, "reference_table", None) is None:
        try:
            app.state.reference_table = ReferenceTable.load(config.REFERENCE_TABLE_PATH)
            app.state.reference_error = None
        except ReferenceLoadError as e:
            app.state.reference_table = None
            app.state.reference_error = str(e)
            warnings.warn(f"Reference table unavailable: {e}")

    yield


app = FastAPI(
    title="Shadow Hours API",
    description="Maps free-text shadow-calendar logs to ERP subtask rows",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for the browser UI)
if CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(shadow_hours_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
