"""FastAPI dependencies for shared resources."""

from fastapi import HTTPException, Request, status

from api.models.responses import ErrorCodes
from services.reference_table import ReferenceTable


def get_reference_table(request: Request) -> ReferenceTable:
    """
    Reference table loaded at startup.

    Raises:
        HTTPException: 500 if the table could not be loaded
    """
    table = getattr(request.app.state, "reference_table", None)
    if table is None:
        error = getattr(request.app.state, "reference_error", None)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Reference table not loaded",
                "code": ErrorCodes.REFERENCE_LOAD_ERROR,
                "details": [error] if error else [],
            },
        )
    return table
