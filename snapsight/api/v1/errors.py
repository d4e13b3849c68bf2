# External package imports
from fastapi.responses import JSONResponse

# Local application imports
from ...application.dto.photo_dto import ErrorResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON error body shared by every endpoint: {"success": false, "error": ...}"""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )
