from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(status_code: int, message: str, data: Optional[Any] = None) -> dict:
    """Standard envelope for successful responses."""
    return {
        "status_code": status_code,
        "success": True,
        "message": message,
        "data": jsonable_encoder(data),
    }


def error_response(status_code: int, message: str, data: Optional[Any] = None) -> JSONResponse:
    """Standard envelope for handled errors, returned with the matching HTTP status."""
    return JSONResponse(
        status_code=status_code,
        content={
            "status_code": status_code,
            "success": False,
            "message": message,
            "data": jsonable_encoder(data),
        },
    )
