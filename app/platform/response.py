from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    *,
    data: Optional[Any] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Envelope used by the service endpoints (health, info).
    Automatically sets status = "success" if < 400 else "error"
    """
    status_str = "success" if status_code < 400 else "error"
    data = jsonable_encoder(data) if data is not None else {}

    return JSONResponse(
        status_code=status_code,
        content={
            "status_code": status_code,
            "status": status_str,
            "message": message,
            "data": data,
        },
    )


def message_response(
    message: str,
    *,
    status_code: int = status.HTTP_200_OK,
    **fields: Any,
) -> JSONResponse:
    """
    Flat `{message, ...fields}` body consumed by the landing page form.
    """
    content = {"message": message}
    content.update(jsonable_encoder(fields))
    return JSONResponse(status_code=status_code, content=content)
