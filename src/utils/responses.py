# src/utils/responses.py
from typing import Any, Optional
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(
    code: int, message: str, data: Any = None, success: Optional[bool] = None
) -> dict:
    """Uniform body: {status, code, message, data}"""
    if success is None:
        success = code < 400
    return {
        "status": "success" if success else "error",
        "code": code,
        "message": message,
        "data": data,
    }


def api_response(
    data: Any = None,
    message: str = "Success",
    code: int = status.HTTP_200_OK,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Serialize ``data`` (pydantic models use their camelCase aliases) into the envelope"""
    return JSONResponse(
        status_code=code,
        content=envelope(code, message, jsonable_encoder(data, by_alias=True)),
        headers=headers,
    )


def error_response(
    code: int, message: str, headers: Optional[dict] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content=envelope(code, message, None, success=False),
        headers=headers,
    )
