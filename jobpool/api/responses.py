"""Uniform response envelope: ``{success, data?, count?, message?}``."""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel


def dump(schema: type[BaseModel], obj: Any) -> dict:
    """Serialize an ORM object through a response schema (camelCase keys)."""
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)


def envelope(
    data: Any = None,
    *,
    count: int | None = None,
    message: str | None = None,
    success: bool = True,
) -> dict:
    body: dict[str, Any] = {"success": success}
    if data is not None:
        body["data"] = data
    if count is not None:
        body["count"] = count
    if message is not None:
        body["message"] = message
    return body


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(success=False, message=message))
