"""Response envelope shared by every endpoint.

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "2026-01-01T00:00:00+00:00", "request_id": "req_..."}

`code` is 0 on success and the AppError code otherwise. For an AppError,
`data` carries `kind` plus the error's context (ids, amounts).
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from pydantic import BaseModel, Field

from src.wl_common.errors import AppError


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=_new_request_id)


def request_id_of(request: Request) -> str:
    """Id assigned by RequestLogMiddleware, or a fresh one outside it."""
    return getattr(request.state, "request_id", None) or _new_request_id()


def success_response(data: Any = None, request_id: str | None = None) -> ApiResponse:
    if isinstance(data, BaseModel):
        data = data.model_dump()
    resp = ApiResponse(data=data)
    if request_id:
        resp.request_id = request_id
    return resp


def error_response(exc: AppError, request_id: str | None = None) -> ApiResponse:
    resp = ApiResponse(code=exc.code, message=exc.message, data={"kind": exc.kind, **exc.context})
    if request_id:
        resp.request_id = request_id
    return resp
