from __future__ import annotations

from typing import Any, List, Mapping, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from app.schemas.common import ErrorDetail, Meta, ResponseEnvelope


def envelope_response(
    code: int,
    *,
    data: Any = None,
    message: Optional[str] = None,
    error: Optional[str] = None,
    details: Optional[List[Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """
    Construiește JSONResponse-ul cu plicul standard.
    `success` derivă din cod (2xx); pe eroare `meta` rămâne null, ca în contract.
    """
    success = 200 <= code < 300
    envelope = ResponseEnvelope[Any](
        success=success,
        code=code,
        meta=Meta(message=message) if success else None,
        data=data,
        error=None if success else ErrorDetail(message=error or "Error", details=details),
    )
    # by_alias → câmpurile produselor ies în camelCase
    content = jsonable_encoder(envelope, by_alias=True)
    return JSONResponse(status_code=code, content=content, headers=dict(headers or {}))


def ok(data: Any = None, message: Optional[str] = None, **kw: Any) -> JSONResponse:
    return envelope_response(status.HTTP_200_OK, data=data, message=message, **kw)


def created(location: str, data: Any = None, message: Optional[str] = None) -> JSONResponse:
    return envelope_response(
        status.HTTP_201_CREATED, data=data, message=message, headers={"Location": location}
    )


def bad_request(message: str, details: Optional[List[Any]] = None, **kw: Any) -> JSONResponse:
    return envelope_response(status.HTTP_400_BAD_REQUEST, error=message, details=details, **kw)


def internal_error(message: str = "Internal server error", **kw: Any) -> JSONResponse:
    return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, error=message, **kw)
