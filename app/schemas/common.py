from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Meta(BaseModel):
    """Context liber pentru client (momentan doar mesajul)."""
    message: Optional[str] = None


class ErrorDetail(BaseModel):
    message: str
    details: Optional[List[Any]] = None


class ResponseEnvelope(BaseModel, Generic[T]):
    """
    Forma unică a tuturor răspunsurilor HTTP: {success, code, meta, data, error}.
    Pe succes e populat `data`, pe eroare `error`; celălalt rămâne null.
    """
    success: bool
    code: int = Field(..., description="Mirrors the HTTP status code")
    meta: Optional[Meta] = None
    data: Optional[T] = None
    error: Optional[ErrorDetail] = None


class ResultData(BaseModel, Generic[T]):
    result: T


class UpdatedData(BaseModel):
    updated: bool


class DeletedData(BaseModel):
    deleted: bool


class TokenData(BaseModel):
    token: str
