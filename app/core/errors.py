from __future__ import annotations

from typing import Any, List, Optional

from fastapi import status


class AppError(Exception):
    """
    Baza taxonomiei de erori. Fiecare subclasă își declară status-ul HTTP;
    maparea efectivă se face într-un singur loc (handler-ele din app/main.py).
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, details: Optional[List[Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    # duplicatele sunt raportate ca 400 (contractul API nu folosește 409)
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class DuplicateProductError(ConflictError):
    """Ridicată când INSERT-ul încalcă unicitatea PK pe products.id."""
    default_message = "Product already exists!"
