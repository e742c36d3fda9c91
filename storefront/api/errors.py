# storefront/api/errors.py
from fastapi import HTTPException

from storefront.domain.errors import (
    ServiceError,
    NotFoundError,
    ConflictError,
    EmptyCartError,
    ValidationError,
)

_STATUS = {
    NotFoundError: 404,
    ConflictError: 409,
    EmptyCartError: 400,
    ValidationError: 422,
}


def http_error(e: ServiceError) -> HTTPException:
    """Blad use case'u -> odpowiedz HTTP."""
    for exc_type, status in _STATUS.items():
        if isinstance(e, exc_type):
            return HTTPException(status_code=status, detail=e.message)
    return HTTPException(status_code=400, detail=e.message)
