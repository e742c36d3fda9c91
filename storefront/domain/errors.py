# storefront/domain/errors.py


class ServiceError(Exception):
    """Bazowy blad use case'ow (cart, order, user)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Produkt, pozycja koszyka albo zamowienie nie istnieje (lub nalezy do kogos innego)."""


class ConflictError(ServiceError):
    """Naruszenie unikalnosci: ta sama pozycja drugi raz, drugie zamowienie."""


class EmptyCartError(ServiceError):
    pass


class ValidationError(ServiceError, ValueError):
    pass
