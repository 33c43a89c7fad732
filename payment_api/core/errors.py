"""
Domain-specific exceptions for the Payment Transaction service.

These exceptions represent business rule violations and are mapped
to appropriate HTTP status codes in the API layer. Storage failures are
not part of this hierarchy; they propagate unchanged.
"""

from typing import Any


class PaymentServiceError(Exception):
    """Base exception for all payment service domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(PaymentServiceError):
    """
    Raised when a requested transaction does not exist.

    Examples:
    - Transaction ID not found
    - Listing transactions on an empty store

    HTTP Status: 404 Not Found
    """

    pass


class InsertionNotPermittedError(PaymentServiceError):
    """
    Raised when a payment payload carries server-owned fields.

    Examples:
    - Client supplied a transaction id
    - Client supplied nsu, authorization code or status

    Not retryable; the caller must correct the payload.

    HTTP Status: 400 Bad Request
    """

    pass


ERROR_STATUS_MAP = {
    NotFoundError: 404,
    InsertionNotPermittedError: 400,
}


def get_status_code(error: Exception) -> int:
    """
    Get the HTTP status code for a given exception.

    Args:
        error: The exception instance

    Returns:
        HTTP status code (defaults to 500 for unknown errors)
    """
    return ERROR_STATUS_MAP.get(type(error), 500)
