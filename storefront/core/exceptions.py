from fastapi import HTTPException, status
from typing import Any, Optional


class ProductNotFound(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )


class EmptyCart(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cart is empty"
        )


class CartStorageError(Exception):
    """Raised by cart storage backends when the persisted slot cannot be read or written."""

    def __init__(self, key: str, operation: str, reason: str = ""):
        self.key = key
        self.operation = operation
        self.reason = reason
        super().__init__(f"Cart storage {operation} failed for key '{key}': {reason}")


class APIError(Exception):
    """Request refused by cart rules; rendered by the app's error envelope handler."""

    def __init__(self, status_code: int, message: str, errors: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
