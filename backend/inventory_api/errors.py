"""Domain errors raised by services and rendered by the API layer.

Each class carries the HTTP status it maps to; ``inventory_api.main``
registers a single handler for the base class.
"""
from typing import List, Optional


class InventoryError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(InventoryError):
    status_code = 400
    default_message = "Validation error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class NotFound(InventoryError):
    status_code = 404
    default_message = "Not found"


class DuplicateKey(InventoryError):
    status_code = 409
    default_message = "Duplicate key"


class Unauthorized(InventoryError):
    status_code = 401
    default_message = "Not authorized"


class Forbidden(InventoryError):
    status_code = 403
    default_message = "Access denied"


class InvalidOperation(InventoryError):
    status_code = 400
    default_message = "Operation not allowed"


class StoreError(InventoryError):
    status_code = 500
    default_message = "Storage error"
