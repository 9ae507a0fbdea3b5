"""
Domain layer - business rules shared by services and the HTTP layer.

This package contains:
- Exceptions: certificate authority error taxonomy
"""

from simpleca.domain.errors import (
    CAError,
    ConflictError,
    DeletionError,
    NotFoundError,
    PreconditionError,
    SigningError,
    StorageError,
    ValidationError,
)

__all__ = [
    "CAError",
    "ConflictError",
    "DeletionError",
    "NotFoundError",
    "PreconditionError",
    "SigningError",
    "StorageError",
    "ValidationError",
]
