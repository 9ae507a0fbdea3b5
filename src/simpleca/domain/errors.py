"""
Error taxonomy for certificate authority operations.

Services raise these exceptions; the HTTP layer renders them as
RFC 7807 problem documents using ``status_code`` and ``title``.
"""

from typing import Any


class CAError(Exception):
    """
    Base class for certificate authority errors.

    Attributes:
        message: Human-readable error message
        details: Optional machine-readable payload returned to the caller
    """

    status_code: int = 500
    title: str = "Certificate Authority Error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(CAError):
    """Malformed or out-of-range input (ranges, key sizes, PEM framing)."""

    status_code = 400
    title = "Validation Error"


class PreconditionError(CAError):
    """Operation requires state that is not present (e.g. no root CA)."""

    status_code = 400
    title = "Precondition Failed"


class ConflictError(CAError):
    """Root CA already exists without force, or duplicate leaf name."""

    status_code = 409
    title = "Conflict"


class NotFoundError(CAError):
    """Requested registry entry or artifact does not exist."""

    status_code = 404
    title = "Not Found"


class StorageError(CAError):
    """Reading or writing the storage directory failed."""

    status_code = 500
    title = "Storage Error"


class SigningError(CAError):
    """Key generation, CSR construction or signing failed."""

    status_code = 500
    title = "Signing Error"


class DeletionError(CAError):
    """Deletion refused or only partially applied; details carry the report."""

    status_code = 500
    title = "Deletion Failed"
