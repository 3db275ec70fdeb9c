# app/domain/exceptions.py

"""
Domain exceptions for the client registry.

This module defines pure Python exceptions (no HTTP dependency). The
exception middleware maps each one to an HTTP status code through its
'internal_code'.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class FieldError:
    """A single field-level constraint violation."""
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class DomainException(Exception):
    """
    Base exception for every error raised by the domain and application layers.

    Attributes:
        detail: Human-readable message
        internal_code: Stable machine-readable code
        details: Structured payload (list of field errors, when relevant)
    """

    def __init__(
            self,
            detail: str,
            internal_code: Optional[str] = None,
            details: Any = None,
    ):
        super().__init__(detail)
        self.detail = detail
        self.internal_code = internal_code
        self.details = details if details is not None else []


class MissingRequiredArgumentException(DomainException):
    """A required identifier/key was not supplied before any lookup."""

    def __init__(self, detail: str = "Required argument is missing", argument: Optional[str] = None):
        details = [FieldError(argument, detail).to_dict()] if argument else []
        super().__init__(detail=detail, internal_code="MISSING_ARGUMENTS", details=details)
        self.argument = argument


class ResourceNotFoundException(DomainException):
    """Resource not found."""

    def __init__(self, detail: str = "Client not found", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(detail=f"{detail}{resource_info}", internal_code="CLIENT_NOT_FOUND")
        self.resource_id = resource_id


class InvalidInputException(DomainException):
    """
    One or more field-level constraint violations.

    The full list of violations is kept in 'errors' so the caller can render
    a field-by-field message.
    """

    default_code = "INVALID_INPUT"

    def __init__(self, detail: str = "Invalid input data", errors: Optional[Iterable[FieldError]] = None):
        self.errors: List[FieldError] = list(errors or [])
        field_errors = ""
        if self.errors:
            field_errors = ": " + "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(
            detail=f"{detail}{field_errors}",
            internal_code=self.default_code,
            details=[e.to_dict() for e in self.errors],
        )

    @property
    def fields(self) -> Dict[str, str]:
        return {e.field: e.message for e in self.errors}


class ResourceAlreadyExistsException(InvalidInputException):
    """Uniqueness conflict, raised by the pre-check or by a storage constraint."""

    default_code = "RESOURCE_ALREADY_EXISTS"

    def __init__(self, detail: str = "Resource already exists", errors: Optional[Iterable[FieldError]] = None):
        super().__init__(detail=detail, errors=errors)


class DatabaseOperationException(DomainException):
    """Error in a database operation."""

    def __init__(self, detail: str = "Error executing database operation",
                 original_error: Optional[Exception] = None):
        error_info = f": {str(original_error)}" if original_error else ""
        super().__init__(detail=f"{detail}{error_info}", internal_code="DATABASE_OPERATION_ERROR")
        self.original_error = original_error
