# app/domain/__init__.py

"""
Domain components of the client registry.

This module exports the domain exceptions for easier imports.
"""

from app.domain.exceptions import (
    DomainException,               # Pure base exception of the domain
    FieldError,
    MissingRequiredArgumentException,
    ResourceNotFoundException,
    InvalidInputException,
    ResourceAlreadyExistsException,
    DatabaseOperationException,
)

__all__ = [
    "DomainException",
    "FieldError",
    "MissingRequiredArgumentException",
    "ResourceNotFoundException",
    "InvalidInputException",
    "ResourceAlreadyExistsException",
    "DatabaseOperationException",
]
