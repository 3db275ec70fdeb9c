# app/shared/utils/email_validation.py
"""
Utilities for email validation and normalization.
"""

import re
from typing import Tuple

# Basic email format
EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

MAX_EMAIL_LENGTH = 255


def validate_email(email: str) -> Tuple[bool, str]:
    """
    Validate an email address.

    Args:
        email: The email address to validate

    Returns:
        Tuple (valid, error message)
    """
    if not email:
        return False, "Email must not be empty"

    email = normalize_email(email)

    if len(email) > MAX_EMAIL_LENGTH:
        return False, f"Email must not exceed {MAX_EMAIL_LENGTH} characters"

    if not EMAIL_REGEX.match(email):
        return False, "Email must be a valid email"

    return True, ""


def normalize_email(email: str) -> str:
    """
    Normalize an email address by trimming spaces and lower-casing it.

    Args:
        email: The email address to normalize

    Returns:
        Normalized email
    """
    return email.strip().lower()
