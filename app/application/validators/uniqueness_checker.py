# app/application/validators/uniqueness_checker.py

"""
Uniqueness pre-check for client fields.

Gives early, friendly errors before a write. The storage-level unique
constraints remain the real guarantee: this check is a read-then-write race.
"""

import logging
from typing import Optional

from app.application.ports.outbound import IClientRepository

UNIQUE_FIELDS = ("email", "phone", "cnpj")


class UniquenessChecker:
    """
    Asks the repository whether a field value already belongs to another client.

    Unexpected repository errors are logged and treated as "not found"
    (fail-open), so an infrastructure fault in this non-critical check never
    blocks a legitimate write.
    """

    def __init__(self, repository: IClientRepository, logger: Optional[logging.Logger] = None):
        self.repository = repository
        self.logger = logger or logging.getLogger(__name__)

    async def exists_by_field(self, field_name: str, value: Optional[str],
                              exclude_id: Optional[str] = None) -> bool:
        """
        Check whether a value is already registered.

        Args:
            field_name: One of "email", "phone", "cnpj"
            value: Normalized value to look up
            exclude_id: ID of the client being updated; a match on this
                client is not a conflict

        Returns:
            True if another active client already holds the value

        Raises:
            ValueError: If field_name is not a unique field
        """
        if field_name not in UNIQUE_FIELDS:
            raise ValueError(f"Uniqueness is not enforced for field '{field_name}'")

        if value is None or not str(value).strip():
            return False

        context = "UniquenessChecker.exists_by_field"
        lookup = getattr(self.repository, f"find_by_{field_name}")

        try:
            existing = await lookup(value)
        except Exception as e:
            self.logger.error(
                f"Error checking {field_name} uniqueness, treating as unique: {e}",
                extra={"context": context, "meta": {"field": field_name}},
            )
            return False

        if existing is None:
            self.logger.debug(
                f"{field_name} is unique",
                extra={"context": context, "meta": {"field": field_name}},
            )
            return False

        if exclude_id is not None and existing.id == exclude_id:
            self.logger.debug(
                f"{field_name} belongs to the client being updated",
                extra={"context": context, "meta": {"field": field_name, "client_id": exclude_id}},
            )
            return False

        self.logger.info(
            f"{field_name} already registered by another client",
            extra={"context": context, "meta": {"field": field_name, "existing_id": existing.id}},
        )
        return True
