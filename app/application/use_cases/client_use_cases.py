# app/application/use_cases/client_use_cases.py

"""
Service for client management.

This module implements the use cases of the client registry: create, look
up, list, update and delete clients. Validation, query building and
persistence are delegated to the collaborators received at construction.
"""

import asyncio
import logging
import math
from typing import Any, Awaitable, Callable, Mapping, Optional

from app.application.dtos.client_dto import ClientListOptions, ClientOutput, ClientPage
from app.application.ports.inbound import IClientUseCase
from app.application.ports.outbound import IClientRepository
from app.application.validators.client_validator import ClientInputValidator
from app.application.validators.uniqueness_checker import UniquenessChecker
from app.domain.exceptions import (
    DatabaseOperationException,
    DomainException,
    MissingRequiredArgumentException,
    ResourceNotFoundException,
)
from app.domain.models.client_domain_model import Client
from app.domain.services.client_query_service import ClientQuery, build_client_query
from app.domain.services.cnpj_service import normalize_cnpj
from app.shared.utils.email_validation import normalize_email


class AsyncClientService(IClientUseCase):
    """
    Service for client management.

    Each operation checks its preconditions (required arguments, existing
    record, valid input) before touching the repository, and translates
    unexpected failures into DatabaseOperationException.
    """

    name = "ClientService"

    def __init__(self, repository: IClientRepository, logger: Optional[logging.Logger] = None):
        """
        Initialize the service with its collaborators.

        Args:
            repository: Client data-access implementation
            logger: Logger; defaults to this module's logger
        """
        self.repository = repository
        self.logger = logger or logging.getLogger(__name__)
        self.uniqueness_checker = UniquenessChecker(repository, self.logger)
        self.validator = ClientInputValidator(self.uniqueness_checker, self.logger)

    def _log(self, level: int, message: str, operation: str, **meta: Any) -> None:
        self.logger.log(level, message, extra={"context": f"{self.name}.{operation}", "meta": meta})

    async def create(self, payload: Mapping[str, Any]) -> ClientOutput:
        """
        Validate and register a new client.

        Args:
            payload: Raw client data

        Returns:
            Public projection of the created client

        Raises:
            InvalidInputException: If any field is invalid
            ResourceAlreadyExistsException: If email, phone or CNPJ is already registered
            DatabaseOperationException: If persistence fails unexpectedly
        """
        self._log(logging.INFO, "Creating client", "create")

        data = await self.validator.validate_create(payload)

        try:
            created = await self.repository.create(data.to_dict())
        except DomainException:
            raise
        except Exception as e:
            self.logger.exception(f"Error creating client: {e}")
            raise DatabaseOperationException(detail="Error creating client", original_error=e)

        self._log(logging.INFO, "Client created", "create", client_id=created.id)
        return ClientOutput.model_validate(created)

    def _build_query(self, options: Optional[ClientListOptions]) -> ClientQuery:
        options = options or ClientListOptions()
        return build_client_query(
            page=options.page,
            limit=options.limit,
            sort=options.sort,
            order_by=options.order_by,
            where=options.where,
            search=options.search,
        )

    async def find_many(self, options: Optional[ClientListOptions] = None) -> ClientPage:
        """
        List clients.

        The count and the page fetch are independent reads and run
        concurrently.

        Args:
            options: Pagination, sort, filter and search options

        Returns:
            Page envelope; an empty page is a valid result

        Raises:
            InvalidInputException: If the options are invalid
            DatabaseOperationException: If a query fails
        """
        query = self._build_query(options)
        self._log(logging.INFO, "Finding many clients", "find_many",
                  page=query.page, limit=query.limit, sort=query.order_by.field,
                  order_by=query.order_by.direction, filter=query.predicate.equals,
                  search=query.predicate.search)

        try:
            total, clients = await asyncio.gather(
                self.repository.count(query.predicate),
                self.repository.find_many(
                    predicate=query.predicate,
                    order_by=query.order_by,
                    offset=query.offset,
                    limit=query.limit,
                ),
            )
        except DomainException:
            raise
        except Exception as e:
            self.logger.exception(f"Error listing clients: {e}")
            raise DatabaseOperationException(detail="Error listing clients", original_error=e)

        if not clients:
            self._log(logging.WARNING, "No clients found", "find_many")
        else:
            self._log(logging.INFO, "Clients found", "find_many", count=len(clients))

        return ClientPage(
            data=[ClientOutput.model_validate(c) for c in clients],
            total=total,
            page=query.page,
            limit=query.limit,
            sort=query.order_by.field,
            order_by=query.order_by.direction,
            total_pages=math.ceil(total / query.limit),
        )

    async def _find_by(self, field_name: str, value: Optional[str],
                       lookup: Callable[[str], Awaitable[Optional[Client]]],
                       label: str) -> Client:
        operation = f"find_by_{field_name}"

        if value is None or not str(value).strip():
            self._log(logging.ERROR, f"{label} is required", operation)
            raise MissingRequiredArgumentException(detail=f"{label} is required", argument=field_name)

        try:
            client = await lookup(value)
        except DomainException:
            raise
        except Exception as e:
            self.logger.exception(f"Error finding client by {field_name}: {e}")
            raise DatabaseOperationException(detail="Error finding client", original_error=e)

        if client is None:
            self._log(logging.WARNING, "Client not found", operation, **{field_name: value})
            raise ResourceNotFoundException(detail="Client not found")

        self._log(logging.INFO, "Client found", operation, client_id=client.id)
        return client

    async def find_by_id(self, client_id: str) -> Client:
        """
        Get a client by ID.

        Raises:
            MissingRequiredArgumentException: If the ID is blank (no lookup is made)
            ResourceNotFoundException: If no active client has this ID
        """
        return await self._find_by("id", client_id, self.repository.find_by_id, "Id")

    async def find_by_email(self, email: str) -> Client:
        if email:
            email = normalize_email(email)
        return await self._find_by("email", email, self.repository.find_by_email, "Email")

    async def find_by_cnpj(self, cnpj: str) -> Client:
        """Get a client by CNPJ, formatted or digits only."""
        if cnpj:
            cnpj = normalize_cnpj(cnpj)
        return await self._find_by("cnpj", cnpj, self.repository.find_by_cnpj, "CNPJ")

    async def find_by_phone(self, phone: str) -> Client:
        if phone:
            phone = phone.strip()
        return await self._find_by("phone", phone, self.repository.find_by_phone, "Phone")

    async def update(self, client_id: str, payload: Mapping[str, Any]) -> ClientOutput:
        """
        Apply a partial update to a client.

        Only supplied fields are validated and written. Email, phone and CNPJ
        may keep the client's own current values.

        Args:
            client_id: ID of the client
            payload: Raw fields to change

        Returns:
            Public projection of the updated client

        Raises:
            MissingRequiredArgumentException: If the ID is blank
            ResourceNotFoundException: If the client does not exist
            InvalidInputException: If any supplied field is invalid
            ResourceAlreadyExistsException: If a unique value belongs to another client
            DatabaseOperationException: If persistence fails unexpectedly
        """
        self._log(logging.INFO, "Updating client", "update", client_id=client_id)

        if client_id is None or not str(client_id).strip():
            self._log(logging.ERROR, "Id is required", "update")
            raise MissingRequiredArgumentException(detail="Id is required", argument="id")

        current = await self.find_by_id(client_id)
        data = await self.validator.validate_update(current.id, payload)
        patch = data.to_dict()

        if not patch:
            self._log(logging.INFO, "Nothing to update", "update", client_id=client_id)
            return ClientOutput.model_validate(current)

        try:
            updated = await self.repository.update(current.id, patch)
        except DomainException:
            raise
        except Exception as e:
            self.logger.exception(f"Error updating client: {e}")
            raise DatabaseOperationException(detail="Error updating client", original_error=e)

        if updated is None:
            raise ResourceNotFoundException(detail="Client not found")

        self._log(logging.INFO, "Client updated", "update", client_id=client_id, fields=sorted(patch))
        return ClientOutput.model_validate(updated)

    async def delete(self, client_id: str) -> None:
        """
        Delete a client.

        Raises:
            MissingRequiredArgumentException: If the ID is blank
            ResourceNotFoundException: If the client does not exist
        """
        self._log(logging.INFO, "Deleting client", "delete", client_id=client_id)

        if client_id is None or not str(client_id).strip():
            self._log(logging.ERROR, "Id is required", "delete")
            raise MissingRequiredArgumentException(detail="Id is required", argument="id")

        current = await self.find_by_id(client_id)

        try:
            await self.repository.delete(current.id)
        except DomainException:
            raise
        except Exception as e:
            self.logger.exception(f"Error deleting client: {e}")
            raise DatabaseOperationException(detail="Error deleting client", original_error=e)

        self._log(logging.INFO, "Client deleted", "delete", client_id=client_id)

    async def count(self, options: Optional[ClientListOptions] = None) -> int:
        """Count clients matching the filter or search of 'options' (all clients by default)."""
        query = self._build_query(options)
        try:
            total = await self.repository.count(query.predicate)
        except DomainException:
            raise
        except Exception as e:
            self.logger.exception(f"Error counting clients: {e}")
            raise DatabaseOperationException(detail="Error counting clients", original_error=e)

        self._log(logging.INFO, "Clients counted", "count", count=total)
        return total

    async def exists_by_email(self, email: str) -> bool:
        return await self.uniqueness_checker.exists_by_field("email", normalize_email(email) if email else email)

    async def exists_by_cnpj(self, cnpj: str) -> bool:
        return await self.uniqueness_checker.exists_by_field("cnpj", normalize_cnpj(cnpj) if cnpj else cnpj)

    async def exists_by_phone(self, phone: str) -> bool:
        return await self.uniqueness_checker.exists_by_field("phone", phone.strip() if phone else phone)
