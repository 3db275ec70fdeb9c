# app/adapters/outbound/persistence/repositories/memory_client_repository.py

"""
In-memory client repository.

Stores clients in a dict, primarily for tests and local development. It
applies the same rules as the database: soft-deleted records are invisible
and email, phone and cnpj are unique among active records.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.application.ports.outbound import IClientRepository
from app.domain.exceptions import FieldError, ResourceAlreadyExistsException
from app.domain.models.client_domain_model import Client
from app.domain.services.client_query_service import ClientPredicate, OrderBy

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = {
    "email": "This email is already registered",
    "phone": "This phone is already registered",
    "cnpj": "CNPJ is already registered",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryClientRepository(IClientRepository):
    """In-memory implementation of IClientRepository."""

    def __init__(self):
        self._store: Dict[str, Client] = {}

    def _active(self) -> List[Client]:
        return [c for c in self._store.values() if c.is_active()]

    def _check_unique(self, values: Dict[str, Any], exclude_id: Optional[str] = None) -> None:
        errors = []
        for field, message in UNIQUE_FIELDS.items():
            value = values.get(field)
            if value is None:
                continue
            for client in self._active():
                if client.id != exclude_id and getattr(client, field) == value:
                    errors.append(FieldError(field, message))
                    break
        if errors:
            logger.warning(f"Uniqueness violation: {[e.field for e in errors]}")
            raise ResourceAlreadyExistsException(detail="Client with these data already exists", errors=errors)

    def add(self, client: Client) -> Client:
        """Store a client as-is (seeding helper; no uniqueness check)."""
        self._store[client.id] = client
        return client

    async def create(self, data: Dict[str, Any]) -> Client:
        self._check_unique(data)
        now = _utcnow()
        client = Client(id=uuid.uuid4().hex, created_at=now, updated_at=now, **data)
        self._store[client.id] = client
        logger.info(f"Client created with ID: {client.id}")
        return replace(client)

    async def find_many(self, predicate: ClientPredicate, order_by: OrderBy,
                        offset: int, limit: int) -> List[Client]:
        matches = [c for c in self._active() if predicate.matches(c)]
        # Stable tie-breaker on id, then the requested field; None values sort first
        matches.sort(key=lambda c: c.id)
        matches.sort(
            key=lambda c: (getattr(c, order_by.field) is not None, getattr(c, order_by.field) or ""),
            reverse=order_by.descending,
        )
        return [replace(c) for c in matches[offset:offset + limit]]

    async def _find_by(self, field: str, value: Any) -> Optional[Client]:
        for client in self._active():
            if getattr(client, field) == value:
                return replace(client)
        return None

    async def find_by_id(self, client_id: str) -> Optional[Client]:
        return await self._find_by("id", client_id)

    async def find_by_email(self, email: str) -> Optional[Client]:
        return await self._find_by("email", email)

    async def find_by_cnpj(self, cnpj: str) -> Optional[Client]:
        return await self._find_by("cnpj", cnpj)

    async def find_by_phone(self, phone: str) -> Optional[Client]:
        return await self._find_by("phone", phone)

    async def update(self, client_id: str, patch: Dict[str, Any]) -> Optional[Client]:
        client = self._store.get(client_id)
        if client is None or client.is_deleted():
            return None
        self._check_unique(patch, exclude_id=client_id)
        updated = replace(client, **patch, updated_at=_utcnow())
        self._store[client_id] = updated
        return replace(updated)

    async def delete(self, client_id: str) -> None:
        self._store.pop(client_id, None)

    async def count(self, predicate: Optional[ClientPredicate] = None) -> int:
        predicate = predicate or ClientPredicate()
        return sum(1 for c in self._active() if predicate.matches(c))
