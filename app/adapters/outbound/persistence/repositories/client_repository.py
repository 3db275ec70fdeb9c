# app/adapters/outbound/persistence/repositories/client_repository.py (async version)

"""
Repository for client operations.

This module implements the repository that performs database operations
related to clients, implementing the IClientRepository interface.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.sql import ColumnElement

from app.adapters.outbound.persistence.models import Client
from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.application.ports.outbound import IClientRepository
from app.domain.models.client_domain_model import Client as DomainClient
from app.domain.services.client_query_service import ClientPredicate, OrderBy

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so a search term only ever matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class AsyncClientRepository(AsyncCRUDBase[Client], IClientRepository):
    """
    Async SQLAlchemy implementation of the client repository.

    Extends AsyncCRUDBase with client lookups and the translation of
    ClientPredicate/OrderBy into SQL clauses with bound parameters.
    """

    unique_fields = {
        "email": "This email is already registered",
        "phone": "This phone is already registered",
        "cnpj": "CNPJ is already registered",
    }

    def __init__(self, session_factory: async_sessionmaker):
        super().__init__(Client, session_factory)

    def _column(self, field_name: str):
        column = getattr(Client, field_name, None)
        if column is None:
            raise ValueError(f"Unknown client column: {field_name}")
        return column

    def filter_clauses(self, predicate: Optional[ClientPredicate]) -> List[ColumnElement]:
        """
        Translate a predicate into WHERE clauses.

        Args:
            predicate: Filter built by build_client_query

        Returns:
            Clauses to AND together (empty for "match all")
        """
        if predicate is None or predicate.matches_all:
            return []

        if predicate.equals:
            return [self._column(name) == value for name, value in predicate.equals.items()]

        pattern = f"%{escape_like(predicate.search)}%"
        return [or_(*(
            self._column(name).ilike(pattern, escape=LIKE_ESCAPE)
            for name in predicate.search_fields
        ))]

    def order_clauses(self, order_by: OrderBy) -> List[ColumnElement]:
        column = self._column(order_by.field)
        # Tie-breaker on id keeps pagination stable
        return [column.desc() if order_by.descending else column.asc(), Client.id.asc()]

    def to_domain(self, db_model: Optional[Client]) -> Optional[DomainClient]:
        """
        Convert database model to domain model.

        Args:
            db_model: Client ORM model

        Returns:
            Domain model of client
        """
        if db_model is None:
            return None
        return DomainClient(
            id=db_model.id,
            name=db_model.name,
            email=db_model.email,
            phone=db_model.phone,
            cnpj=db_model.cnpj,
            cep=db_model.cep,
            address=db_model.address,
            number=db_model.number,
            complement=db_model.complement,
            neighborhood=db_model.neighborhood,
            city=db_model.city,
            state=db_model.state,
            sector=db_model.sector,
            created_at=db_model.created_at,
            updated_at=db_model.updated_at,
            deleted_at=db_model.deleted_at,
        )

    async def create(self, data: Dict[str, Any]) -> DomainClient:
        return self.to_domain(await super().create(data))

    async def find_many(self, predicate: ClientPredicate, order_by: OrderBy,
                        offset: int, limit: int) -> List[DomainClient]:
        rows = await self.get_multi(
            where=self.filter_clauses(predicate),
            order_by=self.order_clauses(order_by),
            skip=offset,
            limit=limit,
        )
        return [self.to_domain(row) for row in rows]

    async def find_by_id(self, client_id: str) -> Optional[DomainClient]:
        return self.to_domain(await self.get(client_id))

    async def find_by_email(self, email: str) -> Optional[DomainClient]:
        return self.to_domain(await self.get_by_field("email", email))

    async def find_by_cnpj(self, cnpj: str) -> Optional[DomainClient]:
        return self.to_domain(await self.get_by_field("cnpj", cnpj))

    async def find_by_phone(self, phone: str) -> Optional[DomainClient]:
        return self.to_domain(await self.get_by_field("phone", phone))

    async def update(self, client_id: str, patch: Dict[str, Any]) -> Optional[DomainClient]:
        return self.to_domain(await super().update(client_id, patch))

    async def delete(self, client_id: str) -> None:
        await self.remove(client_id)

    async def count(self, predicate: Optional[ClientPredicate] = None) -> int:
        return await super().count(where=self.filter_clauses(predicate))
