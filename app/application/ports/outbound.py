# app/application/ports/outbound.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from app.domain.models.client_domain_model import Client
from app.domain.services.client_query_service import ClientPredicate, OrderBy


class IClientRepository(ABC):
    """
    Client repository interface.

    Implementations only see records whose deletion timestamp is unset and
    must enforce uniqueness of email, phone and cnpj at the storage level,
    raising ResourceAlreadyExistsException on violation.
    """

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Client:
        """Persist a new client and return it with id and timestamps."""
        pass

    @abstractmethod
    async def find_many(
            self,
            predicate: ClientPredicate,
            order_by: OrderBy,
            offset: int,
            limit: int,
    ) -> List[Client]:
        """List clients matching the predicate, ordered and paginated."""
        pass

    @abstractmethod
    async def find_by_id(self, client_id: str) -> Optional[Client]:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Client]:
        pass

    @abstractmethod
    async def find_by_cnpj(self, cnpj: str) -> Optional[Client]:
        pass

    @abstractmethod
    async def find_by_phone(self, phone: str) -> Optional[Client]:
        pass

    @abstractmethod
    async def update(self, client_id: str, patch: Dict[str, Any]) -> Optional[Client]:
        """Apply a partial patch. Returns None if the client no longer exists."""
        pass

    @abstractmethod
    async def delete(self, client_id: str) -> None:
        pass

    @abstractmethod
    async def count(self, predicate: Optional[ClientPredicate] = None) -> int:
        """Count clients, optionally restricted to a predicate."""
        pass
