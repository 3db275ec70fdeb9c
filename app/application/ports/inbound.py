# app/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from app.application.dtos.client_dto import ClientListOptions, ClientOutput, ClientPage
from app.domain.models.client_domain_model import Client


class IClientUseCase(ABC):
    """Interface for client-related use cases."""

    @abstractmethod
    async def create(self, payload: Mapping[str, Any]) -> ClientOutput:
        """Validate and register a new client."""
        pass

    @abstractmethod
    async def find_many(self, options: Optional[ClientListOptions] = None) -> ClientPage:
        """List clients with pagination, sort, filter and search."""
        pass

    @abstractmethod
    async def find_by_id(self, client_id: str) -> Client:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Client:
        pass

    @abstractmethod
    async def find_by_cnpj(self, cnpj: str) -> Client:
        pass

    @abstractmethod
    async def find_by_phone(self, phone: str) -> Client:
        pass

    @abstractmethod
    async def update(self, client_id: str, payload: Mapping[str, Any]) -> ClientOutput:
        """Validate and apply a partial update."""
        pass

    @abstractmethod
    async def delete(self, client_id: str) -> None:
        pass

    @abstractmethod
    async def count(self, options: Optional[ClientListOptions] = None) -> int:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def exists_by_cnpj(self, cnpj: str) -> bool:
        pass

    @abstractmethod
    async def exists_by_phone(self, phone: str) -> bool:
        pass
