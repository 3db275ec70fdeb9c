# app/adapters/outbound/persistence/repositories/__init__.py (async version)

"""
Repository module.

Exports the client repository implementations of IClientRepository:
the SQLAlchemy one used by the API and the in-memory one.
"""

from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.repositories.client_repository import AsyncClientRepository
from app.adapters.outbound.persistence.repositories.memory_client_repository import InMemoryClientRepository

__all__ = [
    "AsyncCRUDBase",
    "AsyncClientRepository",
    "InMemoryClientRepository",
]
