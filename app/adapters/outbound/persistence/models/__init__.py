# app/adapters/outbound/persistence/models/__init__.py

"""
Data models module.

Exports every SQLAlchemy model so that the metadata is complete wherever
Base is imported (table creation, migrations).
"""

from app.adapters.outbound.persistence.models.base_model import Base
from app.adapters.outbound.persistence.models.client_model import Client

__all__ = [
    "Base",
    "Client",
]
