# app/adapters/outbound/persistence/models/client_model.py

"""
Client ORM model.

This module defines the Client model, the persisted form of a registered
business client.
"""

import uuid

from sqlalchemy import Column, DateTime, Index, String, func, text
from app.adapters.outbound.persistence.models.base_model import Base

# Uniqueness only applies to records that are not soft-deleted
ACTIVE_ONLY = text("deleted_at IS NULL")


def _new_id() -> str:
    return uuid.uuid4().hex


class Client(Base):
    """
    Model representing a registered business client.

    Attributes:
        id: Unique identifier, assigned on insert
        name: Company name
        email: Contact email (unique among active clients)
        phone: Contact phone (unique among active clients)
        cnpj: CNPJ, digits only (unique among active clients)
        cep: Postal code
        address, number, complement, neighborhood, city, state: Address parts
        sector: Business sector
        created_at: Creation date and time
        updated_at: Date and time of the last update
        deleted_at: Soft-deletion date and time (None while active)
    """
    __tablename__ = "clients"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(15), nullable=True)
    cnpj = Column(String(14), nullable=False)
    cep = Column(String(8), nullable=False)
    address = Column(String(255), nullable=False)
    number = Column(String(10), nullable=False)
    complement = Column(String(255), nullable=True)
    neighborhood = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    state = Column(String(2), nullable=False)
    sector = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, nullable=True, index=True)

    __table_args__ = (
        Index("uq_clients_email", "email", unique=True,
              postgresql_where=ACTIVE_ONLY, sqlite_where=ACTIVE_ONLY),
        Index("uq_clients_phone", "phone", unique=True,
              postgresql_where=ACTIVE_ONLY, sqlite_where=ACTIVE_ONLY),
        Index("uq_clients_cnpj", "cnpj", unique=True,
              postgresql_where=ACTIVE_ONLY, sqlite_where=ACTIVE_ONLY),
    )

    def __repr__(self) -> str:
        """String representation of the Client object."""
        return f"<Client(cnpj={self.cnpj}, name={self.name})>"
