# app/application/dtos/client_dto.py

"""
Schemas for client data.

ClientCreate and ClientUpdate hold input that already went through
ClientInputValidator (normalized values only). The remaining schemas shape
listing options and responses.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field

from app.application.dtos.base_dto import CustomBaseModel
from app.domain.services.client_query_service import (
    DEFAULT_LIMIT,
    DEFAULT_ORDER,
    DEFAULT_PAGE,
    DEFAULT_SORT,
    MAX_LIMIT,
)


class ClientCreate(CustomBaseModel):
    """Validated and normalized data for a new client."""
    name: str = Field(..., description="Company name")
    email: Optional[str] = Field(None, description="Contact email, unique when present")
    phone: Optional[str] = Field(None, description="Contact phone, unique when present")
    cnpj: str = Field(..., description="CNPJ, digits only")
    cep: str = Field(..., description="Postal code (CEP), 8 characters")
    address: str = Field(..., description="Street address")
    number: str = Field(..., description="Street number")
    complement: Optional[str] = Field(None, description="Address complement")
    neighborhood: str = Field(..., description="Neighborhood")
    city: str = Field(..., description="City")
    state: str = Field(..., description="Federative unit (e.g. SP, RJ)")
    sector: str = Field(..., description="Business sector")


class ClientUpdate(CustomBaseModel):
    """Validated partial update. Fields left as None are not changed."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    cnpj: Optional[str] = None
    cep: Optional[str] = None
    address: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    sector: Optional[str] = None


class ClientOutput(CustomBaseModel):
    """
    Public projection of a client.

    Used to return client data from the API without internal fields.
    """
    id: str = Field(..., description="Unique client identifier")
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    cnpj: str
    cep: str
    address: str
    number: str
    complement: Optional[str] = None
    neighborhood: str
    city: str
    state: str
    sector: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClientListOptions(CustomBaseModel):
    """
    Pagination, sort, filter and search options for client listings.

    Ranges and field names are checked by build_client_query, which reports
    every problem as a field error.
    """
    page: int = Field(DEFAULT_PAGE, description="Page number, starting at 1")
    limit: int = Field(DEFAULT_LIMIT, description=f"Items per page, at most {MAX_LIMIT}")
    sort: str = Field(DEFAULT_SORT, description="Field to sort by")
    order_by: str = Field(DEFAULT_ORDER, description="Sort direction, asc or desc")
    where: Optional[Dict[str, Optional[str]]] = Field(None, description="Exact-match filters; take precedence over search")
    search: Optional[str] = Field(None, description="Free-text search term")


class ClientPage(CustomBaseModel):
    """Page envelope returned by client listings."""
    data: List[ClientOutput]
    total: int
    page: int
    limit: int
    sort: str
    order_by: str
    total_pages: int
