# app/adapters/inbound/api/v1/endpoints/client_endpoint.py (async version)

"""
Endpoints for client management.

Request bodies are accepted as raw JSON objects: the client service
validates them and reports every invalid field at once.
"""

import logging
import re
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from app.adapters.inbound.api.deps import get_client_service
from app.application.dtos.client_dto import ClientListOptions, ClientOutput, ClientPage
from app.application.ports.inbound import IClientUseCase
from app.domain.services.client_query_service import (
    DEFAULT_LIMIT,
    DEFAULT_ORDER,
    DEFAULT_PAGE,
    DEFAULT_SORT,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Filters arrive as where[field]=value
WHERE_PARAM = re.compile(r"^where\[(\w+)\]$")

CLIENT_EXAMPLE = {
    "name": "Acme Industria Ltda",
    "email": "contato@acme.com.br",
    "phone": "11999990000",
    "cnpj": "11.222.333/0001-81",
    "cep": "01310-100",
    "address": "Avenida Paulista",
    "number": "1000",
    "complement": "Sala 12",
    "neighborhood": "Bela Vista",
    "city": "São Paulo",
    "state": "SP",
    "sector": "Manufacturing",
}

ERROR_EXAMPLE = {
    "detail": "Invalid input data: cnpj: CNPJ is invalid",
    "code": "INVALID_INPUT",
    "errors": [{"field": "cnpj", "message": "CNPJ is invalid"}],
}


def parse_where(request: Request) -> Optional[Dict[str, str]]:
    """Collect where[field]=value query parameters into a filter dict."""
    where = {}
    for key, value in request.query_params.items():
        match = WHERE_PARAM.match(key)
        if match:
            where[match.group(1)] = value
    return where or None


@router.post(
    "",
    response_model=ClientOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Create Client - Register a new client",
    description="Validates every field, checks email, phone and CNPJ uniqueness and stores the client.",
    responses={
        400: {"description": "Invalid input", "content": {"application/json": {"example": ERROR_EXAMPLE}}},
        409: {"description": "Email, phone or CNPJ already registered"},
    },
)
async def create_client(
        payload: Dict[str, Any] = Body(..., examples=[CLIENT_EXAMPLE]),
        service: IClientUseCase = Depends(get_client_service),
):
    return await service.create(payload)


@router.get(
    "",
    response_model=ClientPage,
    summary="List Clients - Paginated client listing",
    description=(
        "Returns a page of clients. Exact-match filters are passed as where[field]=value "
        "and take precedence over the free-text 'search' term."
    ),
)
async def list_clients(
        request: Request,
        page: int = Query(DEFAULT_PAGE, description="Page number, starting at 1"),
        limit: int = Query(DEFAULT_LIMIT, description="Items per page"),
        sort: str = Query(DEFAULT_SORT, description="Field to sort by"),
        order_by: str = Query(DEFAULT_ORDER, description="asc or desc"),
        search: Optional[str] = Query(None, description="Free-text search term"),
        service: IClientUseCase = Depends(get_client_service),
):
    options = ClientListOptions(
        page=page,
        limit=limit,
        sort=sort,
        order_by=order_by,
        where=parse_where(request),
        search=search,
    )
    return await service.find_many(options)


@router.get(
    "/count",
    response_model=int,
    summary="Count Clients - Number of clients matching a filter or search",
)
async def count_clients(
        request: Request,
        search: Optional[str] = Query(None, description="Free-text search term"),
        service: IClientUseCase = Depends(get_client_service),
):
    return await service.count(ClientListOptions(where=parse_where(request), search=search))


@router.get("/email/{email}", response_model=ClientOutput, summary="Get Client by Email")
async def get_client_by_email(email: str, service: IClientUseCase = Depends(get_client_service)):
    return ClientOutput.model_validate(await service.find_by_email(email))


@router.get("/cnpj/{cnpj}", response_model=ClientOutput, summary="Get Client by CNPJ")
async def get_client_by_cnpj(cnpj: str, service: IClientUseCase = Depends(get_client_service)):
    """Accepts the CNPJ formatted or as digits only."""
    return ClientOutput.model_validate(await service.find_by_cnpj(cnpj))


@router.get("/phone/{phone}", response_model=ClientOutput, summary="Get Client by Phone")
async def get_client_by_phone(phone: str, service: IClientUseCase = Depends(get_client_service)):
    return ClientOutput.model_validate(await service.find_by_phone(phone))


@router.get(
    "/{client_id}",
    response_model=ClientOutput,
    summary="Get Client - Client data by ID",
    responses={404: {"description": "Client not found"}},
)
async def get_client(client_id: str, service: IClientUseCase = Depends(get_client_service)):
    return ClientOutput.model_validate(await service.find_by_id(client_id))


@router.put(
    "/{client_id}",
    response_model=ClientOutput,
    summary="Update Client - Partial update of a client",
    description="Only the supplied fields are validated and changed.",
    responses={
        400: {"description": "Invalid input", "content": {"application/json": {"example": ERROR_EXAMPLE}}},
        404: {"description": "Client not found"},
        409: {"description": "Email, phone or CNPJ already registered to another client"},
    },
)
async def update_client(
        client_id: str,
        payload: Dict[str, Any] = Body(..., examples=[{"email": "financeiro@acme.com.br"}]),
        service: IClientUseCase = Depends(get_client_service),
):
    return await service.update(client_id, payload)


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Client",
    responses={404: {"description": "Client not found"}},
)
async def delete_client(client_id: str, service: IClientUseCase = Depends(get_client_service)):
    await service.delete(client_id)
    logger.info(f"Client {client_id} deleted via API")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
