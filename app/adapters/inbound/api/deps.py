# app/adapters/inbound/api/deps.py (async version)

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via
FastAPI Depends(): the client repository and the client service built on it.
"""

import logging

from fastapi import Depends

from app.adapters.outbound.persistence.database import get_session_factory
from app.adapters.outbound.persistence.repositories.client_repository import AsyncClientRepository
from app.application.ports.inbound import IClientUseCase
from app.application.ports.outbound import IClientRepository
from app.application.use_cases.client_use_cases import AsyncClientService

# Configure logger
logger = logging.getLogger(__name__)


def get_client_repository() -> IClientRepository:
    """
    Provide the SQLAlchemy client repository.

    Override this dependency to run the API on another IClientRepository.
    """
    return AsyncClientRepository(get_session_factory())


def get_client_service(
        repository: IClientRepository = Depends(get_client_repository),
) -> IClientUseCase:
    return AsyncClientService(repository)
