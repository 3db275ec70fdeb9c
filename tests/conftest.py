# tests/conftest.py
import pytest

from app.adapters.outbound.persistence.repositories.memory_client_repository import InMemoryClientRepository
from app.application.use_cases.client_use_cases import AsyncClientService
from tests.factories import make_payload


@pytest.fixture
def payload():
    return make_payload()


@pytest.fixture
def repository():
    return InMemoryClientRepository()


@pytest.fixture
def service(repository):
    return AsyncClientService(repository)
