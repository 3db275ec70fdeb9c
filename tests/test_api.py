# tests/test_api.py
import pytest
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from app.adapters.inbound.api.deps import get_client_repository
from app.adapters.outbound.persistence.repositories.memory_client_repository import InMemoryClientRepository
from app.main import create_app
from tests.factories import OTHER_VALID_CNPJ, make_cnpj, make_payload

BASE_URL = "/api/v1/clients"


@pytest.fixture
def repository():
    return InMemoryClientRepository()


@pytest.fixture
def client(repository):
    """Test client backed by the in-memory repository"""
    app = create_app()
    app.dependency_overrides[get_client_repository] = lambda: repository
    return TestClient(app)


@pytest.fixture
def created(client):
    response = client.post(BASE_URL, json=make_payload())
    assert response.status_code == 201
    return response.json()


def test_create_client(created):
    assert created["cnpj"] == "11222333000181"
    assert created["cep"] == "01310100"
    assert created["state"] == "SP"
    assert "deleted_at" not in created


def test_create_invalid_client(client):
    response = client.post(BASE_URL, json=make_payload(cnpj="11222333000182", state="ZZ"))

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "INVALID_INPUT"
    assert {e["field"] for e in body["errors"]} == {"cnpj", "state"}


def test_create_duplicate_client(client, created):
    response = client.post(BASE_URL, json=make_payload(phone="11888880000", email="other@acme.com.br"))

    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "RESOURCE_ALREADY_EXISTS"
    assert body["errors"] == [{"field": "cnpj", "message": "CNPJ is already registered"}]


def test_get_client(client, created):
    response = client.get(f"{BASE_URL}/{created['id']}")

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


def test_get_missing_client(client):
    response = client.get(f"{BASE_URL}/nonexistent")

    assert response.status_code == 404
    assert response.json()["code"] == "CLIENT_NOT_FOUND"


def test_get_client_by_keys(client, created):
    assert client.get(f"{BASE_URL}/cnpj/11222333000181").json()["id"] == created["id"]
    assert client.get(f"{BASE_URL}/email/CONTATO@acme.com.br").json()["id"] == created["id"]
    assert client.get(f"{BASE_URL}/phone/11999990000").json()["id"] == created["id"]


def test_list_clients(client):
    for n in range(12):
        client.post(BASE_URL, json=make_payload(
            name=f"Client {n:02d}", email=None, phone=None, cnpj=make_cnpj(n),
        ))

    response = client.get(BASE_URL, params={"page": 2, "limit": 5, "sort": "name", "order_by": "desc"})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 12
    assert body["total_pages"] == 3
    assert [c["name"] for c in body["data"]] == [f"Client {n:02d}" for n in range(6, 1, -1)]


def test_list_clients_with_filter(client, created):
    client.post(BASE_URL, json=make_payload(
        email=None, phone=None, cnpj=OTHER_VALID_CNPJ, sector="Retail",
    ))

    body = client.get(f"{BASE_URL}?where[sector]=Retail&search=acme").json()

    assert body["total"] == 1
    assert body["data"][0]["sector"] == "Retail"


def test_list_clients_invalid_options(client):
    response = client.get(BASE_URL, params={"limit": 500, "where[password]": "x"})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_count_clients(client, created):
    assert client.get(f"{BASE_URL}/count").json() == 1
    assert client.get(f"{BASE_URL}/count", params={"search": "nothing"}).json() == 0


def test_update_client(client, created):
    response = client.put(f"{BASE_URL}/{created['id']}", json={"city": "Campinas", "email": created["email"]})

    assert response.status_code == 200
    assert response.json()["city"] == "Campinas"


def test_delete_client(client, created):
    response = client.delete(f"{BASE_URL}/{created['id']}")

    assert response.status_code == 204
    assert client.get(f"{BASE_URL}/{created['id']}").status_code == 404


def test_database_failure(client, repository):
    repository.count = AsyncMock(side_effect=RuntimeError("connection reset"))

    response = client.get(BASE_URL)

    assert response.status_code == 500
    assert response.json()["code"] == "DATABASE_OPERATION_ERROR"


def test_request_id_is_echoed(client):
    response = client.get(f"{BASE_URL}/nonexistent", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 404
    assert response.headers["X-Request-ID"] == "req-123"
