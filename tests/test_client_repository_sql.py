# tests/test_client_repository_sql.py
import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy import select
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError

from app.adapters.outbound.persistence.models import Client
from app.adapters.outbound.persistence.repositories.base_repository import extract_constraint_name
from app.adapters.outbound.persistence.repositories.client_repository import AsyncClientRepository, escape_like
from app.domain.exceptions import DatabaseOperationException, ResourceAlreadyExistsException
from app.domain.services.client_query_service import ClientPredicate, OrderBy, build_client_query


@pytest.fixture
def session():
    """Create a mock AsyncSession"""
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def repository(session):
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    return AsyncClientRepository(factory)


def compile_where(repository, predicate):
    statement = select(Client).where(*repository.active_clauses(), *repository.filter_clauses(predicate))
    return statement.compile(dialect=postgresql.dialect())


def test_match_all_only_filters_deleted(repository):
    compiled = compile_where(repository, ClientPredicate())

    assert "clients.deleted_at IS NULL" in str(compiled)
    assert compiled.params == {}


def test_equals_predicate_uses_bound_parameters(repository):
    query = build_client_query(where={"sector": "Retail", "cnpj": "11.222.333/0001-81"})
    compiled = compile_where(repository, query.predicate)

    sql = str(compiled)
    assert "clients.sector = " in sql
    assert "clients.cnpj = " in sql
    assert "Retail" not in sql
    assert set(compiled.params.values()) == {"Retail", "11222333000181"}


def test_search_predicate_is_an_or_of_ilike(repository):
    query = build_client_query(search="50%_off")
    compiled = compile_where(repository, query.predicate)

    sql = str(compiled)
    assert "ILIKE" in sql
    assert " OR " in sql
    assert "50%_off" not in sql
    assert "%50\\%\\_off%" in compiled.params.values()


def test_order_clauses_add_id_tie_breaker(repository):
    statement = select(Client).order_by(*repository.order_clauses(OrderBy("name", "desc")))

    assert "ORDER BY clients.name DESC, clients.id ASC" in str(statement.compile(dialect=postgresql.dialect()))


def test_escape_like():
    assert escape_like("a%b_c\\d") == "a\\%b\\_c\\\\d"


@pytest.mark.parametrize("message,expected", [
    ('duplicate key value violates unique constraint "uq_clients_email"', "uq_clients_email"),
    ("UNIQUE constraint failed: clients.cnpj", "clients.cnpj"),
    ("something else", None),
])
def test_extract_constraint_name(message, expected):
    assert extract_constraint_name(message) == expected


@pytest.mark.asyncio
async def test_unique_violation_is_mapped_to_field_errors(repository, session):
    session.commit.side_effect = IntegrityError(
        "INSERT INTO clients", {},
        Exception('duplicate key value violates unique constraint "uq_clients_cnpj"'),
    )

    with pytest.raises(ResourceAlreadyExistsException) as exc_info:
        await repository.create({"name": "Acme", "cnpj": "11222333000181"})

    assert exc_info.value.fields == {"cnpj": "CNPJ is already registered"}
    session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_database_error_is_wrapped(repository, session):
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

    with pytest.raises(DatabaseOperationException):
        await repository.find_by_email("a@b.com")


@pytest.mark.asyncio
async def test_missing_row_returns_none(repository, session):
    result = MagicMock()
    result.scalars.return_value.first.return_value = None
    session.execute.return_value = result

    assert await repository.find_by_id("nonexistent") is None
    assert await repository.update("nonexistent", {"name": "Acme"}) is None
