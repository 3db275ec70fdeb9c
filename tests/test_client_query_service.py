# tests/test_client_query_service.py
import pytest
from types import SimpleNamespace

from app.domain.exceptions import InvalidInputException
from app.domain.services.client_query_service import (
    DEFAULT_LIMIT,
    SEARCHABLE_FIELDS,
    ClientPredicate,
    build_client_query,
)


def test_defaults():
    query = build_client_query()

    assert query.page == 1
    assert query.limit == DEFAULT_LIMIT
    assert query.offset == 0
    assert query.order_by.field == "created_at"
    assert query.order_by.direction == "asc"
    assert query.predicate.matches_all


def test_offset_from_page_and_limit():
    query = build_client_query(page=3, limit=20)

    assert query.offset == 40
    assert query.limit == 20


def test_sort_alias_and_direction():
    query = build_client_query(sort="updatedAt", order_by="DESC")

    assert query.order_by.field == "updated_at"
    assert query.order_by.descending


def test_where_takes_precedence_over_search():
    query = build_client_query(where={"sector": "Retail"}, search="acme")

    assert query.predicate.equals == {"sector": "Retail"}
    assert query.predicate.search is None


def test_empty_where_falls_back_to_search():
    query = build_client_query(where={}, search="  acme ")

    assert query.predicate.search == "acme"
    assert query.predicate.search_fields == SEARCHABLE_FIELDS


def test_blank_search_matches_all():
    assert build_client_query(search="   ").predicate.matches_all


def test_filter_values_are_normalized():
    query = build_client_query(where={"cnpj": "11.222.333/0001-81", "email": " A@B.COM "})

    assert query.predicate.equals == {"cnpj": "11222333000181", "email": "a@b.com"}


def test_unknown_filter_field():
    with pytest.raises(InvalidInputException) as exc_info:
        build_client_query(where={"deleted_at": "2020-01-01"})

    assert "where.deleted_at" in exc_info.value.fields


def test_invalid_options_are_reported_together():
    with pytest.raises(InvalidInputException) as exc_info:
        build_client_query(page=0, limit=101, sort="password", order_by="up")

    assert set(exc_info.value.fields) == {"page", "limit", "sort", "order_by"}


def test_search_is_case_insensitive():
    predicate = ClientPredicate(search="joão", search_fields=("name",))

    assert predicate.matches(SimpleNamespace(name="João Comércio Ltda"))
    assert not predicate.matches(SimpleNamespace(name="Maria Ltda"))


def test_search_skips_missing_values():
    predicate = ClientPredicate(search="acme", search_fields=("email", "name"))

    assert predicate.matches(SimpleNamespace(email=None, name="ACME"))


def test_equals_requires_every_field():
    predicate = ClientPredicate(equals={"sector": "Retail", "cep": "01310100"})

    assert predicate.matches(SimpleNamespace(sector="Retail", cep="01310100"))
    assert not predicate.matches(SimpleNamespace(sector="Retail", cep="00000000"))
