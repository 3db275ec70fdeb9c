# tests/test_uniqueness_checker.py
import pytest
from unittest.mock import AsyncMock, MagicMock

from app.application.ports.outbound import IClientRepository
from app.application.validators.uniqueness_checker import UniquenessChecker


@pytest.fixture
def mock_repository():
    """Create a mock client repository"""
    repository = MagicMock(spec=IClientRepository)
    repository.find_by_email = AsyncMock(return_value=None)
    repository.find_by_phone = AsyncMock(return_value=None)
    repository.find_by_cnpj = AsyncMock(return_value=None)
    return repository


@pytest.fixture
def checker(mock_repository):
    return UniquenessChecker(mock_repository)


@pytest.mark.asyncio
async def test_value_not_registered(checker, mock_repository):
    assert await checker.exists_by_field("email", "a@b.com") is False
    mock_repository.find_by_email.assert_awaited_once_with("a@b.com")


@pytest.mark.asyncio
async def test_value_registered_by_another_client(checker, mock_repository):
    mock_repository.find_by_cnpj.return_value = MagicMock(id="other")

    assert await checker.exists_by_field("cnpj", "11222333000181", exclude_id="me") is True


@pytest.mark.asyncio
async def test_value_registered_by_the_same_client(checker, mock_repository):
    mock_repository.find_by_phone.return_value = MagicMock(id="me")

    assert await checker.exists_by_field("phone", "11999990000", exclude_id="me") is False


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [None, "", "   "])
async def test_blank_value_skips_lookup(checker, mock_repository, value):
    assert await checker.exists_by_field("email", value) is False
    mock_repository.find_by_email.assert_not_awaited()


@pytest.mark.asyncio
async def test_repository_failure_is_treated_as_unique(checker, mock_repository, caplog):
    mock_repository.find_by_email.side_effect = ConnectionError("database down")

    assert await checker.exists_by_field("email", "a@b.com") is False
    assert "database down" in caplog.text


@pytest.mark.asyncio
async def test_unsupported_field(checker):
    with pytest.raises(ValueError):
        await checker.exists_by_field("name", "Acme")
