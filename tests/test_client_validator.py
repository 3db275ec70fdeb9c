# tests/test_client_validator.py
import pytest
from unittest.mock import AsyncMock, MagicMock

from app.application.validators.client_validator import ClientInputValidator
from app.application.validators.uniqueness_checker import UniquenessChecker
from app.domain.exceptions import InvalidInputException, ResourceAlreadyExistsException
from tests.factories import VALID_CNPJ, make_payload


@pytest.fixture
def mock_checker():
    checker = MagicMock(spec=UniquenessChecker)
    checker.exists_by_field = AsyncMock(return_value=False)
    return checker


@pytest.fixture
def validator(mock_checker):
    return ClientInputValidator(mock_checker)


@pytest.mark.asyncio
async def test_valid_payload_is_normalized(validator):
    data = await validator.validate_create(make_payload(
        name="  Acme   Industria  ",
        email="  Contato@ACME.com.br ",
    ))

    assert data.name == "Acme Industria"
    assert data.email == "contato@acme.com.br"
    assert data.cnpj == VALID_CNPJ
    assert data.cep == "01310100"
    assert data.state == "SP"


@pytest.mark.asyncio
async def test_unknown_keys_are_dropped(validator):
    data = await validator.validate_create(make_payload(id="forged", deleted_at="2020-01-01"))

    assert "id" not in data.to_dict()
    assert "deleted_at" not in data.to_dict()


@pytest.mark.asyncio
async def test_errors_are_collected_across_fields(validator, mock_checker):
    with pytest.raises(InvalidInputException) as exc_info:
        await validator.validate_create(make_payload(
            name="",
            email="not-an-email",
            cnpj="11222333000182",
            state="XX",
            number="1" * 11,
        ))

    fields = exc_info.value.fields
    assert fields["name"] == "Name is required"
    assert fields["email"] == "Email must be a valid email"
    assert fields["cnpj"] == "CNPJ is invalid"
    assert fields["state"] == "State must be a valid Brazilian federative unit"
    assert fields["number"] == "Number must not exceed 10 characters"
    assert exc_info.value.internal_code == "INVALID_INPUT"
    # Only the phone passed every rule
    mock_checker.exists_by_field.assert_awaited_once_with("phone", "11999990000", None)


@pytest.mark.asyncio
async def test_missing_required_fields(validator):
    with pytest.raises(InvalidInputException) as exc_info:
        await validator.validate_create({})

    assert set(exc_info.value.fields) == {
        "name", "cnpj", "cep", "address", "number", "neighborhood", "city", "state", "sector",
    }


@pytest.mark.asyncio
async def test_every_failing_rule_of_a_field_is_reported(validator, mock_checker):
    with pytest.raises(InvalidInputException) as exc_info:
        await validator.validate_create(make_payload(cnpj="1122", state="Z", email="x" * 300))

    fields = exc_info.value.fields
    assert fields["cnpj"] == "CNPJ must have exactly 14 digits, CNPJ is invalid"
    assert fields["state"] == (
        "State must be exactly 2 characters (e.g., SP, RJ), "
        "State must be a valid Brazilian federative unit"
    )
    # Length and format checks share the same message
    assert fields["email"] == "Email must not exceed 255 characters"
    mock_checker.exists_by_field.assert_awaited_once_with("phone", "11999990000", None)


@pytest.mark.asyncio
async def test_wrong_type(validator):
    with pytest.raises(InvalidInputException) as exc_info:
        await validator.validate_create(make_payload(number=1000))

    assert exc_info.value.fields == {"number": "Number must be a string"}


@pytest.mark.asyncio
async def test_payload_must_be_an_object(validator):
    with pytest.raises(InvalidInputException) as exc_info:
        await validator.validate_create(["not", "an", "object"])

    assert "body" in exc_info.value.fields


@pytest.mark.asyncio
async def test_conflicts_only(validator, mock_checker):
    mock_checker.exists_by_field.side_effect = lambda field, value, exclude_id: field in ("email", "cnpj")

    with pytest.raises(ResourceAlreadyExistsException) as exc_info:
        await validator.validate_create(make_payload())

    assert exc_info.value.fields == {
        "email": "This email is already registered",
        "cnpj": "CNPJ is already registered",
    }
    assert exc_info.value.internal_code == "RESOURCE_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_conflicts_are_reported_with_other_errors(validator, mock_checker):
    mock_checker.exists_by_field.side_effect = lambda field, value, exclude_id: field == "email"

    with pytest.raises(InvalidInputException) as exc_info:
        await validator.validate_create(make_payload(city=""))

    assert not isinstance(exc_info.value, ResourceAlreadyExistsException)
    assert exc_info.value.fields == {
        "city": "City is required",
        "email": "This email is already registered",
    }


@pytest.mark.asyncio
async def test_update_skips_missing_and_blank_fields(validator, mock_checker):
    data = await validator.validate_update("client-1", {"city": "  Campinas ", "email": "", "phone": None})

    assert data.to_dict() == {"city": "Campinas"}
    mock_checker.exists_by_field.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_excludes_the_client_itself(validator, mock_checker):
    await validator.validate_update("client-1", {"email": "new@acme.com.br"})

    mock_checker.exists_by_field.assert_awaited_once_with("email", "new@acme.com.br", "client-1")
