# tests/test_cnpj_service.py
import pytest

from app.domain.services.cnpj_service import format_cnpj, is_valid_cnpj, normalize_cnpj
from tests.factories import OTHER_VALID_CNPJ, VALID_CNPJ, make_cnpj


def test_valid_cnpj():
    assert is_valid_cnpj(VALID_CNPJ) is True
    assert is_valid_cnpj(OTHER_VALID_CNPJ) is True


def test_formatted_cnpj_is_valid():
    assert is_valid_cnpj("11.222.333/0001-81") is True


@pytest.mark.parametrize("digit", "0123456789")
def test_repeated_digits_are_invalid(digit):
    assert is_valid_cnpj(digit * 14) is False


def test_wrong_first_check_digit():
    assert is_valid_cnpj("11222333000191") is False


def test_wrong_second_check_digit():
    assert is_valid_cnpj("11222333000182") is False


@pytest.mark.parametrize("value", ["", None, "1122233300018", "112223330001811", 11222333000181])
def test_wrong_length_or_type(value):
    assert is_valid_cnpj(value) is False


def test_generated_cnpjs_are_valid():
    assert all(is_valid_cnpj(make_cnpj(n)) for n in range(25))


def test_normalize_cnpj():
    assert normalize_cnpj(" 11.222.333/0001-81 ") == VALID_CNPJ
    assert normalize_cnpj(None) == ""


def test_format_cnpj():
    assert format_cnpj(VALID_CNPJ) == "11.222.333/0001-81"
    assert format_cnpj("123") == "123"
