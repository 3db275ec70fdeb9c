# app/domain/services/cnpj_service.py

"""
Domain service for CNPJ (Brazilian company tax id) handling.

CNPJ numbers have 12 base digits followed by two check digits computed with
a weighted modulo-11 algorithm.
"""

import re
from typing import List, Sequence

CNPJ_LENGTH = 14

FIRST_DIGIT_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
SECOND_DIGIT_WEIGHTS = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)

NON_DIGITS = re.compile(r"\D")
REPEATED_DIGITS = re.compile(r"^(\d)\1+$")


def normalize_cnpj(raw: str) -> str:
    """
    Strip every non-digit character from a CNPJ.

    Args:
        raw: CNPJ, formatted ("11.222.333/0001-81") or not

    Returns:
        Digits only. Non-string input yields an empty string.
    """
    if not isinstance(raw, str):
        return ""
    return NON_DIGITS.sub("", raw)


def _check_digit(digits: Sequence[int], weights: Sequence[int]) -> int:
    total = sum(d * w for d, w in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cnpj(raw: str) -> bool:
    """
    Validate a CNPJ against its two check digits.

    Formatting characters are ignored. Sequences of a single repeated digit
    ("00000000000000", "11111111111111", ...) satisfy the arithmetic but are
    known-invalid and are rejected.

    Args:
        raw: CNPJ to validate

    Returns:
        True if the CNPJ is valid, False otherwise
    """
    if not raw or not isinstance(raw, str):
        return False

    cnpj = normalize_cnpj(raw)
    if len(cnpj) != CNPJ_LENGTH:
        return False

    if REPEATED_DIGITS.match(cnpj):
        return False

    digits: List[int] = [int(c) for c in cnpj]
    base = digits[:12]

    first = _check_digit(base, FIRST_DIGIT_WEIGHTS)
    second = _check_digit(base + [first], SECOND_DIGIT_WEIGHTS)

    return digits[12] == first and digits[13] == second


def format_cnpj(raw: str) -> str:
    """
    Render a CNPJ as NN.NNN.NNN/NNNN-NN.

    Values that do not have exactly 14 digits are returned unchanged.
    """
    cnpj = normalize_cnpj(raw)
    if len(cnpj) != CNPJ_LENGTH:
        return raw
    return f"{cnpj[:2]}.{cnpj[2:5]}.{cnpj[5:8]}/{cnpj[8:12]}-{cnpj[12:]}"
