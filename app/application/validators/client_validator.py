# app/application/validators/client_validator.py

"""
Input validation for client payloads.

Every field is declared once in CLIENT_FIELDS with its normalizer and its
ordered rules. Validation of a field runs in this order:

1. presence (required / optional)
2. type
3. length bounds
4. domain checks (email format, CNPJ checksum, state membership)
5. uniqueness against persisted clients, only if 1-4 passed

Every failing rule of a field is reported, joined with ", ". Errors from
all fields are collected and raised together.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from app.application.dtos.client_dto import ClientCreate, ClientUpdate
from app.application.validators.uniqueness_checker import UniquenessChecker
from app.domain.exceptions import FieldError, InvalidInputException, ResourceAlreadyExistsException
from app.domain.services.cnpj_service import is_valid_cnpj, normalize_cnpj
from app.shared.utils.email_validation import normalize_email, validate_email
from app.shared.utils.input_validation import (
    MAX_STRING_INPUT_LENGTH,
    Rule,
    exact_length,
    from_tuple_check,
    is_blank,
    is_string,
    matches,
    max_length,
    one_of,
    run_rules,
    sanitize_string,
    satisfies,
)

BRAZILIAN_STATES = frozenset({
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA", "MT", "MS", "MG", "PA",
    "PB", "PR", "PE", "PI", "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
})

CEP_SEPARATORS = re.compile(r'[\s.\-]')
CEP_PATTERN = re.compile(r'^\d{8}$')

MESSAGE_SEPARATOR = ", "


def _normalize_cep(value: str) -> str:
    return CEP_SEPARATORS.sub('', value)


def _normalize_state(value: str) -> str:
    return sanitize_string(value).upper()


@dataclass(frozen=True)
class FieldSpec:
    """Declarative validation pipeline for a single client field."""
    name: str
    label: str
    required: bool
    normalizer: Callable[[str], str] = sanitize_string
    length_rules: Tuple[Rule, ...] = ()
    domain_rules: Tuple[Rule, ...] = ()
    unique: bool = False
    conflict_message: str = ""


def _text(name: str, label: str, required: bool = True, limit: int = MAX_STRING_INPUT_LENGTH) -> FieldSpec:
    return FieldSpec(name=name, label=label, required=required, length_rules=(max_length(label, limit),))


CLIENT_FIELDS: Tuple[FieldSpec, ...] = (
    _text("name", "Name"),
    FieldSpec(
        name="email",
        label="Email",
        required=False,
        normalizer=normalize_email,
        length_rules=(max_length("Email", 255),),
        domain_rules=(from_tuple_check(validate_email),),
        unique=True,
        conflict_message="This email is already registered",
    ),
    FieldSpec(
        name="phone",
        label="Phone",
        required=False,
        length_rules=(max_length("Phone", 15),),
        unique=True,
        conflict_message="This phone is already registered",
    ),
    FieldSpec(
        name="cnpj",
        label="CNPJ",
        required=True,
        normalizer=normalize_cnpj,
        length_rules=(exact_length("CNPJ", 14, "CNPJ must have exactly 14 digits"),),
        domain_rules=(satisfies(is_valid_cnpj, "CNPJ is invalid"),),
        unique=True,
        conflict_message="CNPJ is already registered",
    ),
    FieldSpec(
        name="cep",
        label="CEP",
        required=True,
        normalizer=_normalize_cep,
        length_rules=(exact_length("CEP", 8),),
        domain_rules=(matches(CEP_PATTERN, "CEP must contain only digits"),),
    ),
    _text("address", "Address"),
    _text("number", "Number", limit=10),
    _text("complement", "Complement", required=False),
    _text("neighborhood", "Neighborhood"),
    _text("city", "City"),
    FieldSpec(
        name="state",
        label="State",
        required=True,
        normalizer=_normalize_state,
        length_rules=(exact_length("State", 2, "State must be exactly 2 characters (e.g., SP, RJ)"),),
        domain_rules=(one_of(BRAZILIAN_STATES, "State must be a valid Brazilian federative unit"),),
    ),
    _text("sector", "Sector"),
)


class ClientInputValidator:
    """
    Validates raw client payloads and produces normalized DTOs.

    Raises InvalidInputException with every violation found, or
    ResourceAlreadyExistsException when uniqueness conflicts are the only
    problem.
    """

    def __init__(self, uniqueness_checker: UniquenessChecker, logger: Optional[logging.Logger] = None):
        self.uniqueness_checker = uniqueness_checker
        self.logger = logger or logging.getLogger(__name__)
        self.fields = CLIENT_FIELDS

    async def validate_create(self, payload: Mapping[str, Any]) -> ClientCreate:
        """
        Validate the payload of a new client.

        Args:
            payload: Raw input (e.g. a decoded JSON body)

        Returns:
            ClientCreate with normalized values
        """
        values = await self._validate(payload, partial=False, exclude_id=None)
        return ClientCreate(**values)

    async def validate_update(self, client_id: str, payload: Mapping[str, Any]) -> ClientUpdate:
        """
        Validate a partial update.

        Fields that are missing, None or blank are skipped: the stored value
        is kept and no uniqueness check runs for them.

        Args:
            client_id: ID of the client being updated, excluded from uniqueness checks
            payload: Raw input

        Returns:
            ClientUpdate holding only the supplied, normalized fields
        """
        values = await self._validate(payload, partial=True, exclude_id=client_id)
        return ClientUpdate(**values)

    async def _validate(self, payload: Mapping[str, Any], partial: bool,
                        exclude_id: Optional[str]) -> Dict[str, Any]:
        context = f"ClientInputValidator.{'validate_update' if partial else 'validate_create'}"

        if not isinstance(payload, Mapping):
            raise InvalidInputException(
                detail="Validation failed",
                errors=[FieldError("body", "Payload must be an object")],
            )

        errors: List[FieldError] = []
        values: Dict[str, Any] = {}
        pending_unique: List[FieldSpec] = []

        for spec in self.fields:
            raw = payload.get(spec.name)

            # 1. presence
            if is_blank(raw):
                if spec.required and not partial:
                    errors.append(FieldError(spec.name, f"{spec.label} is required"))
                continue

            # 2. type
            messages = run_rules(raw, (is_string(spec.label),))
            if messages:
                errors.append(FieldError(spec.name, MESSAGE_SEPARATOR.join(messages)))
                continue

            value = spec.normalizer(raw)

            # 3. length and 4. domain checks, all reported together
            messages = run_rules(value, spec.length_rules + spec.domain_rules)
            if messages:
                # Distinct messages only, in rule order
                errors.append(FieldError(spec.name, MESSAGE_SEPARATOR.join(dict.fromkeys(messages))))
                continue

            values[spec.name] = value
            if spec.unique:
                pending_unique.append(spec)

        # 5. uniqueness
        conflicts = await self._check_uniqueness(pending_unique, values, exclude_id)

        if errors or conflicts:
            self.logger.info(
                "Client payload rejected",
                extra={"context": context, "meta": {
                    "errors": [e.to_dict() for e in errors],
                    "conflicts": [c.field for c in conflicts],
                }},
            )
            if errors:
                raise InvalidInputException(detail="Validation failed", errors=errors + conflicts)
            raise ResourceAlreadyExistsException(detail="Client already registered", errors=conflicts)

        return values

    async def _check_uniqueness(self, specs: List[FieldSpec], values: Dict[str, Any],
                                exclude_id: Optional[str]) -> List[FieldError]:
        if not specs:
            return []

        results = await asyncio.gather(*(
            self.uniqueness_checker.exists_by_field(spec.name, values[spec.name], exclude_id)
            for spec in specs
        ))
        return [
            FieldError(spec.name, spec.conflict_message)
            for spec, exists in zip(specs, results)
            if exists
        ]
