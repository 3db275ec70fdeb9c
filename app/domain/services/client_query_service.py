# app/domain/services/client_query_service.py

"""
Query building for client listings.

Converts pagination, sort, filter and free-text search parameters into a
single ClientQuery descriptor. Field names are checked against fixed
whitelists so a caller can never reference an arbitrary column.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from app.domain.exceptions import FieldError, InvalidInputException
from app.domain.services.cnpj_service import normalize_cnpj
from app.shared.utils.email_validation import normalize_email

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
DEFAULT_SORT = "created_at"
DEFAULT_ORDER = "asc"

ORDER_DIRECTIONS = ("asc", "desc")

SEARCHABLE_FIELDS: Tuple[str, ...] = (
    "name",
    "email",
    "cnpj",
    "phone",
    "sector",
    "cep",
    "address",
    "number",
    "neighborhood",
    "city",
    "state",
    "complement",
)

SORTABLE_FIELDS: Tuple[str, ...] = SEARCHABLE_FIELDS + ("created_at", "updated_at")

FILTERABLE_FIELDS: Tuple[str, ...] = ("name", "email", "phone", "cnpj", "sector", "cep", "address")

# camelCase names accepted from query strings
SORT_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


@dataclass(frozen=True)
class ClientPredicate:
    """
    Filter over the clients collection.

    Exactly one of the following applies:
    - 'equals' is non-empty: every field must match its value exactly (AND);
    - 'search' is set: the term must appear, case-insensitively, in at least
      one of 'search_fields' (OR);
    - neither: every record matches.
    """
    equals: Dict[str, str] = field(default_factory=dict)
    search: Optional[str] = None
    search_fields: Tuple[str, ...] = ()

    @property
    def matches_all(self) -> bool:
        return not self.equals and not self.search

    def matches(self, record: Any) -> bool:
        """Evaluate the predicate against an object exposing client attributes."""
        if self.equals:
            return all(getattr(record, name, None) == value for name, value in self.equals.items())

        if self.search:
            term = self.search.lower()
            for name in self.search_fields:
                value = getattr(record, name, None)
                if value is not None and term in str(value).lower():
                    return True
            return False

        return True


@dataclass(frozen=True)
class OrderBy:
    field: str = DEFAULT_SORT
    direction: str = DEFAULT_ORDER

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


@dataclass(frozen=True)
class ClientQuery:
    predicate: ClientPredicate
    order_by: OrderBy
    offset: int
    limit: int
    page: int


def _normalize_filter(where: Mapping[str, Any]) -> Dict[str, str]:
    errors: List[FieldError] = []
    equals: Dict[str, str] = {}

    for name, value in where.items():
        if name not in FILTERABLE_FIELDS:
            errors.append(FieldError(
                f"where.{name}",
                f"Filter must be one of: {', '.join(FILTERABLE_FIELDS)}"
            ))
            continue
        if value is None:
            continue

        text = str(value).strip()
        if name == "cnpj":
            text = normalize_cnpj(text)
        elif name == "email":
            text = normalize_email(text)
        equals[name] = text

    if errors:
        raise InvalidInputException(detail="Invalid filter", errors=errors)
    return equals


def build_client_query(
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        order_by: Optional[str] = None,
        where: Optional[Mapping[str, Any]] = None,
        search: Optional[str] = None,
) -> ClientQuery:
    """
    Build the query descriptor for a client listing.

    A non-empty 'where' takes precedence over 'search'.

    Args:
        page: Page number, starting at 1
        limit: Page size
        sort: Field to sort by
        order_by: "asc" or "desc"
        where: Exact-match filters
        search: Free-text term

    Returns:
        ClientQuery with predicate, ordering, offset and limit

    Raises:
        InvalidInputException: If any parameter is out of range or unknown
    """
    page = DEFAULT_PAGE if page is None else page
    limit = DEFAULT_LIMIT if limit is None else limit
    sort = SORT_ALIASES.get(sort, sort) if sort else DEFAULT_SORT
    order_by = order_by.lower() if order_by else DEFAULT_ORDER

    errors: List[FieldError] = []
    if page < 1:
        errors.append(FieldError("page", "Page must be greater than or equal to 1"))
    if limit < 1 or limit > MAX_LIMIT:
        errors.append(FieldError("limit", f"Limit must be between 1 and {MAX_LIMIT}"))
    if sort not in SORTABLE_FIELDS:
        errors.append(FieldError("sort", f"Sort must be one of: {', '.join(SORTABLE_FIELDS)}"))
    if order_by not in ORDER_DIRECTIONS:
        errors.append(FieldError("order_by", "OrderBy must be 'asc' or 'desc'"))
    if errors:
        raise InvalidInputException(detail="Invalid listing options", errors=errors)

    equals = _normalize_filter(where) if where else {}
    term = search.strip() if search else ""

    if equals:
        predicate = ClientPredicate(equals=equals)
    elif term:
        predicate = ClientPredicate(search=term, search_fields=SEARCHABLE_FIELDS)
    else:
        predicate = ClientPredicate()

    return ClientQuery(
        predicate=predicate,
        order_by=OrderBy(field=sort, direction=order_by),
        offset=(page - 1) * limit,
        limit=limit,
        page=page,
    )
