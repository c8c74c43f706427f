import math
import re

from shareregistry.errors import BadRequestError, NotFoundError
from shareregistry.services.validation import MAX_DB_INT, to_number

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def _parse_leading_int(raw: str | None) -> int | None:
    # "12abc" -> 12, "abc" -> None
    if raw is None:
        return None
    m = _LEADING_INT_RE.match(raw)
    return int(m.group(1)) if m else None


def parse_pagination(page: str | None, limit: str | None) -> tuple[int, int]:
    page_value = max(_parse_leading_int(page) or DEFAULT_PAGE, 1)
    limit_value = min(max(_parse_leading_int(limit) or DEFAULT_LIMIT, 1), MAX_LIMIT)
    return page_value, limit_value


def page_payload(items: list, page: int, limit: int, total_items: int) -> dict:
    return {
        "items": items,
        "page": page,
        "limit": limit,
        "totalItems": total_items,
        "totalPages": max(1, math.ceil(total_items / limit)),
    }


def parse_id(raw: str, entity: str) -> int:
    """Path ids must be positive integers; anything else is a 400.

    Ids past the INTEGER column range cannot name a row, so they are a 404.
    """
    number = to_number(raw) if isinstance(raw, str) else None
    if number is None or not math.isfinite(number) or not number.is_integer() or number <= 0:
        raise BadRequestError(f"Invalid {entity} id.")
    if number > MAX_DB_INT:
        raise NotFoundError(f"{entity.capitalize()} not found.")
    return int(number)
