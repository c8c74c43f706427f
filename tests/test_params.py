import math

import pytest

from shareregistry.errors import BadRequestError, NotFoundError
from shareregistry.utils.params import page_payload, parse_id, parse_pagination


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 10)),
        ("3", "25", (3, 25)),
        ("0", "0", (1, 10)),
        ("-4", "-5", (1, 1)),
        ("abc", "xyz", (1, 10)),
        ("2abc", "500", (2, 100)),
        (" 7", "100", (7, 100)),
    ],
)
def test_parse_pagination(page, limit, expected):
    assert parse_pagination(page, limit) == expected


@pytest.mark.parametrize("total, limit", [(0, 10), (1, 10), (10, 10), (11, 10), (250, 100), (7, 1)])
def test_total_pages(total, limit):
    payload = page_payload([], 1, limit, total)
    assert payload["totalPages"] == max(1, math.ceil(total / limit))
    assert payload["totalItems"] == total
    assert set(payload) == {"items", "page", "limit", "totalItems", "totalPages"}


@pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (" 7 ", 7), ("3.0", 3)])
def test_parse_id_valid(raw, expected):
    assert parse_id(raw, "company") == expected


@pytest.mark.parametrize("raw", ["0", "-1", "1.5", "abc", "", "nan", "inf", "Infinity", "1_0"])
def test_parse_id_invalid(raw):
    with pytest.raises(BadRequestError) as exc_info:
        parse_id(raw, "company")
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Invalid company id."


@pytest.mark.parametrize("raw", ["99999999999999999999", "9223372036854775808", "1e30"])
def test_parse_id_past_integer_column_is_not_found(raw):
    with pytest.raises(NotFoundError) as exc_info:
        parse_id(raw, "shareholder")
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Shareholder not found."
