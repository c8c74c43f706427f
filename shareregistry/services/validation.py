"""
Payload validators.

Each validator takes the raw request body (a dict) and returns a list of
human-readable error messages, empty when the payload is valid. Validators
never raise and never touch the database; every violated rule adds one
message, in the order the rules are declared.
"""
import math
import re
from typing import Any

DIGITS_RE = re.compile(r"[0-9]+")
NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?Infinity")
RADIX_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

TRUE_VALUES = {"1", "true"}

# largest value a 64-bit INTEGER column holds
MAX_DB_INT = 2**63 - 1


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def is_digits(value: Any) -> bool:
    return DIGITS_RE.fullmatch(str(value).strip()) is not None


def is_optional_date_string(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, str) and ISO_DATE_RE.fullmatch(value) is not None


def _int_to_float(value: int | float) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def to_number(value: Any) -> float | None:
    """Loose numeric coercion: numbers and numeric strings; blank strings count as 0."""
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return _int_to_float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if RADIX_RE.fullmatch(text):
            return _int_to_float(int(text, 0))
        if NUMBER_RE.fullmatch(text):
            return float(text)
    return None


def is_finite_number(value: Any) -> bool:
    number = to_number(value)
    return number is not None and math.isfinite(number)


def is_positive_integer(value: Any) -> bool:
    number = to_number(value)
    return number is not None and math.isfinite(number) and number.is_integer() and 0 < number <= MAX_DB_INT


def parse_bool(value: Any) -> bool:
    """The one place request flags are turned into booleans."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return False


def validate_registration_data(body: dict) -> list[str]:
    errors = []

    if not is_non_empty_string(body.get("email")):
        errors.append("Email is required.")

    password = body.get("password")
    if not is_non_empty_string(password) or len(password) < 6:
        errors.append("Password is required and must be at least 6 characters.")

    if not is_non_empty_string(body.get("displayName")):
        errors.append("Display name is required.")

    return errors


def validate_login_data(body: dict) -> list[str]:
    errors = []

    if not is_non_empty_string(body.get("email")):
        errors.append("Email is required.")
    if not is_non_empty_string(body.get("password")):
        errors.append("Password is required.")

    return errors


def validate_company_data(body: dict) -> list[str]:
    """
    Expected fields: name, nip, krs?, founded_at?, company_type_id,
    share_capital, last_valuation?
    """
    errors = []

    if not is_non_empty_string(body.get("name")):
        errors.append("Company name is required.")

    nip = body.get("nip")
    if not nip or not str(nip).strip():
        errors.append("NIP is required.")
    elif not is_digits(nip):
        errors.append("NIP must contain digits 0-9 only.")

    krs = body.get("krs")
    if krs and not is_digits(krs):
        errors.append("KRS must contain digits 0-9 only.")

    if not is_optional_date_string(body.get("founded_at")):
        errors.append("founded_at must be in YYYY-MM-DD format if provided.")

    if not is_positive_integer(body.get("company_type_id")):
        errors.append("company_type_id must be a positive integer.")

    share_capital = to_number(body.get("share_capital"))
    if share_capital is None or not math.isfinite(share_capital) or share_capital <= 0:
        errors.append("share_capital must be a positive number.")

    if body.get("last_valuation") is not None:
        last_valuation = to_number(body["last_valuation"])
        if last_valuation is None or not math.isfinite(last_valuation) or last_valuation < 0:
            errors.append("last_valuation must be a non-negative number if provided.")

    return errors


def validate_shareholder_data(body: dict) -> list[str]:
    errors = []

    if not is_non_empty_string(body.get("name")):
        errors.append("Shareholder name is required.")

    if not is_non_empty_string(body.get("last_name")):
        errors.append("Shareholder last name is required.")

    identifier = body.get("identifier")
    if identifier and not is_digits(identifier):
        errors.append("Identifier must contain digits 0-9 only.")

    return errors


def validate_shareholding_data(body: dict) -> list[str]:
    """
    Expected fields: company_id, shareholder_id, shares_owned, acquired_at?,
    source?
    """
    errors = []

    if not is_positive_integer(body.get("company_id")):
        errors.append("company_id must be a positive integer.")

    if not is_positive_integer(body.get("shareholder_id")):
        errors.append("shareholder_id must be a positive integer.")

    if not is_positive_integer(body.get("shares_owned")):
        errors.append("shares_owned must be a positive integer.")

    if not is_optional_date_string(body.get("acquired_at")):
        errors.append("acquired_at must be in YYYY-MM-DD format if provided.")

    return errors
