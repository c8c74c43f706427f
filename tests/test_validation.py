"""
Tests for services/validation.py - payload validators and input coercion.
"""
import math

import pytest

from shareregistry.services.validation import (
    parse_bool,
    to_number,
    validate_company_data,
    validate_login_data,
    validate_registration_data,
    validate_shareholder_data,
    validate_shareholding_data,
)


VALID_COMPANY = {
    "name": "Acme",
    "nip": "1234567890",
    "company_type_id": 1,
    "share_capital": 5000,
}


class TestRegistration:
    def test_valid_payload(self):
        assert validate_registration_data({"email": "a@b.pl", "password": "secret1", "displayName": "A"}) == []

    def test_all_rules_accumulate(self):
        errors = validate_registration_data({})
        assert errors == [
            "Email is required.",
            "Password is required and must be at least 6 characters.",
            "Display name is required.",
        ]

    def test_short_password(self):
        errors = validate_registration_data({"email": "a@b.pl", "password": "12345", "displayName": "A"})
        assert errors == ["Password is required and must be at least 6 characters."]

    def test_whitespace_only_strings_are_empty(self):
        errors = validate_registration_data({"email": "   ", "password": "secret1", "displayName": " "})
        assert errors == ["Email is required.", "Display name is required."]


class TestLogin:
    def test_missing_fields(self):
        assert validate_login_data({}) == ["Email is required.", "Password is required."]

    def test_format_not_checked(self):
        assert validate_login_data({"email": "not-an-email", "password": "x"}) == []


class TestCompany:
    def test_valid_minimal_payload(self):
        assert validate_company_data(VALID_COMPANY) == []

    def test_one_error_per_violated_rule_in_declaration_order(self):
        errors = validate_company_data({"name": "", "nip": "abc", "company_type_id": 0, "share_capital": -1})
        assert errors == [
            "Company name is required.",
            "NIP must contain digits 0-9 only.",
            "company_type_id must be a positive integer.",
            "share_capital must be a positive number.",
        ]

    def test_missing_nip(self):
        errors = validate_company_data({**VALID_COMPANY, "nip": "  "})
        assert errors == ["NIP is required."]

    def test_numeric_nip_accepted(self):
        assert validate_company_data({**VALID_COMPANY, "nip": 1234567890}) == []

    @pytest.mark.parametrize("krs", [None, "", "0000123456"])
    def test_krs_optional(self, krs):
        assert validate_company_data({**VALID_COMPANY, "krs": krs}) == []

    def test_krs_digits_only(self):
        assert validate_company_data({**VALID_COMPANY, "krs": "KRS-1"}) == ["KRS must contain digits 0-9 only."]

    @pytest.mark.parametrize("founded_at", ["2020-1-1", "15.01.2020", "2020-01-15T00:00:00"])
    def test_founded_at_format(self, founded_at):
        errors = validate_company_data({**VALID_COMPANY, "founded_at": founded_at})
        assert errors == ["founded_at must be in YYYY-MM-DD format if provided."]

    def test_numeric_strings_coerce(self):
        payload = {**VALID_COMPANY, "company_type_id": "2", "share_capital": "1500.50", "last_valuation": "0"}
        assert validate_company_data(payload) == []

    @pytest.mark.parametrize("value", ["1.5", "abc", -3, None, 10**20, "1_000"])
    def test_company_type_id_must_be_positive_integer(self, value):
        errors = validate_company_data({**VALID_COMPANY, "company_type_id": value})
        assert errors == ["company_type_id must be a positive integer."]

    @pytest.mark.parametrize("value", [0, "nan", "inf", "Infinity", "1_000", "x"])
    def test_share_capital_must_be_positive_finite(self, value):
        errors = validate_company_data({**VALID_COMPANY, "share_capital": value})
        assert errors == ["share_capital must be a positive number."]

    def test_last_valuation_non_negative(self):
        errors = validate_company_data({**VALID_COMPANY, "last_valuation": -1})
        assert errors == ["last_valuation must be a non-negative number if provided."]

    def test_last_valuation_zero_allowed(self):
        assert validate_company_data({**VALID_COMPANY, "last_valuation": 0}) == []


class TestShareholder:
    def test_valid(self):
        assert validate_shareholder_data({"name": "Jan", "last_name": "Kowalski"}) == []

    def test_missing_names(self):
        assert validate_shareholder_data({"identifier": "123"}) == [
            "Shareholder name is required.",
            "Shareholder last name is required.",
        ]

    def test_identifier_digits_only(self):
        errors = validate_shareholder_data({"name": "Jan", "last_name": "K", "identifier": "AB123"})
        assert errors == ["Identifier must contain digits 0-9 only."]


class TestShareholding:
    def test_valid(self):
        payload = {"company_id": 1, "shareholder_id": "2", "shares_owned": 10, "acquired_at": "2021-06-01"}
        assert validate_shareholding_data(payload) == []

    def test_everything_wrong(self):
        payload = {"company_id": 0, "shareholder_id": "x", "shares_owned": 1.5, "acquired_at": "yesterday"}
        assert validate_shareholding_data(payload) == [
            "company_id must be a positive integer.",
            "shareholder_id must be a positive integer.",
            "shares_owned must be a positive integer.",
            "acquired_at must be in YYYY-MM-DD format if provided.",
        ]

    def test_empty_acquired_at_allowed(self):
        payload = {"company_id": 1, "shareholder_id": 2, "shares_owned": 10, "acquired_at": ""}
        assert validate_shareholding_data(payload) == []

    @pytest.mark.parametrize("value", [2**63, 10**20, "99999999999999999999"])
    def test_shares_owned_limited_to_integer_column(self, value):
        payload = {"company_id": 1, "shareholder_id": 2, "shares_owned": value}
        assert validate_shareholding_data(payload) == ["shares_owned must be a positive integer."]


class TestCoercion:
    @pytest.mark.parametrize("value", [True, 1, "1", "true", "TRUE"])
    def test_parse_bool_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", [False, 0, "0", "", "yes", None, 2])
    def test_parse_bool_false(self, value):
        assert parse_bool(value) is False

    def test_to_number(self):
        assert to_number("  42 ") == 42.0
        assert to_number("") == 0.0
        assert to_number("abc") is None
        assert to_number(None) is None
        assert to_number([1]) is None

    def test_to_number_follows_js_number_literals(self):
        assert to_number("1e3") == 1000.0
        assert to_number(".5") == 0.5
        assert to_number("0x10") == 16.0
        assert to_number("Infinity") == math.inf
        assert to_number("1_000") is None
        assert to_number("infinity") is None
        assert to_number("1,5") is None
        assert to_number(10**400) == math.inf

    def test_validators_never_raise_on_odd_types(self):
        odd = {"name": 5, "nip": ["1"], "krs": {"a": 1}, "founded_at": 20200101,
               "company_type_id": object(), "share_capital": {}, "last_valuation": []}
        errors = validate_company_data(odd)
        assert len(errors) == 7
