"""Shared helpers for tests.

- create users directly with a given role (registration always yields VIEWER)
- log in through the API and build Authorization headers
- build valid company / shareholder payloads
"""

from __future__ import annotations

from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from shareregistry.auth.service import create_user
from shareregistry.config import Settings
from shareregistry.models.company import CompanyType
from shareregistry.models.role import RoleCode

PASSWORD = "secret123"
TEST_SECRET = "test-secret"


def make_settings(tmp_path, **overrides: Any) -> Settings:
    """Settings for an isolated app over a SQLite file in ``tmp_path``."""

    values = {
        "JWT_SECRET": TEST_SECRET,
        "DATABASE_URL": f"sqlite:///{tmp_path / 'test.sqlite'}",
    }
    values.update(overrides)
    return Settings(**values)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def login(client: TestClient, email: str, password: str = PASSWORD) -> str:
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def user_headers(client: TestClient, db: Session, email: str, role: RoleCode = RoleCode.ANALYST) -> dict[str, str]:
    """Create a user with ``role`` and return headers carrying their token."""

    create_user(db, email, PASSWORD, email.split("@")[0].title(), role)
    return bearer(login(client, email))


def company_type_id(db: Session, code: str = "SP_ZOO") -> int:
    return db.query(CompanyType).filter(CompanyType.code == code).one().id


def company_payload(type_id: int, **overrides: Any) -> dict[str, Any]:
    payload = {
        "name": "Acme",
        "nip": "1234567890",
        "krs": "0000123456",
        "founded_at": "2020-01-15",
        "company_type_id": type_id,
        "share_capital": 5000,
        "last_valuation": 250000,
        "is_restricted": False,
        "notes": "Internal note",
    }
    payload.update(overrides)
    return payload


def create_company(client: TestClient, headers: dict[str, str], type_id: int, **overrides: Any) -> dict[str, Any]:
    resp = client.post("/api/companies", json=company_payload(type_id, **overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["company"]


def create_shareholder(client: TestClient, headers: dict[str, str], **overrides: Any) -> dict[str, Any]:
    payload = {"name": "Jan", "last_name": "Kowalski", "identifier": "80010112345", "notes": None}
    payload.update(overrides)
    resp = client.post("/api/shareholders", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["shareholder"]


def create_shareholding(
    client: TestClient, headers: dict[str, str], company_id: int, shareholder_id: int, **overrides: Any
) -> dict[str, Any]:
    payload = {
        "company_id": company_id,
        "shareholder_id": shareholder_id,
        "shares_owned": 100,
        "acquired_at": "2021-06-01",
        "source": "Deed",
    }
    payload.update(overrides)
    resp = client.post("/api/shareholders/shareholdings", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["shareholding"]
