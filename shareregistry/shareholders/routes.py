
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
from shareregistry.auth.deps import get_db, get_optional_user, require_role
from shareregistry.models.role import RoleCode
from shareregistry.schemas.auth import AuthUser
from shareregistry.shareholders import service
from shareregistry.utils.params import parse_pagination

router = APIRouter(prefix="/shareholders", tags=["shareholders"])

analyst_only = require_role(RoleCode.ANALYST)

@router.get("")
@router.get("/", include_in_schema=False)
def list_shareholders(page: str | None = None, limit: str | None = None, db: Session = Depends(get_db)):
    page_value, limit_value = parse_pagination(page, limit)
    return service.list_shareholders(db, page_value, limit_value)

# ----- Shareholdings (edit rights follow the company) -----
@router.post("/shareholdings", status_code=status.HTTP_201_CREATED)
def create_shareholding(
    body: dict[str, Any] = Body(default_factory=dict),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(analyst_only),
):
    return service.create_shareholding(db, user, body)

@router.put("/shareholdings/{shareholding_id}")
def update_shareholding(
    shareholding_id: str,
    body: dict[str, Any] = Body(default_factory=dict),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(analyst_only),
):
    return service.update_shareholding(db, user, shareholding_id, body)

@router.delete("/shareholdings/{shareholding_id}")
def delete_shareholding(shareholding_id: str, db: Session = Depends(get_db), user: AuthUser = Depends(analyst_only)):
    return service.delete_shareholding(db, user, shareholding_id)

# ----- Shareholders -----
@router.get("/{shareholder_id}")
def get_shareholder(
    shareholder_id: str,
    db: Session = Depends(get_db),
    user: AuthUser | None = Depends(get_optional_user),
):
    return service.get_shareholder(db, user, shareholder_id)

@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_shareholder(
    body: dict[str, Any] = Body(default_factory=dict),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(analyst_only),
):
    return service.create_shareholder(db, user, body)

@router.put("/{shareholder_id}")
def update_shareholder(
    shareholder_id: str,
    body: dict[str, Any] = Body(default_factory=dict),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(analyst_only),
):
    return service.update_shareholder(db, user, shareholder_id, body)

@router.delete("/{shareholder_id}")
def delete_shareholder(shareholder_id: str, db: Session = Depends(get_db), user: AuthUser = Depends(analyst_only)):
    return service.delete_shareholder(db, user, shareholder_id)
