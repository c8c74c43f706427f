
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
from shareregistry.auth.deps import get_db, get_optional_user, require_role
from shareregistry.companies import service
from shareregistry.models.role import RoleCode
from shareregistry.schemas.auth import AuthUser
from shareregistry.utils.params import parse_pagination

router = APIRouter(prefix="/companies", tags=["companies"])

analyst_only = require_role(RoleCode.ANALYST)

@router.get("")
@router.get("/", include_in_schema=False)
def list_companies(
    page: str | None = None,
    limit: str | None = None,
    db: Session = Depends(get_db),
    user: AuthUser | None = Depends(get_optional_user),
):
    page_value, limit_value = parse_pagination(page, limit)
    return service.list_companies(db, user, page_value, limit_value)

@router.get("/types")
def list_company_types(db: Session = Depends(get_db), user: AuthUser | None = Depends(get_optional_user)):
    return service.list_company_types(db)

@router.get("/{company_id}")
def get_company(company_id: str, db: Session = Depends(get_db), user: AuthUser | None = Depends(get_optional_user)):
    return service.get_company(db, user, company_id)

# Mutations: the role is checked here, ownership inside the service
@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_company(
    body: dict[str, Any] = Body(default_factory=dict),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(analyst_only),
):
    return service.create_company(db, user, body)

@router.put("/{company_id}")
def update_company(
    company_id: str,
    body: dict[str, Any] = Body(default_factory=dict),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(analyst_only),
):
    return service.update_company(db, user, company_id, body)

@router.delete("/{company_id}")
def delete_company(company_id: str, db: Session = Depends(get_db), user: AuthUser = Depends(analyst_only)):
    return service.delete_company(db, user, company_id)
