
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
from shareregistry.auth.deps import get_db, get_settings, get_current_user
from shareregistry.auth.service import register_user, login_user
from shareregistry.config import Settings
from shareregistry.schemas.auth import AuthUser, TokenOut

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
def register(
    body: dict[str, Any] = Body(default_factory=dict),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return register_user(db, settings, body)

@router.post("/login", response_model=TokenOut)
def login(
    body: dict[str, Any] = Body(default_factory=dict),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return login_user(db, settings, body)

@router.get("/me")
def me(user: AuthUser = Depends(get_current_user)):
    return {"user": user.public()}
