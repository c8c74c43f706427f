import logging

from fastapi import Request, Depends
from jose import JWTError
from pydantic import ValidationError as ClaimsError
from sqlalchemy.orm import Session

from shareregistry.config import Settings
from shareregistry.errors import AuthenticationError, AuthorizationError
from shareregistry.models.role import RoleCode
from shareregistry.schemas.auth import AuthUser
from shareregistry.utils.security import decode_token

logger = logging.getLogger(__name__)

AUTH_HEADER_PREFIX = "Bearer "


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def _get_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith(AUTH_HEADER_PREFIX):
        return auth[len(AUTH_HEADER_PREFIX):].strip() or None
    return None


def get_optional_user(request: Request, settings: Settings = Depends(get_settings)) -> AuthUser | None:
    """Identity from a valid bearer token; anonymous (None) otherwise."""
    token = _get_token(request)
    if not token:
        return None

    try:
        payload = decode_token(token, settings.secret_key)
        return AuthUser.model_validate(payload)
    except (JWTError, ClaimsError) as exc:
        logger.warning("Invalid or expired token: %s", exc)
        return None


def get_current_user(user: AuthUser | None = Depends(get_optional_user)) -> AuthUser:
    if user is None:
        raise AuthenticationError("Authentication required.")
    return user


def require_role(*allowed: RoleCode):
    def _check(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if user.role not in allowed:
            raise AuthorizationError("Insufficient permissions.")
        return user
    return _check
