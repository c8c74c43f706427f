import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from shareregistry.config import Settings
from shareregistry.errors import AuthenticationError, ConflictError, InternalError, ValidationError
from shareregistry.models.role import Role, RoleCode
from shareregistry.models.user import User
from shareregistry.schemas.auth import AuthUser
from shareregistry.services.validation import validate_login_data, validate_registration_data
from shareregistry.utils.security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)

DEFAULT_ROLE = RoleCode.VIEWER

def to_auth_user(user: User) -> AuthUser:
    return AuthUser(id=user.id, email=user.email, display_name=user.display_name, role=user.role_code)

def issue_token(settings: Settings, user: AuthUser) -> str:
    return create_access_token(user, settings.secret_key, settings.access_token_expire_minutes)

def create_user(db: Session, email: str, password: str, display_name: str, role_code: RoleCode = DEFAULT_ROLE) -> User:
    role = db.query(Role).filter(Role.code == role_code).first()
    if role is None:
        raise InternalError(f"Default role {role_code.value} not found in database.")
    user = User(
        email=email,
        password_hash=hash_password(password),
        display_name=display_name,
        role=role,
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("A user with this email already exists.")
    db.refresh(user)
    return user

def register_user(db: Session, settings: Settings, body: dict) -> dict:
    errors = validate_registration_data(body)
    if errors:
        raise ValidationError(errors)

    email = body["email"].strip()
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("A user with this email already exists.")

    user = create_user(db, email, body["password"], body["displayName"].strip())
    logger.info("Registered user id=%s with role %s", user.id, user.role_code.value)

    auth_user = to_auth_user(user)
    return {"token": issue_token(settings, auth_user), "user": auth_user.public()}

def login_user(db: Session, settings: Settings, body: dict) -> dict:
    errors = validate_login_data(body)
    if errors:
        raise ValidationError(errors)

    user = (
        db.query(User)
        .filter(User.email == body["email"].strip(), User.is_active.is_(True))
        .first()
    )
    if not user or not verify_password(body["password"], user.password_hash):
        logger.warning("Failed login attempt")
        raise AuthenticationError("Invalid email or password.")

    auth_user = to_auth_user(user)
    return {"token": issue_token(settings, auth_user), "user": auth_user.public()}
