"""
Who may see and change what.

Role gating happens at the route level (``require_role``); the checks here
are resource-level and run inside the services, because an analyst may only
change companies they created. Shareholdings have no owner of their own:
edit rights come from the company they belong to.
"""
from shareregistry.errors import AuthorizationError
from shareregistry.models.company import Company
from shareregistry.models.role import RoleCode
from shareregistry.schemas.auth import AuthUser


def is_guest(user: AuthUser | None) -> bool:
    return user is None or user.role is RoleCode.GUEST


def can_edit(user: AuthUser | None, owner_user_id: int | None) -> bool:
    if user is None:
        return False
    if user.role is not RoleCode.ANALYST:
        return False
    return owner_user_id is not None and user.id == owner_user_id


def can_view_company(user: AuthUser | None, company: Company) -> bool:
    return not (company.is_restricted and is_guest(user))


def ensure_can_edit_company(user: AuthUser | None, company: Company, action: str = "modify") -> None:
    if not can_edit(user, company.created_by_user_id):
        raise AuthorizationError(f"You are not allowed to {action} this company.")
