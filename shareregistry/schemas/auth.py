
from pydantic import BaseModel, Field
from shareregistry.models.role import RoleCode

class AuthUser(BaseModel):
    """Identity carried by an access token."""
    id: int
    email: str
    display_name: str = Field(alias="displayName")
    role: RoleCode = Field(alias="roleCode")

    class Config:
        populate_by_name = True

    def public(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

class TokenOut(BaseModel):
    token: str
    user: dict
