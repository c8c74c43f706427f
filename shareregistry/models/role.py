import enum

from sqlalchemy import Column, Integer, Enum
from sqlalchemy.orm import relationship
from shareregistry.db.session import Base


class RoleCode(str, enum.Enum):
    GUEST = "GUEST"
    VIEWER = "VIEWER"
    ANALYST = "ANALYST"


class Role(Base):
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    code = Column(Enum(RoleCode, name="role_code"), unique=True, nullable=False)

    users = relationship("User", back_populates="role")
