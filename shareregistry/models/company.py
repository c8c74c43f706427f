
from sqlalchemy import Boolean, Column, Integer, Numeric, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from shareregistry.db.session import Base

class CompanyType(Base):
    __tablename__ = "company_types"
    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False)
    label = Column(String(255), nullable=False)
    description = Column(Text)

    companies = relationship("Company", back_populates="company_type")


class Company(Base):
    __tablename__ = "companies"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    nip = Column(String(20), nullable=False)
    krs = Column(String(20))
    # ISO date text (YYYY-MM-DD)
    founded_at = Column(String(10))
    company_type_id = Column(Integer, ForeignKey("company_types.id"), nullable=False)
    share_capital = Column(Numeric(18, 2, asdecimal=False), nullable=False)
    last_valuation = Column(Numeric(18, 2, asdecimal=False))
    created_by_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    is_restricted = Column(Boolean, nullable=False, default=False)
    notes = Column(Text)

    company_type = relationship("CompanyType", back_populates="companies")
    created_by = relationship("User", back_populates="companies")
    shareholdings = relationship("Shareholding", back_populates="company", passive_deletes=True)

    @property
    def company_type_code(self):
        return self.company_type.code if self.company_type else None

    @property
    def company_type_label(self):
        return self.company_type.label if self.company_type else None

    @property
    def created_by_name(self):
        return self.created_by.display_name if self.created_by else None
