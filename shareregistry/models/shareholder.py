
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from shareregistry.db.session import Base

class Shareholder(Base):
    __tablename__ = "shareholders"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    last_name = Column(String(255), nullable=False)
    identifier = Column(String(50))
    notes = Column(Text)

    shareholdings = relationship("Shareholding", back_populates="shareholder", passive_deletes="all")


class Shareholding(Base):
    __tablename__ = "shareholdings"
    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    shareholder_id = Column(Integer, ForeignKey("shareholders.id", ondelete="RESTRICT"), nullable=False, index=True)
    shares_owned = Column(Integer, nullable=False)
    acquired_at = Column(String(10))
    source = Column(Text)

    company = relationship("Company", back_populates="shareholdings")
    shareholder = relationship("Shareholder", back_populates="shareholdings")

    @property
    def shareholder_name(self):
        return self.shareholder.name if self.shareholder else None

    @property
    def shareholder_last_name(self):
        return self.shareholder.last_name if self.shareholder else None

    @property
    def company_name(self):
        return self.company.name if self.company else None

    @property
    def company_nip(self):
        return self.company.nip if self.company else None
