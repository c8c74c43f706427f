
from pydantic import BaseModel

class CompanyTypeOut(BaseModel):
    id: int
    code: str
    label: str
    description: str | None = None

    class Config:
        from_attributes = True

class CompanyPublicOut(BaseModel):
    """Fields anyone may see, guests included."""
    id: int
    name: str
    nip: str
    founded_at: str | None = None
    company_type_id: int
    company_type_code: str | None = None
    company_type_label: str | None = None

    class Config:
        from_attributes = True

class CompanyOut(CompanyPublicOut):
    krs: str | None = None
    share_capital: float
    last_valuation: float | None = None
    created_by_user_id: int | None = None
    is_restricted: bool
    notes: str | None = None

class CompanyDetailOut(CompanyOut):
    created_by_name: str | None = None

class CompanyShareholdingOut(BaseModel):
    id: int
    shares_owned: int
    acquired_at: str | None = None
    source: str | None = None
    shareholder_id: int
    shareholder_name: str | None = None
    shareholder_last_name: str | None = None

    class Config:
        from_attributes = True
