
from pydantic import BaseModel

class ShareholderOut(BaseModel):
    id: int
    name: str
    last_name: str
    identifier: str | None = None
    notes: str | None = None

    class Config:
        from_attributes = True

class ShareholdingOut(BaseModel):
    id: int
    company_id: int
    shareholder_id: int
    shares_owned: int
    acquired_at: str | None = None
    source: str | None = None

    class Config:
        from_attributes = True

class ShareholderHoldingOut(BaseModel):
    """A shareholding as listed on the shareholder's page."""
    id: int
    shares_owned: int
    acquired_at: str | None = None
    source: str | None = None
    company_id: int
    company_name: str | None = None
    company_nip: str | None = None

    class Config:
        from_attributes = True
