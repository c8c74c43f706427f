import logging

from sqlalchemy import delete
from sqlalchemy.orm import Session, joinedload
from shareregistry.auth.policy import can_view_company, ensure_can_edit_company, is_guest
from shareregistry.errors import NotFoundError, ValidationError
from shareregistry.models.company import Company, CompanyType
from shareregistry.models.shareholder import Shareholder, Shareholding
from shareregistry.schemas.auth import AuthUser
from shareregistry.schemas.company import (
    CompanyDetailOut,
    CompanyOut,
    CompanyPublicOut,
    CompanyShareholdingOut,
    CompanyTypeOut,
)
from shareregistry.services.validation import parse_bool, to_number, validate_company_data
from shareregistry.utils.params import page_payload, parse_id

logger = logging.getLogger(__name__)


def _optional_text(value) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _optional_number(value) -> float | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_number(value)


def company_values(body: dict) -> dict:
    """Column values from an already validated payload."""
    return {
        "name": body["name"],
        "nip": str(body["nip"]),
        "krs": _optional_text(body.get("krs")),
        "founded_at": body.get("founded_at") or None,
        "company_type_id": int(to_number(body["company_type_id"])),
        "share_capital": to_number(body["share_capital"]),
        "last_valuation": _optional_number(body.get("last_valuation")),
        "is_restricted": parse_bool(body.get("is_restricted")),
        "notes": _optional_text(body.get("notes")),
    }


def serialize_company(company: Company, user: AuthUser | None, detail: bool = False) -> dict:
    if is_guest(user):
        return CompanyPublicOut.model_validate(company).model_dump()
    schema = CompanyDetailOut if detail else CompanyOut
    return schema.model_validate(company).model_dump()


def get_company_or_404(db: Session, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if company is None:
        raise NotFoundError("Company not found.")
    return company


def _validated_values(db: Session, body: dict) -> dict:
    errors = validate_company_data(body)
    if errors:
        raise ValidationError(errors)

    values = company_values(body)
    if db.get(CompanyType, values["company_type_id"]) is None:
        raise ValidationError(["company_type_id does not match a known company type."])
    return values


def list_companies(db: Session, user: AuthUser | None, page: int, limit: int) -> dict:
    query = db.query(Company)
    if is_guest(user):
        query = query.filter(Company.is_restricted.is_(False))

    total_items = query.count()
    rows = (
        query.options(joinedload(Company.company_type))
        .order_by(Company.name, Company.id)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    items = [serialize_company(row, user) for row in rows]
    return page_payload(items, page, limit, total_items)


def list_company_types(db: Session) -> dict:
    rows = db.query(CompanyType).order_by(CompanyType.label).all()
    return {"items": [CompanyTypeOut.model_validate(row).model_dump() for row in rows]}


def get_company(db: Session, user: AuthUser | None, raw_id: str) -> dict:
    company_id = parse_id(raw_id, "company")

    company = db.get(Company, company_id)
    # a restricted company hidden from the caller is indistinguishable from a missing one
    if company is None or not can_view_company(user, company):
        raise NotFoundError("Company not found.")

    holdings = (
        db.query(Shareholding)
        .join(Shareholding.shareholder)
        .options(joinedload(Shareholding.shareholder))
        .filter(Shareholding.company_id == company_id)
        .order_by(Shareholder.name, Shareholding.id)
        .all()
    )

    return {
        "company": serialize_company(company, user, detail=True),
        "shareholdings": [CompanyShareholdingOut.model_validate(h).model_dump() for h in holdings],
    }


def create_company(db: Session, user: AuthUser, body: dict) -> dict:
    values = _validated_values(db, body)

    company = Company(**values, created_by_user_id=user.id)
    db.add(company)
    db.flush()
    db.refresh(company)
    payload = {"company": CompanyOut.model_validate(company).model_dump()}
    db.commit()

    logger.info("Company id=%s created by user id=%s", payload["company"]["id"], user.id)
    return payload


def update_company(db: Session, user: AuthUser, raw_id: str, body: dict) -> dict:
    company_id = parse_id(raw_id, "company")
    company = get_company_or_404(db, company_id)
    ensure_can_edit_company(user, company, "modify")

    values = _validated_values(db, body)
    for key, value in values.items():
        setattr(company, key, value)

    db.flush()
    db.refresh(company)
    payload = {"company": CompanyOut.model_validate(company).model_dump()}
    db.commit()

    logger.info("Company id=%s updated by user id=%s", company_id, user.id)
    return payload


def delete_company(db: Session, user: AuthUser, raw_id: str) -> dict:
    company_id = parse_id(raw_id, "company")
    company = get_company_or_404(db, company_id)
    ensure_can_edit_company(user, company, "delete")

    # dependent shareholdings go with it through the foreign key (ON DELETE CASCADE)
    db.execute(delete(Company).where(Company.id == company_id))
    db.commit()

    logger.info("Company id=%s deleted by user id=%s", company_id, user.id)
    return {"success": True}
