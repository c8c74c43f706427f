import logging

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from shareregistry.auth.policy import ensure_can_edit_company, is_guest
from shareregistry.errors import ConflictError, NotFoundError, ValidationError
from shareregistry.models.company import Company
from shareregistry.models.shareholder import Shareholder, Shareholding
from shareregistry.schemas.auth import AuthUser
from shareregistry.schemas.shareholder import ShareholderHoldingOut, ShareholderOut, ShareholdingOut
from shareregistry.services.validation import (
    to_number,
    validate_shareholder_data,
    validate_shareholding_data,
)
from shareregistry.utils.params import page_payload, parse_id

logger = logging.getLogger(__name__)


def _shareholder_values(body: dict) -> dict:
    identifier = body.get("identifier")
    return {
        "name": body["name"],
        "last_name": body["last_name"],
        "identifier": str(identifier) if identifier else None,
        "notes": body.get("notes") or None,
    }


def _get_shareholder_or_404(db: Session, shareholder_id: int) -> Shareholder:
    shareholder = db.get(Shareholder, shareholder_id)
    if shareholder is None:
        raise NotFoundError("Shareholder not found.")
    return shareholder


def _get_shareholding_or_404(db: Session, shareholding_id: int) -> Shareholding:
    holding = db.get(Shareholding, shareholding_id)
    if holding is None:
        raise NotFoundError("Shareholding not found.")
    return holding


def _get_editable_company(db: Session, user: AuthUser, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if company is None:
        raise NotFoundError("Company not found.")
    ensure_can_edit_company(user, company, "modify")
    return company


def list_shareholders(db: Session, page: int, limit: int) -> dict:
    total_items = db.query(Shareholder).count()
    rows = (
        db.query(Shareholder)
        .order_by(Shareholder.name, Shareholder.id)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    items = [ShareholderOut.model_validate(row).model_dump() for row in rows]
    return page_payload(items, page, limit, total_items)


def get_shareholder(db: Session, user: AuthUser | None, raw_id: str) -> dict:
    shareholder_id = parse_id(raw_id, "shareholder")
    shareholder = _get_shareholder_or_404(db, shareholder_id)

    query = (
        db.query(Shareholding)
        .join(Shareholding.company)
        .options(joinedload(Shareholding.company))
        .filter(Shareholding.shareholder_id == shareholder_id)
    )
    if is_guest(user):
        query = query.filter(Company.is_restricted.is_(False))
    holdings = query.order_by(Company.name, Shareholding.id).all()

    return {
        "shareholder": ShareholderOut.model_validate(shareholder).model_dump(),
        "shareholdings": [ShareholderHoldingOut.model_validate(h).model_dump() for h in holdings],
    }


def create_shareholder(db: Session, user: AuthUser, body: dict) -> dict:
    errors = validate_shareholder_data(body)
    if errors:
        raise ValidationError(errors)

    shareholder = Shareholder(**_shareholder_values(body))
    db.add(shareholder)
    db.flush()
    db.refresh(shareholder)
    payload = {"shareholder": ShareholderOut.model_validate(shareholder).model_dump()}
    db.commit()

    logger.info("Shareholder id=%s created by user id=%s", payload["shareholder"]["id"], user.id)
    return payload


def update_shareholder(db: Session, user: AuthUser, raw_id: str, body: dict) -> dict:
    shareholder_id = parse_id(raw_id, "shareholder")
    shareholder = _get_shareholder_or_404(db, shareholder_id)

    errors = validate_shareholder_data(body)
    if errors:
        raise ValidationError(errors)

    for key, value in _shareholder_values(body).items():
        setattr(shareholder, key, value)
    db.flush()
    db.refresh(shareholder)
    payload = {"shareholder": ShareholderOut.model_validate(shareholder).model_dump()}
    db.commit()

    logger.info("Shareholder id=%s updated by user id=%s", shareholder_id, user.id)
    return payload


def delete_shareholder(db: Session, user: AuthUser, raw_id: str) -> dict:
    shareholder_id = parse_id(raw_id, "shareholder")
    _get_shareholder_or_404(db, shareholder_id)

    try:
        db.execute(delete(Shareholder).where(Shareholder.id == shareholder_id))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Shareholder still has shareholdings and cannot be deleted.")

    logger.info("Shareholder id=%s deleted by user id=%s", shareholder_id, user.id)
    return {"success": True}


def create_shareholding(db: Session, user: AuthUser, body: dict) -> dict:
    errors = validate_shareholding_data(body)
    if errors:
        raise ValidationError(errors)

    company = _get_editable_company(db, user, int(to_number(body["company_id"])))
    shareholder = _get_shareholder_or_404(db, int(to_number(body["shareholder_id"])))

    holding = Shareholding(
        company_id=company.id,
        shareholder_id=shareholder.id,
        shares_owned=int(to_number(body["shares_owned"])),
        acquired_at=body.get("acquired_at") or None,
        source=body.get("source") or None,
    )
    db.add(holding)
    db.flush()
    db.refresh(holding)
    payload = {"shareholding": ShareholdingOut.model_validate(holding).model_dump()}
    db.commit()

    logger.info(
        "Shareholding id=%s created in company id=%s by user id=%s",
        payload["shareholding"]["id"], payload["shareholding"]["company_id"], user.id,
    )
    return payload


def update_shareholding(db: Session, user: AuthUser, raw_id: str, body: dict) -> dict:
    shareholding_id = parse_id(raw_id, "shareholding")
    holding = _get_shareholding_or_404(db, shareholding_id)
    _get_editable_company(db, user, holding.company_id)

    # partial updates are checked against the merged result; the company never changes
    existing = ShareholdingOut.model_validate(holding).model_dump()
    errors = validate_shareholding_data({**existing, **body, "company_id": holding.company_id})
    if errors:
        raise ValidationError(errors)

    if "shares_owned" in body:
        holding.shares_owned = int(to_number(body["shares_owned"]))
    if "acquired_at" in body:
        holding.acquired_at = body["acquired_at"] or None
    if "source" in body:
        holding.source = body["source"] or None

    db.flush()
    db.refresh(holding)
    payload = {"shareholding": ShareholdingOut.model_validate(holding).model_dump()}
    db.commit()

    logger.info("Shareholding id=%s updated by user id=%s", shareholding_id, user.id)
    return payload


def delete_shareholding(db: Session, user: AuthUser, raw_id: str) -> dict:
    shareholding_id = parse_id(raw_id, "shareholding")
    holding = _get_shareholding_or_404(db, shareholding_id)
    _get_editable_company(db, user, holding.company_id)

    db.execute(delete(Shareholding).where(Shareholding.id == shareholding_id))
    db.commit()

    logger.info("Shareholding id=%s deleted by user id=%s", shareholding_id, user.id)
    return {"success": True}
