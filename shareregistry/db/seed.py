"""Apply the schema and load reference/demo data.

One-shot helpers for setting up a database outside the running server.

Usage:
    python -m shareregistry.db.seed schema                  # create tables
    python -m shareregistry.db.seed seed                    # roles + company types
    python -m shareregistry.db.seed seed --demo             # ... plus demo users and companies
    python -m shareregistry.db.seed set-role EMAIL ANALYST  # change a user's role
"""

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from shareregistry.config import settings
from shareregistry.db.session import init_db, make_engine, make_session_factory
from shareregistry.models.company import Company, CompanyType
from shareregistry.models.role import Role, RoleCode
from shareregistry.models.shareholder import Shareholder, Shareholding
from shareregistry.models.user import User
from shareregistry.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)

COMPANY_TYPES = [
    ("SP_ZOO", "Spółka z ograniczoną odpowiedzialnością", "Limited liability company (sp. z o.o.)"),
    ("SA", "Spółka akcyjna", "Joint-stock company (S.A.)"),
    ("PSA", "Prosta spółka akcyjna", "Simple joint-stock company (P.S.A.)"),
    ("SJ", "Spółka jawna", "General partnership (sp.j.)"),
    ("SK", "Spółka komandytowa", "Limited partnership (sp.k.)"),
    ("SKA", "Spółka komandytowo-akcyjna", "Limited joint-stock partnership (S.K.A.)"),
    ("SC", "Spółka cywilna", "Civil law partnership (s.c.)"),
]

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    ("analyst@example.com", "Demo Analyst", RoleCode.ANALYST),
    ("viewer@example.com", "Demo Viewer", RoleCode.VIEWER),
]


def seed_reference_data(db: Session) -> None:
    """Insert missing roles and company types. Safe to run repeatedly."""
    existing_roles = {r.code for r in db.query(Role).all()}
    for code in RoleCode:
        if code not in existing_roles:
            db.add(Role(code=code))

    existing_types = {t.code for t in db.query(CompanyType).all()}
    for code, label, description in COMPANY_TYPES:
        if code not in existing_types:
            db.add(CompanyType(code=code, label=label, description=description))

    db.commit()


def seed_demo_data(db: Session) -> None:
    """Demo accounts plus a small ownership structure, keyed by email/NIP."""
    from shareregistry.auth.service import create_user

    users = {}
    for email, display_name, role_code in DEMO_USERS:
        user = db.query(User).filter(User.email == email).first()
        if user is None:
            user = create_user(db, email, DEMO_PASSWORD, display_name, role_code)
        users[email] = user

    analyst = users["analyst@example.com"]
    sp_zoo = db.query(CompanyType).filter(CompanyType.code == "SP_ZOO").one()
    sa = db.query(CompanyType).filter(CompanyType.code == "SA").one()

    companies = [
        dict(name="Alfa Holding", nip="5270000001", krs="0000100001", founded_at="2010-03-15",
             company_type_id=sa.id, share_capital=500000, last_valuation=12000000, is_restricted=False),
        dict(name="Beta Logistics", nip="5270000002", krs="0000100002", founded_at="2015-07-01",
             company_type_id=sp_zoo.id, share_capital=50000, last_valuation=800000, is_restricted=False),
        dict(name="Gamma Ventures", nip="5270000003", founded_at="2021-11-20",
             company_type_id=sp_zoo.id, share_capital=5000, is_restricted=True,
             notes="Pre-seed vehicle, details confidential."),
    ]
    by_nip = {}
    for values in companies:
        company = db.query(Company).filter(Company.nip == values["nip"]).first()
        if company is None:
            company = Company(**values, created_by_user_id=analyst.id)
            db.add(company)
        by_nip[values["nip"]] = company

    people = [("Jan", "Kowalski", "80010112345"), ("Anna", "Nowak", "85020254321")]
    holders = []
    for name, last_name, identifier in people:
        holder = db.query(Shareholder).filter(Shareholder.identifier == identifier).first()
        if holder is None:
            holder = Shareholder(name=name, last_name=last_name, identifier=identifier)
            db.add(holder)
        holders.append(holder)
    db.flush()

    if not db.query(Shareholding).count():
        db.add_all([
            Shareholding(company_id=by_nip["5270000001"].id, shareholder_id=holders[0].id,
                         shares_owned=6000, acquired_at="2010-03-15", source="Founding deed"),
            Shareholding(company_id=by_nip["5270000001"].id, shareholder_id=holders[1].id,
                         shares_owned=4000, acquired_at="2012-05-10", source="Share purchase agreement"),
            Shareholding(company_id=by_nip["5270000003"].id, shareholder_id=holders[1].id,
                         shares_owned=100, acquired_at="2021-11-20"),
        ])
    db.commit()


def set_user_role(db: Session, email: str, role_code: RoleCode) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise LookupError(f"No user with email {email}")
    role = db.query(Role).filter(Role.code == role_code).first()
    if role is None:
        raise LookupError(f"Role {role_code.value} is missing; run the seed command first")
    user.role = role
    db.commit()
    return user


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m shareregistry.db.seed", description=__doc__.splitlines()[0])
    parser.add_argument("--database-url", default=settings.database_url, help="defaults to DATABASE_URL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("schema", help="create all tables")

    seed = sub.add_parser("seed", help="insert reference data")
    seed.add_argument("--demo", action="store_true", help="also insert demo users and companies")

    set_role = sub.add_parser("set-role", help="assign a role to an existing user")
    set_role.add_argument("email")
    set_role.add_argument("role", choices=[RoleCode.VIEWER.value, RoleCode.ANALYST.value])

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level.upper())

    engine = make_engine(args.database_url)
    session_factory = make_session_factory(engine)

    try:
        if args.command == "schema":
            init_db(engine)
            return 0

        with session_factory() as db:
            if args.command == "seed":
                seed_reference_data(db)
                logger.info("Reference data inserted")
                if args.demo:
                    seed_demo_data(db)
                    logger.info("Demo data inserted (password for demo users: %s)", DEMO_PASSWORD)
            elif args.command == "set-role":
                try:
                    user = set_user_role(db, args.email, RoleCode(args.role))
                except LookupError as e:
                    logger.error("%s", e)
                    return 1
                logger.info("User %s now has role %s", user.email, args.role)
        return 0
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
