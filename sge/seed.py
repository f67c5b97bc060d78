"""Seed the role catalogue and the bootstrap admin account.

Runs at startup and can be run by hand::

    python -m sge.seed
"""
from typing import Optional

from sqlalchemy.orm import Session

from sge.config import Settings, settings
from sge.database import SessionLocal, transaction, utcnow
from sge.exceptions import UserRegistrationError
from sge.models.user import Role, User
from sge.repositories.user_repository import UserRepository
from sge.utils.logger import logger

DEFAULT_ROLES = ("Admin", "Manager", "User")


def seed_roles(db: Session) -> None:
    existing = {name for (name,) in db.query(Role.name).all()}
    for name in DEFAULT_ROLES:
        if name not in existing:
            db.add(Role(name=name))
    db.flush()


def seed_admin(db: Session, config: Settings) -> Optional[User]:
    """Create the admin account when ADMIN_EMAIL and ADMIN_PASSWORD are configured."""
    if not config.ADMIN_EMAIL or not config.ADMIN_PASSWORD:
        return None

    users = UserRepository(db, config.PASSWORD_MIN_LENGTH)
    admin = users.find_by_email(config.ADMIN_EMAIL)
    if admin is not None:
        return admin

    admin = User(
        email=config.ADMIN_EMAIL,
        username=config.ADMIN_USERNAME,
        first_name="Super",
        last_name="Admin",
        is_active=True,
        created_at=utcnow(),
    )
    users.create(admin, config.ADMIN_PASSWORD)
    users.add_role(admin, "Admin")
    logger.info(f"Seeded admin account {admin.email}", extra={"user_id": admin.id, "action": "seed_admin"})
    return admin


def seed(db: Session, config: Settings = settings) -> None:
    with transaction(db):
        seed_roles(db)

    try:
        with transaction(db):
            seed_admin(db, config)
    except UserRegistrationError as exc:
        # A weak ADMIN_PASSWORD must not keep the API from starting
        logger.error(f"Admin account not seeded: {exc.message}", extra={"action": "seed_admin"})


def main() -> None:
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
