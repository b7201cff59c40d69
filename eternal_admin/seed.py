"""Create the default SUPER_ADMIN account.

Usage::

    python -m eternal_admin.seed

Safe to run repeatedly: an existing account with the seed email is left
untouched.
"""
import sys

from eternal_admin.config import settings
from eternal_admin.database import Base, SessionLocal, engine
from eternal_admin.errors import FailureKind
from eternal_admin.models.admin import AdminRole
from eternal_admin.repositories import AdminRepository, RefreshTokenRepository
from eternal_admin.services import SessionManager
from eternal_admin.utils.jwt_utils import TokenCodec
from eternal_admin.utils.logger import logger


def seed_default_admin(manager: SessionManager) -> bool:
    """Create the seed admin; returns False when it already exists."""
    result = manager.create_admin(
        email=settings.SEED_ADMIN_EMAIL,
        password=settings.SEED_ADMIN_PASSWORD,
        name=settings.SEED_ADMIN_NAME,
        role=AdminRole.SUPER_ADMIN.value,
    )
    if result.ok:
        logger.info(f"Created admin account: {settings.SEED_ADMIN_EMAIL}", extra={"action": "seed"})
        return True
    if result.kind is FailureKind.CONFLICT:
        logger.info("Admin account already exists", extra={"action": "seed"})
        return False
    raise RuntimeError(f"Seeding failed: {result.detail}")


def main() -> int:
    # tables normally come from alembic; create_all covers a fresh SQLite file
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        manager = SessionManager(
            admins=AdminRepository(db),
            ledger=RefreshTokenRepository(db),
            codec=TokenCodec(settings.token_config),
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
        seed_default_admin(manager)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
