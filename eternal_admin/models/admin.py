"""Admin model: authenticatable accounts of the admin console"""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, String
from sqlalchemy.orm import relationship

from eternal_admin.database import Base


def generate_uuid_string():
    """Generate UUID as string for SQLite compatibility"""
    return str(uuid.uuid4())


def utcnow():
    """Naive UTC timestamp, matching the DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AdminRole(str, enum.Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"


class Admin(Base):
    """An admin account.

    Accounts are never hard-deleted; deactivation flips ``is_active``.
    ``password`` holds the bcrypt hash, never the plaintext.
    """

    __tablename__ = "admins"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(
        Enum(AdminRole, name="admin_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=AdminRole.EDITOR,
    )
    is_active = Column(Boolean, default=True, nullable=False)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    refresh_tokens = relationship(
        "AdminRefreshToken",
        back_populates="admin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
