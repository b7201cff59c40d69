"""AdminRefreshToken model: ledger of refresh tokens still honoured"""
from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from eternal_admin.database import Base
from eternal_admin.models.admin import generate_uuid_string, utcnow


class AdminRefreshToken(Base):
    """One row per issued refresh token.

    A refresh token is usable only while its row exists: logout deletes the
    row, and deleting the owning admin cascades.
    """

    __tablename__ = "admin_refresh_tokens"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    admin_id = Column(String(36), ForeignKey("admins.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(1024), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    admin = relationship("Admin", back_populates="refresh_tokens")
