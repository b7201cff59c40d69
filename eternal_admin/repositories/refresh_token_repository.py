"""Revocation ledger: refresh tokens that may still be exchanged"""
from typing import Optional

from sqlalchemy.orm import Session

from eternal_admin.models.admin_refresh_token import AdminRefreshToken
from eternal_admin.records import RefreshTokenRecord


def _to_record(row: AdminRefreshToken) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        id=row.id,
        admin_id=row.admin_id,
        token=row.token,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class RefreshTokenRepository:
    """Reads and writes ``admin_refresh_tokens`` rows.

    The unique constraint on ``token`` is the only duplicate guard; no
    pre-check is made before inserting.
    """

    def __init__(self, db: Session):
        self.db = db

    def record(self, admin_id: str, token: str) -> RefreshTokenRecord:
        row = AdminRefreshToken(admin_id=admin_id, token=token)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return _to_record(row)

    def find_by_token(self, token: str) -> Optional[RefreshTokenRecord]:
        row = self.db.query(AdminRefreshToken).filter(AdminRefreshToken.token == token).first()
        return _to_record(row) if row else None

    def delete_by_token(self, token: str) -> int:
        """Delete the matching row; returns 0 or 1, never raises for unknown tokens."""
        deleted = (
            self.db.query(AdminRefreshToken)
            .filter(AdminRefreshToken.token == token)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted
