"""Credential store: admin accounts"""
from typing import Optional

from sqlalchemy.orm import Session

from eternal_admin.models.admin import Admin, AdminRole, utcnow
from eternal_admin.records import AdminRecord


def _to_record(admin: Admin) -> AdminRecord:
    role = admin.role.value if isinstance(admin.role, AdminRole) else admin.role
    return AdminRecord(
        id=admin.id,
        email=admin.email,
        password_hash=admin.password,
        name=admin.name,
        role=role,
        is_active=admin.is_active,
        last_login_at=admin.last_login_at,
        created_at=admin.created_at,
        updated_at=admin.updated_at,
    )


class AdminRepository:
    """Reads and writes ``admins`` rows; holds no business rules."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[AdminRecord]:
        admin = self.db.query(Admin).filter(Admin.email == email).first()
        return _to_record(admin) if admin else None

    def find_by_id(self, admin_id: str) -> Optional[AdminRecord]:
        admin = self.db.query(Admin).filter(Admin.id == admin_id).first()
        return _to_record(admin) if admin else None

    def create(self, email: str, password_hash: str, name: str, role: AdminRole) -> AdminRecord:
        admin = Admin(email=email, password=password_hash, name=name, role=role, is_active=True)
        self.db.add(admin)
        self.db.commit()
        self.db.refresh(admin)
        return _to_record(admin)

    def update_last_login(self, admin_id: str) -> None:
        self.db.query(Admin).filter(Admin.id == admin_id).update(
            {Admin.last_login_at: utcnow()}, synchronize_session=False
        )
        self.db.commit()

    def set_active(self, admin_id: str, is_active: bool) -> Optional[AdminRecord]:
        """Flip the active flag; returns ``None`` for an unknown id."""
        admin = self.db.query(Admin).filter(Admin.id == admin_id).first()
        if not admin:
            return None
        admin.is_active = is_active
        self.db.commit()
        self.db.refresh(admin)
        return _to_record(admin)

    def rollback(self) -> None:
        """Discard a failed write so the session stays usable."""
        self.db.rollback()
