"""Plain records passed between the storage layer and the services.

ORM instances never leave the repositories; they are mapped to these
frozen dataclasses first.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TokenPayload:
    """Claims carried by both access and refresh tokens."""
    admin_id: str
    email: str
    role: str


@dataclass(frozen=True)
class AdminRecord:
    id: str
    email: str
    password_hash: str
    name: str
    role: str
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_payload(self) -> TokenPayload:
        return TokenPayload(admin_id=self.id, email=self.email, role=self.role)

    def summary(self) -> Dict[str, Any]:
        """Identity fields returned with a token pair"""
        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role}

    def public(self) -> Dict[str, Any]:
        """Full public view; the password hash is never included"""
        return {
            **self.summary(),
            "isActive": self.is_active,
            "lastLoginAt": self.last_login_at,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class RefreshTokenRecord:
    id: str
    admin_id: str
    token: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
