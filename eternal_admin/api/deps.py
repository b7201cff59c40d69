"""API dependencies for authentication and authorization.

Every protected route resolves the caller through :func:`authenticate`,
which reads ``Authorization: Bearer <access token>`` and attaches the
decoded :class:`TokenPayload` to ``request.state.admin``.

Role gates are built with :func:`authorize`::

    @router.post("/admins")
    def endpoint(principal: TokenPayload = Depends(authorize(AdminRole.SUPER_ADMIN))):
        ...
"""
from typing import Callable, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from eternal_admin.config import settings
from eternal_admin.database import get_db
from eternal_admin.records import TokenPayload
from eternal_admin.repositories import AdminRepository, RefreshTokenRepository
from eternal_admin.services import SessionManager, unwrap
from eternal_admin.utils.jwt_utils import TokenCodec

_token_codec = TokenCodec(settings.token_config)


def get_token_codec() -> TokenCodec:
    return _token_codec


def get_session_manager(
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
) -> SessionManager:
    return SessionManager(
        admins=AdminRepository(db),
        ledger=RefreshTokenRepository(db),
        codec=codec,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )


# ---------------------------------------------------------------------------
# authenticate
# ---------------------------------------------------------------------------

def authenticate(
    request: Request,
    authorization: Optional[str] = Header(None),
    manager: SessionManager = Depends(get_session_manager),
) -> TokenPayload:
    """Require a valid access token; 401 otherwise."""
    principal = unwrap(manager.authenticate(authorization))
    request.state.admin = principal
    return principal


# ---------------------------------------------------------------------------
# authorize factory: role-gated dependency
# ---------------------------------------------------------------------------

def authorize(*allowed_roles: str) -> Callable:
    """Return a dependency that admits only the given roles (403 otherwise)."""
    roles = {getattr(role, "value", role) for role in allowed_roles}

    def _role_dep(
        request: Request,
        _: TokenPayload = Depends(authenticate),
    ) -> TokenPayload:
        principal = getattr(request.state, "admin", None)
        return unwrap(SessionManager.authorize(principal, roles))

    # Give FastAPI a unique name so it doesn't collapse distinct dependencies
    _role_dep.__name__ = "authorize_" + "_".join(sorted(r.lower() for r in roles))
    return _role_dep
