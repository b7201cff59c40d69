"""Auth endpoints: login, session refresh/logout, current admin, provisioning"""
from fastapi import APIRouter, Depends, Request, status

from eternal_admin.api.deps import authenticate, authorize, get_session_manager
from eternal_admin.config import settings
from eternal_admin.middleware.rate_limit import limiter
from eternal_admin.models.admin import AdminRole
from eternal_admin.records import TokenPayload
from eternal_admin.schemas.auth import (
    AdminCreate,
    AdminResponse,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RefreshResponse,
    RefreshTokenRequest,
)
from eternal_admin.services import SessionManager, unwrap

router = APIRouter(prefix="/api/auth", tags=["auth"])

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------

@router.post("/login", response_model=LoginResponse, responses=_ERRORS)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
def login(
    request: Request,
    body: LoginRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    """Log in with email and password.

    Returns a 15-minute access token and a 7-day refresh token. Unknown
    emails, inactive accounts and wrong passwords all answer
    `401 Invalid credentials`.
    """
    result = unwrap(manager.login(body.email, body.password))
    return {"status": "success", "data": result.to_dict()}


# ---------------------------------------------------------------------------
# GET /api/auth/me
# ---------------------------------------------------------------------------

@router.get("/me", response_model=AdminResponse, responses={**_ERRORS, 404: {"model": ErrorResponse}})
def get_me(
    principal: TokenPayload = Depends(authenticate),
    manager: SessionManager = Depends(get_session_manager),
):
    """Return the admin behind the bearer access token."""
    admin = unwrap(manager.get_admin_by_id(principal.admin_id))
    return {"status": "success", "data": {"admin": admin.public()}}


# ---------------------------------------------------------------------------
# POST /api/auth/refresh
# ---------------------------------------------------------------------------

@router.post("/refresh", response_model=RefreshResponse, responses=_ERRORS)
def refresh_token(
    body: RefreshTokenRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    """Exchange a refresh token for a new access token.

    The refresh token must still be on record (not logged out) and its
    account active. Any failure answers `401 Invalid or expired refresh token`
    and the client should log in again.
    """
    access_token = unwrap(manager.refresh(body.refreshToken))
    return {"status": "success", "data": {"accessToken": access_token}}


# ---------------------------------------------------------------------------
# POST /api/auth/logout
# ---------------------------------------------------------------------------

@router.post("/logout", response_model=LogoutResponse, responses={400: {"model": ErrorResponse}})
def logout(
    body: RefreshTokenRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    """Revoke a refresh token.

    Idempotent: an unknown or already revoked token reports `deletedCount: 0`.
    """
    deleted_count = unwrap(manager.logout(body.refreshToken))
    return {"status": "success", "data": {"deletedCount": deleted_count}}


# ---------------------------------------------------------------------------
# Account provisioning (SUPER_ADMIN only)
# ---------------------------------------------------------------------------

@router.post(
    "/admins",
    response_model=AdminResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERRORS, 403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_admin(
    body: AdminCreate,
    manager: SessionManager = Depends(get_session_manager),
    _: TokenPayload = Depends(authorize(AdminRole.SUPER_ADMIN)),
):
    """Create an admin account. Unknown roles default to EDITOR."""
    admin = unwrap(manager.create_admin(body.email, body.password, body.name, body.role))
    return {"status": "success", "data": {"admin": admin.public()}}


@router.post(
    "/admins/{admin_id}/deactivate",
    response_model=AdminResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def deactivate_admin(
    admin_id: str,
    manager: SessionManager = Depends(get_session_manager),
    _: TokenPayload = Depends(authorize(AdminRole.SUPER_ADMIN)),
):
    """Deactivate an admin account (soft delete).

    Its refresh tokens stop working immediately; issued access tokens run
    out within 15 minutes.
    """
    admin = unwrap(manager.deactivate_admin(admin_id))
    return {"status": "success", "data": {"admin": admin.public()}}
