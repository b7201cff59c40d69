"""Session manager: login, refresh, logout and request authentication.

Session lifecycle::

    Unauthenticated --login--> Authenticated --access expires--> AccessExpired
    AccessExpired --refresh--> Authenticated (new access token only)
    AccessExpired --refresh fails--> Unauthenticated
    Authenticated/AccessExpired --logout--> Unauthenticated (ledger row deleted)

Expected failures come back as :class:`Err` values; database errors are
left to propagate.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from eternal_admin.errors import FailureKind
from eternal_admin.models.admin import AdminRole
from eternal_admin.records import AdminRecord, TokenPayload
from eternal_admin.repositories import AdminRepository, RefreshTokenRepository
from eternal_admin.services.result import Err, Ok, Result
from eternal_admin.utils.jwt_utils import InvalidToken, TokenCodec
from eternal_admin.utils.logger import logger
from eternal_admin.utils.passwords import hash_password, verify_password

BEARER_PREFIX = "Bearer "

INVALID_REFRESH_TOKEN = "Invalid or expired refresh token"
REFRESH_TOKEN_REQUIRED = "Refresh token is required"
CREDENTIALS_REQUIRED = "Email and password are required"


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    refresh_token: str
    admin: AdminRecord

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
            "admin": self.admin.summary(),
        }


def _clean(value: Any) -> Optional[str]:
    """Strip a string input; anything blank or non-string counts as missing."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


class SessionManager:
    """Owns the decision of when tokens are minted and revoked."""

    def __init__(
        self,
        admins: AdminRepository,
        ledger: RefreshTokenRepository,
        codec: TokenCodec,
        bcrypt_rounds: int = 10,
    ):
        self.admins = admins
        self.ledger = ledger
        self.codec = codec
        self.bcrypt_rounds = bcrypt_rounds

    # ------------------------------------------------------------------ #
    # Session lifecycle
    # ------------------------------------------------------------------ #

    def login(self, email: Any, password: Any) -> Result[LoginResult]:
        email = _clean(email)
        password = _clean(password)
        if not email or not password:
            return Err(FailureKind.VALIDATION_ERROR, CREDENTIALS_REQUIRED)

        admin = self.admins.find_by_email(email)

        # same answer for unknown, inactive, and wrong password
        if not admin or not admin.is_active:
            logger.info("Login rejected", extra={"action": "login", "reason": "unknown_or_inactive"})
            return Err(FailureKind.INVALID_CREDENTIALS)

        if not verify_password(password, admin.password_hash):
            logger.info(
                "Login rejected",
                extra={"action": "login", "admin_id": admin.id, "reason": "password_mismatch"},
            )
            return Err(FailureKind.INVALID_CREDENTIALS)

        self._record_last_login(admin.id)

        payload = admin.to_payload()
        access_token = self.codec.issue_access_token(payload)
        refresh_token = self.codec.issue_refresh_token(payload)
        self.ledger.record(admin.id, refresh_token)

        logger.info(f"Admin logged in: {admin.email}", extra={"action": "login", "admin_id": admin.id})
        return Ok(LoginResult(access_token=access_token, refresh_token=refresh_token, admin=admin))

    def refresh(self, refresh_token: Any) -> Result[str]:
        """Exchange a ledger-backed refresh token for a new access token.

        The refresh token itself is not rotated. Every rejection carries the
        same client-facing message; the precise cause is only logged.
        """
        refresh_token = _clean(refresh_token)
        if not refresh_token:
            return Err(FailureKind.VALIDATION_ERROR, REFRESH_TOKEN_REQUIRED)

        try:
            claims = self.codec.verify_refresh_token(refresh_token)
        except InvalidToken as exc:
            return self._reject_refresh(FailureKind.INVALID_OR_EXPIRED_TOKEN, f"verification_failed: {exc}")

        if self.ledger.find_by_token(refresh_token) is None:
            return self._reject_refresh(FailureKind.INVALID_OR_EXPIRED_TOKEN, "not_in_ledger", claims.admin_id)

        admin = self.admins.find_by_id(claims.admin_id)
        if not admin or not admin.is_active:
            return self._reject_refresh(FailureKind.ACCOUNT_INACTIVE, "account_inactive", claims.admin_id)

        # claims come from the current row, not the old token
        access_token = self.codec.issue_access_token(admin.to_payload())
        logger.info("Access token refreshed", extra={"action": "refresh", "admin_id": admin.id})
        return Ok(access_token)

    def logout(self, refresh_token: Any) -> Result[int]:
        refresh_token = _clean(refresh_token)
        if not refresh_token:
            return Err(FailureKind.VALIDATION_ERROR, REFRESH_TOKEN_REQUIRED)

        deleted_count = self.ledger.delete_by_token(refresh_token)
        logger.info(f"Logout removed {deleted_count} refresh token(s)", extra={"action": "logout"})
        return Ok(deleted_count)

    # ------------------------------------------------------------------ #
    # Request gates
    # ------------------------------------------------------------------ #

    def authenticate(self, authorization: Optional[str]) -> Result[TokenPayload]:
        """Resolve the principal from an ``Authorization`` header value."""
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return Err(FailureKind.AUTHENTICATION_REQUIRED)

        token = authorization[len(BEARER_PREFIX):]
        try:
            return Ok(self.codec.verify_access_token(token))
        except InvalidToken as exc:
            logger.debug(f"Access token rejected: {exc}")
            return Err(FailureKind.INVALID_OR_EXPIRED_TOKEN)

    @staticmethod
    def authorize(principal: Optional[TokenPayload], allowed_roles: Iterable[str]) -> Result[TokenPayload]:
        if principal is None:
            return Err(FailureKind.AUTHENTICATION_REQUIRED)
        if principal.role not in set(allowed_roles):
            return Err(FailureKind.INSUFFICIENT_PERMISSIONS)
        return Ok(principal)

    # ------------------------------------------------------------------ #
    # Accounts
    # ------------------------------------------------------------------ #

    def get_admin_by_id(self, admin_id: str) -> Result[AdminRecord]:
        admin = self.admins.find_by_id(admin_id)
        if not admin:
            return Err(FailureKind.NOT_FOUND, "Admin not found")
        return Ok(admin)

    def create_admin(self, email: Any, password: Any, name: Any, role: Any = None) -> Result[AdminRecord]:
        """Provision an account; unknown roles fall back to EDITOR."""
        email = _clean(email)
        password = _clean(password)
        name = _clean(name)
        if not email or not password or not name:
            return Err(FailureKind.VALIDATION_ERROR, "Email, password and name are required")

        if self.admins.find_by_email(email):
            return Err(FailureKind.CONFLICT, "Email already exists")

        try:
            admin_role = AdminRole(role)
        except ValueError:
            admin_role = AdminRole.EDITOR

        try:
            admin = self.admins.create(
                email=email,
                password_hash=hash_password(password, self.bcrypt_rounds),
                name=name,
                role=admin_role,
            )
        except IntegrityError:
            # lost a race against a concurrent insert of the same email
            self.admins.rollback()
            return Err(FailureKind.CONFLICT, "Email already exists")

        logger.info(f"Created admin: {admin.email}", extra={"action": "create_admin", "admin_id": admin.id})
        return Ok(admin)

    def deactivate_admin(self, admin_id: str) -> Result[AdminRecord]:
        admin = self.admins.set_active(admin_id, False)
        if not admin:
            return Err(FailureKind.NOT_FOUND, "Admin not found")
        logger.info("Deactivated admin", extra={"action": "deactivate_admin", "admin_id": admin_id})
        return Ok(admin)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _record_last_login(self, admin_id: str) -> None:
        """Best-effort timestamp update; a failure does not block the login."""
        try:
            self.admins.update_last_login(admin_id)
        except SQLAlchemyError:
            self.admins.rollback()
            logger.warning(
                "Could not record last login",
                extra={"action": "login", "admin_id": admin_id},
                exc_info=True,
            )

    @staticmethod
    def _reject_refresh(kind: FailureKind, reason: str, admin_id: Optional[str] = None) -> Err:
        extra = {"action": "refresh", "reason": reason}
        if admin_id:
            extra["admin_id"] = admin_id
        logger.info("Refresh rejected", extra=extra)
        return Err(kind, INVALID_REFRESH_TOKEN)
