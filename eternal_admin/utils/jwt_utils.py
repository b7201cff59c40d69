"""JWT utilities: signing and verification of access and refresh tokens"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from eternal_admin.records import TokenPayload

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class InvalidToken(Exception):
    """Raised when a token fails signature, expiry, or claim checks."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TokenConfig:
    """Secrets and lifetimes for the two token kinds.

    Access and refresh tokens are signed with different secrets so that
    neither kind can be forged from the other's key.
    """
    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"
    access_expire_minutes: int = 15
    refresh_expire_days: int = 7

    def __post_init__(self) -> None:
        if not self.access_secret:
            raise ValueError("JWT_SECRET is required")
        if not self.refresh_secret:
            raise ValueError("JWT_REFRESH_SECRET is required")
        if self.access_secret == self.refresh_secret:
            raise ValueError("JWT_SECRET and JWT_REFRESH_SECRET must differ")

    @property
    def access_expire_seconds(self) -> int:
        return self.access_expire_minutes * 60

    @property
    def refresh_expire_seconds(self) -> int:
        return self.refresh_expire_days * 24 * 60 * 60


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------

class TokenCodec:
    """Stateless issuer/verifier for bearer tokens."""

    def __init__(self, config: TokenConfig):
        self.config = config

    def issue_access_token(self, payload: TokenPayload) -> str:
        return self._sign(
            payload,
            ACCESS_TOKEN_TYPE,
            self.config.access_secret,
            self.config.access_expire_seconds,
        )

    def issue_refresh_token(self, payload: TokenPayload) -> str:
        return self._sign(
            payload,
            REFRESH_TOKEN_TYPE,
            self.config.refresh_secret,
            self.config.refresh_expire_seconds,
        )

    def verify_access_token(self, token: str) -> TokenPayload:
        """Decode an access token.

        Raises:
            InvalidToken: bad signature, expired, malformed, or not an access token.
        """
        return self._verify(token, ACCESS_TOKEN_TYPE, self.config.access_secret)

    def verify_refresh_token(self, token: str) -> TokenPayload:
        """Decode a refresh token.

        Raises:
            InvalidToken: bad signature, expired, malformed, or not a refresh token.
        """
        return self._verify(token, REFRESH_TOKEN_TYPE, self.config.refresh_secret)

    def _sign(self, payload: TokenPayload, token_type: str, secret: str, expire_seconds: int) -> str:
        now = int(datetime.now(timezone.utc).timestamp())

        claims: Dict[str, Any] = {
            "sub": payload.admin_id,
            "email": payload.email,
            "role": payload.role,
            "type": token_type,
            # two tokens minted in the same second must still differ
            "jti": str(uuid.uuid4()),
            "iat": now,
            "exp": now + expire_seconds,
        }
        return jwt.encode(claims, secret, algorithm=self.config.algorithm)

    def _verify(self, token: str, token_type: str, secret: str) -> TokenPayload:
        try:
            claims = jwt.decode(token, secret, algorithms=[self.config.algorithm])
        except JWTError as exc:
            raise InvalidToken(str(exc)) from exc

        if claims.get("type") != token_type:
            raise InvalidToken(f"expected a {token_type} token")

        try:
            return TokenPayload(
                admin_id=claims["sub"],
                email=claims["email"],
                role=claims["role"],
            )
        except KeyError as exc:
            raise InvalidToken(f"missing claim: {exc.args[0]}") from exc
