"""Token issuance and validation - signed access tokens and opaque refresh tokens"""
import base64
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from sge.config import TokenConfig
from sge.database import utcnow
from sge.exceptions import InvalidTokenError, TokenExpiredError
from sge.models.refresh_token import RefreshToken
from sge.models.user import User
from sge.repositories.refresh_token_repository import RefreshTokenRepository
from sge.utils.logger import logger

REFRESH_TOKEN_BYTES = 64

# Claims every token issued here must carry; a token lacking one is rejected
# even if its signature checks out.
_REQUIRED_CLAIMS = {"require_iss": True, "require_aud": True, "require_iat": True, "require_jti": True}


class TokenService:
    """Mints and validates tokens.

    The service holds no state of its own besides the immutable
    :class:`~sge.config.TokenConfig`; refresh tokens are persisted through the
    repository and committed by the caller.
    """

    def __init__(self, config: TokenConfig, refresh_tokens: RefreshTokenRepository):
        self.config = config
        self.refresh_tokens = refresh_tokens

    # ------------------------------------------------------------------
    # Access tokens
    # ------------------------------------------------------------------

    def issue_access_token(self, user: User, roles: Iterable[str]) -> str:
        """Sign and return a JWT access token for the user.

        Args:
            user:  The identity the token is issued for.
            roles: Role names embedded as the ``roles`` claim.

        Returns:
            Compact-serialised JWT string.
        """
        now = int(datetime.now(timezone.utc).timestamp())

        payload: Dict[str, Any] = {
            "sub": str(user.id),
            "unique_name": user.username or "",
            "email": user.email or "",
            "firstName": user.first_name or "",
            "lastName": user.last_name or "",
            "roles": list(roles),
            "jti": str(uuid.uuid4()),
            "iat": now,
            "exp": now + self.config.access_token_minutes * 60,
            "iss": self.config.issuer,
            "aud": self.config.audience,
        }

        return jwt.encode(payload, self.config.secret, algorithm=self.config.algorithm)

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        """Fully validate a bearer token, expiry included.

        Raises:
            TokenExpiredError: the signature is valid but ``exp`` has passed.
            InvalidTokenError: any other verification failure.
        """
        try:
            return self._decode(token, verify_exp=True)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as exc:
            logger.debug(f"JWT decode failed: {exc}")
            raise InvalidTokenError()

    def decode_expired_token(self, token: str) -> Dict[str, Any]:
        """Validate signature, issuer, audience and algorithm but not expiry.

        Used by the refresh flow so a client can trade a just-expired access
        token for a new pair without logging in again.

        Raises:
            InvalidTokenError: on any signature/issuer/audience/algorithm mismatch.
        """
        try:
            return self._decode(token, verify_exp=False)
        except JWTError as exc:
            logger.debug(f"JWT decode failed: {exc}")
            raise InvalidTokenError()

    def _decode(self, token: str, verify_exp: bool) -> Dict[str, Any]:
        # algorithms is a single-entry whitelist: "none" and other HMAC sizes fail here
        return jwt.decode(
            token,
            self.config.secret,
            algorithms=[self.config.algorithm],
            audience=self.config.audience,
            issuer=self.config.issuer,
            options={"verify_exp": verify_exp, **_REQUIRED_CLAIMS},
        )

    # ------------------------------------------------------------------
    # Refresh tokens
    # ------------------------------------------------------------------

    @staticmethod
    def issue_refresh_token() -> str:
        """Return a new opaque refresh token (64 random bytes, base64)."""
        return base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode("ascii")

    def create_refresh_token(self, user_id: str) -> RefreshToken:
        now = utcnow()
        refresh_token = RefreshToken(
            token=self.issue_refresh_token(),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(days=self.config.refresh_token_days),
        )
        return self.refresh_tokens.add(refresh_token)

    def validate_refresh_token(self, token: str, user_id: str, for_update: bool = False) -> bool:
        refresh_token = self.refresh_tokens.find_by_token(token, for_update=for_update)
        if refresh_token is None or refresh_token.user_id != user_id:
            return False
        return refresh_token.is_active

    def revoke_refresh_token(self, token: str, reason: str, replaced_by: Optional[str] = None) -> bool:
        """Revoke one token. Returns False (and does nothing) if it is absent or already inactive."""
        refresh_token = self.refresh_tokens.find_by_token(token)
        if refresh_token is None or not refresh_token.is_active:
            return False

        refresh_token.revoked_at = utcnow()
        refresh_token.reason_revoked = reason
        refresh_token.replaced_by_token = replaced_by
        self.refresh_tokens.update(refresh_token)
        return True

    def revoke_all_user_tokens(self, user_id: str, reason: str) -> int:
        now = utcnow()
        active = self.refresh_tokens.list_active_by_user(user_id)
        for refresh_token in active:
            refresh_token.revoked_at = now
            refresh_token.reason_revoked = reason
            self.refresh_tokens.update(refresh_token)
        return len(active)
