"""RefreshToken model - opaque refresh tokens with revocation metadata"""
from sqlalchemy import Column, DateTime, Integer, String

from sge.database import Base, utcnow


class RefreshToken(Base):
    """Stores issued refresh tokens.

    Rows are never deleted: revocation only stamps ``revoked_at`` and
    ``reason_revoked`` so the history stays available for audit. ``user_id``
    is not a foreign key, so the rows outlive a deleted user.
    """

    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(128), unique=True, nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    revoked_at = Column(DateTime, nullable=True)
    reason_revoked = Column(String(255), nullable=True)
    replaced_by_token = Column(String(128), nullable=True)

    @property
    def is_expired(self) -> bool:
        return utcnow() >= self.expires_at

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    @property
    def is_active(self) -> bool:
        return not self.is_revoked and not self.is_expired
