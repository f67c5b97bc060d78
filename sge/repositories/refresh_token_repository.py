"""Refresh token store"""
from typing import List, Optional

from sqlalchemy.orm import Session

from sge.database import utcnow
from sge.models.refresh_token import RefreshToken


class RefreshTokenRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, refresh_token: RefreshToken) -> RefreshToken:
        self.db.add(refresh_token)
        self.db.flush()
        return refresh_token

    def find_by_token(self, token: str, for_update: bool = False) -> Optional[RefreshToken]:
        """Look a token up by value.

        ``for_update`` takes a row lock (PostgreSQL FOR UPDATE; SQLite ignores
        it and serialises writers on its own) so two concurrent rotations of
        the same token cannot both see it active.
        """
        query = self.db.query(RefreshToken).filter(RefreshToken.token == token)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def update(self, refresh_token: RefreshToken) -> RefreshToken:
        self.db.add(refresh_token)
        self.db.flush()
        return refresh_token

    def list_active_by_user(self, user_id: str) -> List[RefreshToken]:
        return (
            self.db.query(RefreshToken)
            .filter(
                RefreshToken.user_id == user_id,
                RefreshToken.revoked_at.is_(None),
                RefreshToken.expires_at > utcnow(),
            )
            .all()
        )
