"""Tests for access token signing and refresh token storage"""
from datetime import timedelta

import pytest
from jose import jwt
from sqlalchemy.orm import Session

from sge.config import token_config
from sge.database import utcnow
from sge.exceptions import InvalidTokenError, TokenExpiredError
from sge.models.user import User
from sge.repositories import RefreshTokenRepository
from sge.services.token_service import TokenService


@pytest.fixture
def user() -> User:
    return User(
        id="3f1c7f5e-4e8a-4d4c-9a57-0d6f5b8a1c2e",
        email="a@x.com",
        username="alice",
        first_name="Alice",
        last_name="Martin",
    )


def _service(db: Session, **overrides) -> TokenService:
    return TokenService(token_config._replace(**overrides), RefreshTokenRepository(db))


def _forge(claims: dict, secret: str = token_config.secret, algorithm: str = "HS256") -> str:
    return jwt.encode(claims, secret, algorithm=algorithm)


def test_access_token_claims(token_service: TokenService, user: User):
    """Test that the access token carries identity, roles and registered claims"""
    token = token_service.issue_access_token(user, ["User", "Manager"])
    claims = token_service.decode_access_token(token)

    assert claims["sub"] == user.id
    assert claims["unique_name"] == "alice"
    assert claims["email"] == "a@x.com"
    assert claims["firstName"] == "Alice"
    assert claims["lastName"] == "Martin"
    assert claims["roles"] == ["User", "Manager"]
    assert claims["iss"] == token_config.issuer
    assert claims["aud"] == token_config.audience
    assert claims["exp"] - claims["iat"] == token_config.access_token_minutes * 60
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_access_tokens_have_unique_jti(token_service: TokenService, user: User):
    first = token_service.decode_access_token(token_service.issue_access_token(user, []))
    second = token_service.decode_access_token(token_service.issue_access_token(user, []))
    assert first["jti"] != second["jti"]


def test_expired_token_accepted_by_decode_expired(db: Session, user: User):
    """Test that an expired token still decodes when expiry is not checked"""
    service = _service(db, access_token_minutes=-5)
    token = service.issue_access_token(user, ["User"])

    with pytest.raises(TokenExpiredError):
        service.decode_access_token(token)

    claims = service.decode_expired_token(token)
    assert claims["sub"] == user.id


def test_decode_expired_rejects_wrong_secret(db: Session, user: User):
    token = _service(db, secret="another-secret-entirely-0123456789").issue_access_token(user, [])

    with pytest.raises(InvalidTokenError):
        _service(db).decode_expired_token(token)


def test_decode_expired_rejects_altered_signature(token_service: TokenService, user: User):
    """Test that a payload paired with another token's signature is rejected"""
    header, payload, _ = token_service.issue_access_token(user, ["User"]).split(".")
    other = token_service.issue_access_token(user, ["Admin"])
    tampered = ".".join([header, payload, other.split(".")[2]])

    with pytest.raises(InvalidTokenError):
        token_service.decode_expired_token(tampered)


def test_decode_expired_rejects_wrong_audience(db: Session, user: User):
    token = _service(db, audience="Someone.Else").issue_access_token(user, [])

    with pytest.raises(InvalidTokenError):
        _service(db).decode_expired_token(token)


def test_decode_expired_rejects_wrong_issuer(db: Session, user: User):
    token = _service(db, issuer="Rogue.API").issue_access_token(user, [])

    with pytest.raises(InvalidTokenError):
        _service(db).decode_expired_token(token)


@pytest.mark.parametrize("algorithm", ["HS384", "HS512"])
def test_decode_expired_rejects_other_algorithms(token_service: TokenService, user: User, algorithm: str):
    """Test that only the configured algorithm is accepted, even with the right secret"""
    token = token_service.issue_access_token(user, [])
    claims = jwt.get_unverified_claims(token)

    with pytest.raises(InvalidTokenError):
        token_service.decode_expired_token(_forge(claims, algorithm=algorithm))


@pytest.mark.parametrize("missing", ["iss", "aud"])
def test_decode_requires_issuer_and_audience(token_service: TokenService, user: User, missing: str):
    claims = jwt.get_unverified_claims(token_service.issue_access_token(user, []))
    del claims[missing]

    with pytest.raises(InvalidTokenError):
        token_service.decode_expired_token(_forge(claims))


def test_issue_refresh_token_is_random_base64():
    first = TokenService.issue_refresh_token()
    second = TokenService.issue_refresh_token()

    assert first != second
    # 64 bytes -> 88 base64 characters
    assert len(first) == 88


def test_fresh_refresh_token_is_active(db: Session, token_service: TokenService):
    refresh = token_service.create_refresh_token("user-1")
    db.commit()

    assert refresh.is_active
    assert refresh.expires_at - refresh.created_at == timedelta(days=token_config.refresh_token_days)
    assert token_service.validate_refresh_token(refresh.token, "user-1")


def test_validate_refresh_token_fails_closed(db: Session, token_service: TokenService):
    """Test that unknown, foreign and expired tokens do not validate"""
    refresh = token_service.create_refresh_token("user-1")
    expired = token_service.create_refresh_token("user-1")
    expired.expires_at = utcnow() - timedelta(seconds=1)
    db.commit()

    assert not token_service.validate_refresh_token("not-a-token", "user-1")
    assert not token_service.validate_refresh_token(refresh.token, "user-2")
    assert not token_service.validate_refresh_token(expired.token, "user-1")


def test_revoke_refresh_token(db: Session, token_service: TokenService):
    refresh = token_service.create_refresh_token("user-1")
    db.commit()

    assert token_service.revoke_refresh_token(refresh.token, "replaced", replaced_by="next-token")
    db.commit()

    assert refresh.reason_revoked == "replaced"
    assert refresh.replaced_by_token == "next-token"
    assert refresh.revoked_at is not None
    assert not token_service.validate_refresh_token(refresh.token, "user-1")

    # Second revocation is a no-op
    assert not token_service.revoke_refresh_token(refresh.token, "logout")
    assert refresh.reason_revoked == "replaced"


def test_revoke_all_user_tokens(db: Session, token_service: TokenService):
    mine = [token_service.create_refresh_token("user-1") for _ in range(3)]
    theirs = token_service.create_refresh_token("user-2")
    token_service.revoke_refresh_token(mine[0].token, "manual revocation")
    db.commit()

    assert token_service.revoke_all_user_tokens("user-1", "logout") == 2
    db.commit()

    assert all(not token.is_active for token in mine)
    assert {token.reason_revoked for token in mine[1:]} == {"logout"}
    assert theirs.is_active
