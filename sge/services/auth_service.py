"""Authentication orchestration - register, login, refresh rotation and logout"""
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Iterator, List, NamedTuple, Optional

from sqlalchemy.orm import Session

from sge.database import transaction, utcnow
from sge.exceptions import (
    EmployeeNotFoundError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    SGEError,
    UserAlreadyExistsError,
    UserNotActiveError,
    UserRegistrationError,
)
from sge.middleware.monitoring import record_auth_event, record_token_revocation
from sge.models.employee import Employee
from sge.models.user import User
from sge.repositories.user_repository import UserRepository
from sge.schemas.auth import RegisterRequest, UpdateUserRequest
from sge.services.token_service import TokenService
from sge.utils.logger import logger

DEFAULT_ROLE = "User"

REASON_REPLACED = "replaced"
REASON_LOGOUT = "logout"
REASON_MANUAL = "manual revocation"
REASON_ACCOUNT_DELETED = "account deleted"


class AuthResult(NamedTuple):
    """A freshly issued access/refresh pair and the identity it belongs to."""
    access_token: str
    refresh_token: str
    expires_at: datetime
    user: User
    roles: List[str]


@contextmanager
def _auth_event(event: str) -> Iterator[None]:
    try:
        yield
    except SGEError as exc:
        record_auth_event(event, exc.error_code)
        logger.warning(
            f"{event} failed: {exc.message}",
            extra={"action": event, "error_code": exc.error_code},
        )
        raise
    record_auth_event(event)


def _provided(value: Optional[str]) -> bool:
    """True for a patch value that is neither missing nor blank"""
    return bool(value and value.strip())


class AuthService:
    """Coordinates the credential store and the token service.

    Every public operation is a single unit of work: the session is committed
    once at the end, and any exception rolls back everything the operation
    staged (no half-issued pair, no half-applied revocation).
    """

    def __init__(self, db: Session, token_service: TokenService, users: UserRepository):
        self.db = db
        self.tokens = token_service
        self.users = users

    def register(self, data: RegisterRequest) -> AuthResult:
        with _auth_event("register"), transaction(self.db):
            if self.users.find_by_email(data.email):
                raise UserAlreadyExistsError(data.email, kind="email")
            if self.users.find_by_username(data.username):
                raise UserAlreadyExistsError(data.username, kind="username")
            if data.confirm_password is not None and data.confirm_password != data.password:
                raise UserRegistrationError(["Passwords do not match."])
            if data.employee_id is not None and self.db.get(Employee, data.employee_id) is None:
                raise EmployeeNotFoundError(data.employee_id)

            user = User(
                email=data.email,
                username=data.username,
                first_name=data.first_name,
                last_name=data.last_name,
                employee_id=data.employee_id,
                is_active=True,
                created_at=utcnow(),
            )
            self.users.create(user, data.password)
            self.users.add_role(user, DEFAULT_ROLE)

            result = self._issue_pair(user)

        logger.info(f"User registered: {user.email}", extra={"user_id": user.id, "action": "register"})
        return result

    def login(self, email: str, password: str) -> AuthResult:
        with _auth_event("login"), transaction(self.db):
            user = self.users.find_by_email(email)
            if user is None or not self.users.check_password(user, password):
                raise InvalidCredentialsError()
            # Only reveal the account state to a caller who knows the password
            if not user.is_active:
                raise UserNotActiveError()

            result = self._issue_pair(user)

        logger.info(f"User logged in: {user.email}", extra={"user_id": user.id, "action": "login"})
        return result

    def refresh(self, access_token: str, refresh_token: str) -> AuthResult:
        """Trade a (possibly expired) access token and its refresh token for a new pair.

        The presented refresh token is revoked as ``replaced`` and points at
        its successor, so it can never be redeemed twice.
        """
        with _auth_event("refresh"), transaction(self.db):
            claims = self.tokens.decode_expired_token(access_token)
            user_id = claims.get("sub")
            if not user_id:
                raise InvalidRefreshTokenError()

            if not self.tokens.validate_refresh_token(refresh_token, user_id, for_update=True):
                raise InvalidRefreshTokenError()

            user = self.users.find_by_id(user_id)
            if user is None or not user.is_active:
                raise UserNotActiveError()

            result = self._issue_pair(user)
            self.tokens.revoke_refresh_token(refresh_token, REASON_REPLACED, replaced_by=result.refresh_token)

        record_token_revocation(REASON_REPLACED)
        logger.info("Refresh token rotated", extra={"user_id": user_id, "action": "refresh"})
        return result

    def logout(self, user_id: str) -> int:
        """Revoke every active refresh token of the user.

        Access tokens already handed out stay valid until they expire.
        """
        with _auth_event("logout"), transaction(self.db):
            count = self.tokens.revoke_all_user_tokens(user_id, REASON_LOGOUT)

        record_token_revocation(REASON_LOGOUT, count)
        logger.info(
            f"User logged out, {count} refresh token(s) revoked",
            extra={"user_id": user_id, "action": "logout"},
        )
        return count

    def revoke_token(self, token: str) -> bool:
        with _auth_event("revoke"), transaction(self.db):
            revoked = self.tokens.revoke_refresh_token(token, REASON_MANUAL)

        if revoked:
            record_token_revocation(REASON_MANUAL)
        logger.info(f"Manual refresh token revocation (revoked={revoked})", extra={"action": "revoke_token"})
        return revoked

    def get_current_user(self, user_id: str) -> Optional[User]:
        return self.users.find_by_id(user_id)

    def update_user(self, user_id: str, data: UpdateUserRequest) -> User:
        """Apply a profile patch. Missing or blank fields keep their current value.

        The username tracks the email address, so changing one changes both.
        """
        with transaction(self.db):
            user = self.users.find_by_id(user_id)
            if user is None:
                raise InvalidCredentialsError()

            if _provided(data.first_name):
                user.first_name = data.first_name
            if _provided(data.last_name):
                user.last_name = data.last_name
            if _provided(data.phone_number):
                user.phone_number = data.phone_number

            if _provided(data.email) and data.email.lower() != user.email.lower():
                other = self.users.find_by_email(data.email)
                if other is not None and other.id != user.id:
                    raise UserAlreadyExistsError(data.email, kind="email")
                # The new email also becomes the username, which must be free too
                other = self.users.find_by_username(data.email)
                if other is not None and other.id != user.id:
                    raise UserAlreadyExistsError(data.email, kind="username")
                user.email = data.email
                user.username = data.email

            self.users.update(user)

        logger.info("User profile updated", extra={"user_id": user_id, "action": "update_user"})
        return user

    def delete_user(self, user_id: str) -> bool:
        with transaction(self.db):
            user = self.users.find_by_id(user_id)
            if user is None:
                return False

            count = self.tokens.revoke_all_user_tokens(user_id, REASON_ACCOUNT_DELETED)
            self.users.delete(user)

        record_token_revocation(REASON_ACCOUNT_DELETED, count)
        logger.info("User account deleted", extra={"user_id": user_id, "action": "delete_user"})
        return True

    def _issue_pair(self, user: User) -> AuthResult:
        roles = self.users.get_roles(user)
        access_token = self.tokens.issue_access_token(user, roles)
        refresh = self.tokens.create_refresh_token(user.id)

        now = utcnow()
        user.last_login_at = now
        self.users.update(user)

        return AuthResult(
            access_token=access_token,
            refresh_token=refresh.token,
            expires_at=now + timedelta(minutes=self.tokens.config.access_token_minutes),
            user=user,
            roles=roles,
        )
