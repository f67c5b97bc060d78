"""API dependencies for authentication, authorization and service wiring.

Protected endpoints take ``Authorization: Bearer <JWT>``. The token is fully
validated (signature, issuer, audience, algorithm and expiry) by
:meth:`TokenService.decode_access_token`; role checks read the ``roles``
claim, so a role change takes effect on the next issued token.
"""
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sge.config import settings, token_config
from sge.database import get_db
from sge.exceptions import ForbiddenError, InvalidTokenError
from sge.repositories import (
    AttendanceRepository,
    DepartmentRepository,
    EmployeeRepository,
    LeaveRequestRepository,
    RefreshTokenRepository,
    UserRepository,
)
from sge.services import (
    AttendanceService,
    AuthService,
    DepartmentService,
    EmployeeService,
    LeaveRequestService,
    TokenService,
)

_bearer_scheme = HTTPBearer(auto_error=False)

ROLE_ADMIN = "Admin"
ROLE_MANAGER = "Manager"
ROLE_USER = "User"


class CurrentUser(NamedTuple):
    """Identity resolved from a validated access token."""
    user_id: str
    username: str
    email: str
    roles: List[str]

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "CurrentUser":
        roles = claims.get("roles") or []
        if isinstance(roles, str):
            roles = [roles]
        return cls(
            user_id=claims["sub"],
            username=claims.get("unique_name", ""),
            email=claims.get("email", ""),
            roles=list(roles),
        )

    def has_any_role(self, *roles: str) -> bool:
        return any(role in self.roles for role in roles)


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

def get_token_service(db: Session = Depends(get_db)) -> TokenService:
    return TokenService(token_config, RefreshTokenRepository(db))


def get_auth_service(
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(db, token_service, UserRepository(db, settings.PASSWORD_MIN_LENGTH))


def get_department_service(db: Session = Depends(get_db)) -> DepartmentService:
    return DepartmentService(db, DepartmentRepository(db))


def get_employee_service(db: Session = Depends(get_db)) -> EmployeeService:
    return EmployeeService(db, EmployeeRepository(db), DepartmentRepository(db))


def get_attendance_service(db: Session = Depends(get_db)) -> AttendanceService:
    return AttendanceService(db, AttendanceRepository(db), EmployeeRepository(db))


def get_leave_request_service(db: Session = Depends(get_db)) -> LeaveRequestService:
    return LeaveRequestService(
        db,
        LeaveRequestRepository(db),
        EmployeeRepository(db),
        annual_leave_days=settings.ANNUAL_LEAVE_DAYS,
    )


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> CurrentUser:
    """Require a valid bearer access token.

    Raises:
        InvalidTokenError: no token, or a token that fails validation.
        TokenExpiredError: a well-formed token past its ``exp``.
    """
    if not credentials:
        raise InvalidTokenError("Authorization: Bearer <token> header required.")

    claims = token_service.decode_access_token(credentials.credentials)
    if not claims.get("sub"):
        raise InvalidTokenError()

    current = CurrentUser.from_claims(claims)
    # Lets the rate limiter key on the user instead of the client address
    request.state.user_id = current.user_id
    return current


def require_role(*roles: str) -> Callable:
    """Return a FastAPI dependency that admits callers holding any of ``roles``.

    Usage::

        @router.post("")
        def endpoint(user: CurrentUser = Depends(require_role("Admin", "Manager"))):
            ...
    """

    def _role_dep(current: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not current.has_any_role(*roles):
            raise ForbiddenError(f"One of the roles {', '.join(roles)} is required.")
        return current

    # Give FastAPI a unique name so it doesn't collapse distinct dependencies
    _role_dep.__name__ = f"require_role_{'_'.join(role.lower() for role in roles)}"
    return _role_dep


require_manager = require_role(ROLE_ADMIN, ROLE_MANAGER)
require_admin = require_role(ROLE_ADMIN)
