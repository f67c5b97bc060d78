"""Authentication endpoints - register, login, refresh, logout and profile"""
from fastapi import APIRouter, Depends, Request, status

from sge.api.deps import CurrentUser, get_auth_service, get_current_user, require_admin
from sge.exceptions import InvalidCredentialsError
from sge.middleware.rate_limit import get_rate_limit, limiter
from sge.models.user import User
from sge.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    RevokeTokenRequest,
    UpdateUserRequest,
    UserResponse,
)
from sge.services.auth_service import AuthResult, AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        phone_number=user.phone_number,
        roles=user.role_names,
        employee_id=user.employee_id,
    )


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        expires_at=result.expires_at,
        user=_user_response(result.user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(get_rate_limit("register"))
def register(
    request: Request,
    data: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Create an account with the ``User`` role and return a token pair

    Fails with 409 when the email or username is taken and 400 when the
    password breaks the policy.
    """
    return _auth_response(auth.register(data))


@router.post("/login", response_model=AuthResponse)
@limiter.limit(get_rate_limit("login"))
def login(
    request: Request,
    data: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Exchange email and password for an access/refresh token pair"""
    return _auth_response(auth.login(data.email, data.password))


@router.post("/refresh", response_model=AuthResponse)
@limiter.limit(get_rate_limit("refresh"))
def refresh(
    request: Request,
    data: RefreshRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Rotate a refresh token

    The access token may already be expired but must otherwise be valid.
    The presented refresh token is revoked and cannot be used again.
    """
    return _auth_response(auth.refresh(data.access_token, data.refresh_token))


@router.post("/logout", response_model=MessageResponse)
def logout(
    current: CurrentUser = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke all of the caller's refresh tokens"""
    auth.logout(current.user_id)
    return MessageResponse(message="Logged out successfully.")


@router.post("/revoke-token", response_model=MessageResponse)
def revoke_token(
    data: RevokeTokenRequest,
    _: CurrentUser = Depends(require_admin),
    auth: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke a single refresh token by value (Admin only)"""
    auth.revoke_token(data.refresh_token)
    return MessageResponse(message="Token revoked successfully.")


@router.get("/me", response_model=UserResponse)
def me(
    current: CurrentUser = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    user = auth.get_current_user(current.user_id)
    if user is None:
        raise InvalidCredentialsError()
    return _user_response(user)


@router.put("/update", response_model=UserResponse)
def update_me(
    data: UpdateUserRequest,
    current: CurrentUser = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Patch the caller's profile; changing the email also changes the username"""
    return _user_response(auth.update_user(current.user_id, data))


@router.delete("/delete", response_model=MessageResponse)
def delete_me(
    current: CurrentUser = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Delete the caller's account after revoking its refresh tokens"""
    if not auth.delete_user(current.user_id):
        raise InvalidCredentialsError()
    return MessageResponse(message="Account deleted.")
