"""Authentication routes: registration, login, Google sign-in, profile and password management."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from psycopg2 import IntegrityError

from scripture_api.models.schemas import (
    AuthResponse,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    GoogleLoginRequest,
    MessageResponse,
    PasswordChange,
    ProfileUpdate,
    ProfileUpdateResponse,
    ResetPasswordRequest,
    User,
    UserCreate,
    UserLogin,
)
from scripture_api.auth import (
    clear_auth_cookie,
    clear_csrf_cookie,
    create_google_user,
    create_password_reset_token,
    create_user,
    decode_password_reset_token,
    get_current_user_dependency,
    get_user_by_email,
    get_user_by_google_id,
    get_user_with_password,
    link_google_account,
    start_session,
    update_user_password,
    update_user_profile,
    verify_password,
)
from scripture_api.config import get_settings
from scripture_api.services.google_auth_service import GoogleAuthService, get_google_auth_service
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])
settings = get_settings()

CurrentUser = Annotated[dict, Depends(get_current_user_dependency)]

FORGOT_PASSWORD_MESSAGE = "If an account with this email exists, a password reset link will be sent."


def _auth_payload(user: dict, token: str) -> dict:
    return {"user": User.model_validate(user).model_dump(), "token": token}


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, response: Response):
    """Register a new user and start a session."""
    try:
        if get_user_by_email(user_data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="An account with this email already exists"
            )

        user = create_user(
            name=user_data.name.strip(),
            email=user_data.email,
            password=user_data.password,
            phone=user_data.phone,
        )
        token = start_session(response, user["id"])

        logger.info(f"New user registered: {user['email']}")
        return _auth_payload(user, token)

    except HTTPException:
        raise
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An account with this email already exists"
        )
    except Exception as e:
        logger.error(f"Registration error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed"
        )


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin, response: Response):
    """Authenticate with email and password; Google-only accounts cannot log in this way."""
    user = get_user_by_email(credentials.email)

    if not user or not verify_password(credentials.password, user.get("hashed_password")):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials",
        )

    if not user["is_active"]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user account"
        )

    token = start_session(response, user["id"])
    logger.info(f"User logged in: {user['email']}")
    return _auth_payload(user, token)


@router.post("/google", response_model=AuthResponse)
async def google_login(
    payload: GoogleLoginRequest,
    response: Response,
    google: GoogleAuthService = Depends(get_google_auth_service),
):
    """Sign in with a Google ID token, linking or creating the account as needed."""
    if not google.is_configured():
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Google OAuth not configured"
        )

    identity = await google.verify_id_token(payload.credential)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Google authentication failed"
        )

    try:
        user = get_user_by_google_id(identity["sub"])
        if user is None:
            existing = get_user_by_email(identity["email"])
            if existing is not None:
                user = link_google_account(existing["id"], identity["sub"], identity.get("picture"))
                logger.info(f"Linked Google account to user {existing['id']}")
            else:
                user = create_google_user(
                    name=identity.get("name"),
                    email=identity["email"],
                    google_id=identity["sub"],
                    picture=identity.get("picture"),
                )
                logger.info(f"New Google user registered: {identity['email']}")
    except Exception as e:
        logger.error(f"Google sign-in error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Google authentication failed"
        )

    if not user.get("is_active", True):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user account"
        )

    token = start_session(response, user["id"])
    return _auth_payload(user, token)


@router.get("/profile")
async def get_profile(current_user: CurrentUser):
    return {"user": User.model_validate(current_user).model_dump()}


@router.get("/me")
async def get_current_user_info(current_user: CurrentUser):
    """Get current authenticated user information."""
    return {"user": User.model_validate(current_user).model_dump()}


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(data: ProfileUpdate, current_user: CurrentUser):
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name is required")

    try:
        user = update_user_profile(
            current_user["id"],
            name=name,
            phone=data.phone or None,
            profile_picture=data.profile_picture or None,
        )
    except Exception as e:
        logger.error(f"Error updating profile for user {current_user['id']}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile"
        )

    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return {"user": User.model_validate(user).model_dump(), "message": "Profile updated successfully"}


@router.put("/change-password", response_model=MessageResponse)
async def change_password(data: PasswordChange, current_user: CurrentUser):
    user = get_user_with_password(current_user["id"])
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not verify_password(data.old_password, user.get("hashed_password")):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )

    update_user_password(user["id"], data.new_password)
    logger.info(f"Password changed for user {user['id']}")
    return {"message": "Password changed successfully"}


@router.post("/forgot-password", response_model=ForgotPasswordResponse)
async def forgot_password(data: ForgotPasswordRequest):
    """Issue a reset token; the response never reveals whether the email exists."""
    result = {"message": FORGOT_PASSWORD_MESSAGE}

    user = get_user_by_email(data.email)
    if user is None:
        return result

    reset_token = create_password_reset_token(user["id"])
    logger.info(f"Password reset requested for user {user['id']}")
    if settings.debug:
        logger.info(f"Password reset token for {user['email']}: {reset_token}")
        result["reset_token"] = reset_token
    return result


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(data: ResetPasswordRequest):
    user_id = decode_password_reset_token(data.token)
    if user_id is None or not update_user_password(user_id, data.new_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset token"
        )

    logger.info(f"Password reset for user {user_id}")
    return {"message": "Password reset successfully"}


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response):
    """Terminate the current session by clearing the auth cookie."""
    clear_auth_cookie(response)
    clear_csrf_cookie(response)
    response.status_code = status.HTTP_204_NO_CONTENT
    return None
