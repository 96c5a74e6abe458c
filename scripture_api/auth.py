"""Authentication utilities for JWT tokens, password hashing and user lookups."""
from datetime import datetime, timedelta, timezone
from typing import Optional
import inspect
import secrets

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt
from passlib.context import CryptContext

from scripture_api.config import get_settings
from scripture_api.database import get_db_connection

import logging

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

settings = get_settings()

SECRET_KEY = settings.secret_key
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24 * 7  # 7 days
PASSWORD_RESET_TOKEN_TYPE = "password_reset"

USER_COLUMNS = "id, name, email, phone, role, profile_picture, is_active, created_at"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its hash; accounts without a password never match."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def create_password_reset_token(user_id: int) -> str:
    """Short-lived token that only the reset-password route accepts."""
    return create_access_token(
        {"sub": str(user_id), "type": PASSWORD_RESET_TOKEN_TYPE},
        expires_delta=timedelta(minutes=settings.password_reset_expire_minutes),
    )


def decode_password_reset_token(token: str) -> Optional[int]:
    """Return the user id of a valid reset token, or None if invalid, expired or the wrong type."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != PASSWORD_RESET_TOKEN_TYPE or payload.get("sub") is None:
        return None
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        return None


def _extract_token_from_request(request: Optional[Request]) -> Optional[str]:
    if request is None:
        return None

    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        return token

    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    scheme, param = get_authorization_scheme_param(auth_header)
    if scheme.lower() != "bearer":
        return None
    return param


def _decode_user_id(token: str) -> Optional[int]:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") == PASSWORD_RESET_TOKEN_TYPE:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    try:
        return int(user_id)
    except (TypeError, ValueError):
        return None


async def _resolve_dependency_override(request: Optional[Request], dependency):
    """Return override result and flag if FastAPI dependency override exists."""
    if request is None:
        return None, False

    overrides = getattr(getattr(request, "app", None), "dependency_overrides", None)
    if not overrides:
        return None, False

    override = overrides.get(dependency)
    if override is None:
        return None, False

    result = override()
    if inspect.isawaitable(result):
        result = await result
    return result, True


def generate_csrf_token() -> str:
    """Return a random token for CSRF double submit protection."""
    return secrets.token_urlsafe(32)


def set_csrf_cookie(response: Response, token: str) -> None:
    """Persist the CSRF token in a cookie accessible to browser JavaScript."""
    cookie_domain = settings.auth_cookie_domain or None
    response.set_cookie(
        key=settings.csrf_cookie_name,
        value=token,
        max_age=settings.csrf_cookie_max_age,
        httponly=False,
        secure=settings.csrf_cookie_secure,
        samesite=settings.csrf_cookie_samesite,
        domain=cookie_domain,
        path="/",
    )


def clear_csrf_cookie(response: Response) -> None:
    """Remove the CSRF cookie from the client."""
    cookie_domain = settings.auth_cookie_domain or None
    response.delete_cookie(
        key=settings.csrf_cookie_name,
        domain=cookie_domain,
        path="/",
    )


def set_auth_cookie(response: Response, token: str) -> None:
    """Persist the JWT in an HttpOnly cookie."""
    cookie_domain = settings.auth_cookie_domain or None
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.auth_cookie_max_age,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite=settings.auth_cookie_samesite,
        domain=cookie_domain,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    """Remove the authentication cookie from the client."""
    cookie_domain = settings.auth_cookie_domain or None
    response.delete_cookie(
        key=settings.auth_cookie_name,
        domain=cookie_domain,
        path="/",
    )


def start_session(response: Response, user_id: int) -> str:
    """Issue a token for ``user_id`` and set the auth and CSRF cookies."""
    token = create_access_token(data={"sub": str(user_id)})
    set_auth_cookie(response, token)

    csrf_token = generate_csrf_token()
    set_csrf_cookie(response, csrf_token)
    response.headers[settings.csrf_header_name] = csrf_token
    return token


def _convert_user(row: Optional[dict]) -> Optional[dict]:
    """Normalize database rows to plain dicts for downstream consumers."""
    if not row:
        return None
    role = row.get("role") or "user"
    return {
        "id": row["id"],
        "name": row.get("name"),
        "email": row["email"],
        "phone": row.get("phone"),
        "role": role,
        "is_admin": role == "admin",
        "profile_picture": row.get("profile_picture"),
        "is_active": row.get("is_active", True),
        "created_at": row.get("created_at"),
        **({"hashed_password": row["hashed_password"]} if "hashed_password" in row else {})
    }


def get_user_by_email(email: str) -> Optional[dict]:
    """Get a user (including the password hash) by email."""
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                f"SELECT {USER_COLUMNS}, hashed_password FROM users WHERE LOWER(email) = LOWER(%s)",
                (email,)
            )
            return _convert_user(cur.fetchone())


def get_user_by_id(user_id: int) -> Optional[dict]:
    """Get a user by ID from the database."""
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = %s", (user_id,))
            return _convert_user(cur.fetchone())


def get_user_with_password(user_id: int) -> Optional[dict]:
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(f"SELECT {USER_COLUMNS}, hashed_password FROM users WHERE id = %s", (user_id,))
            return _convert_user(cur.fetchone())


def get_user_by_google_id(google_id: str) -> Optional[dict]:
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(f"SELECT {USER_COLUMNS} FROM users WHERE google_id = %s", (google_id,))
            return _convert_user(cur.fetchone())


def create_user(name: str, email: str, password: str, phone: Optional[str] = None) -> dict:
    """Create a new password-based user in the database."""
    hashed_password = get_password_hash(password)
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                f"""
                INSERT INTO users (name, email, hashed_password, phone, role, is_active)
                VALUES (%s, %s, %s, %s, 'user', TRUE)
                RETURNING {USER_COLUMNS}
                """,
                (name, email, hashed_password, phone or None)
            )
            user = cur.fetchone()
            conn.commit()
            return _convert_user(user)


def create_google_user(name: Optional[str], email: str, google_id: str, picture: Optional[str]) -> dict:
    """Create a user that signs in with Google only (no password)."""
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                f"""
                INSERT INTO users (name, email, google_id, profile_picture, role, is_active)
                VALUES (%s, %s, %s, %s, 'user', TRUE)
                RETURNING {USER_COLUMNS}
                """,
                (name or email, email, google_id, picture)
            )
            user = cur.fetchone()
            conn.commit()
            return _convert_user(user)


def link_google_account(user_id: int, google_id: str, picture: Optional[str]) -> Optional[dict]:
    """Attach a Google identity to an existing account."""
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                f"""
                UPDATE users
                SET google_id = %s, profile_picture = COALESCE(%s, profile_picture)
                WHERE id = %s
                RETURNING {USER_COLUMNS}
                """,
                (google_id, picture, user_id)
            )
            user = cur.fetchone()
            conn.commit()
            return _convert_user(user)


def update_user_profile(
    user_id: int,
    name: str,
    phone: Optional[str],
    profile_picture: Optional[str] = None,
) -> Optional[dict]:
    """Update name and phone; the picture only changes when a new one is given."""
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                f"""
                UPDATE users
                SET name = %s, phone = %s, profile_picture = COALESCE(%s, profile_picture)
                WHERE id = %s
                RETURNING {USER_COLUMNS}
                """,
                (name, phone, profile_picture, user_id)
            )
            user = cur.fetchone()
            conn.commit()
            return _convert_user(user)


def update_user_password(user_id: int, new_password: str) -> bool:
    hashed_password = get_password_hash(new_password)
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "UPDATE users SET hashed_password = %s WHERE id = %s",
                (hashed_password, user_id)
            )
            updated = cur.rowcount > 0
            conn.commit()
            return updated


async def get_current_user(
    request: Optional[Request] = None,
    token: Optional[str] = None,
) -> dict:
    """Get the current authenticated user from the JWT token."""

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_value = token or _extract_token_from_request(request)
    if not token_value:
        raise credentials_exception

    user_id = _decode_user_id(token_value)
    if user_id is None:
        raise credentials_exception

    user = get_user_by_id(user_id)
    if user is None:
        raise credentials_exception

    if not user["is_active"]:
        raise HTTPException(status_code=400, detail="Inactive user")

    return user


async def get_current_user_optional(
    request: Optional[Request] = None,
    token: Optional[str] = None,
) -> Optional[dict]:
    """Get the current user if authenticated, otherwise return None."""

    token_value = token or _extract_token_from_request(request)
    if not token_value:
        return None

    user_id = _decode_user_id(token_value)
    if user_id is None:
        return None

    user = get_user_by_id(user_id)
    if user is None or not user.get("is_active"):
        return None

    return user


async def get_current_user_dependency(request: Request) -> dict:
    """Wrapper for FastAPI dependency injection of required current user."""
    override_value = await _resolve_dependency_override(request, get_current_user_dependency)
    if override_value[1]:
        return override_value[0]

    override_value = await _resolve_dependency_override(request, get_current_user)
    if override_value[1]:
        return override_value[0]

    return await get_current_user(request=request)


async def get_current_user_optional_dependency(request: Request) -> Optional[dict]:
    """Wrapper for FastAPI dependency injection of optional current user."""
    override_value = await _resolve_dependency_override(request, get_current_user_optional_dependency)
    if override_value[1]:
        return override_value[0]

    override_value = await _resolve_dependency_override(request, get_current_user_optional)
    if override_value[1]:
        return override_value[0]

    return await get_current_user_optional(request=request)


async def get_current_admin_user(current_user: dict = Depends(get_current_user_dependency)) -> dict:
    """Require current user to be admin."""
    if current_user.get("role") != "admin" and not current_user.get("is_admin", False):
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user
