import datetime
import logging
from dataclasses import dataclass
from typing import Annotated, Optional

import bcrypt
from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import APIKeyHeader
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from . import models
from .config import Settings
from .database import get_db

logger = logging.getLogger("hotel_booking.auth")

# auto_error is off so that a missing header answers 401, not FastAPI's 403
api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


@dataclass(frozen=True)
class TokenSettings:
    """Signing material shared by the login handler and the auth gate."""
    secret_key: str
    algorithm: str
    expire_hours: int = 24

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSettings":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expire_hours=settings.ACCESS_TOKEN_EXPIRE_HOURS,
        )


def get_token_settings(request: Request) -> TokenSettings:
    # Injected once by create_app()
    return request.app.state.token_settings


# --- Passwords ---

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# --- Tokens ---

def create_access_token(email: str, token_settings: TokenSettings) -> str:
    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=token_settings.expire_hours)
    claims = {"email": email, "exp": expire}
    return jwt.encode(claims, token_settings.secret_key, algorithm=token_settings.algorithm)


def get_role_by_email(db: Session, email: str) -> Optional[models.UserRole]:
    return db.query(models.User.role).filter(models.User.email == email).scalar()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_email_from_token(
        token_settings: Annotated[TokenSettings, Depends(get_token_settings)],
        authorization: Annotated[Optional[str], Depends(api_key_header)],
) -> str:
    """
    Decodes the JWT from the 'Authorization: Bearer ...' header and returns its email claim.
    """
    if not authorization:
        raise _unauthorized("Unauthorized: Missing token")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise _unauthorized("Unauthorized: Invalid token format")

    try:
        payload = jwt.decode(parts[1], token_settings.secret_key, algorithms=[token_settings.algorithm])
    except JWTError as e:
        raise _unauthorized(f"Invalid Token: {e}")

    email = payload.get("email")
    if not isinstance(email, str):
        raise _unauthorized("email not found in token")
    return email


def require_roles(*allowed_roles: models.UserRole):
    """
    Builds a dependency that admits the caller only if their stored role is in allowed_roles.

    The resolved email is returned to the handler and echoed in the X-User-Email header.
    """
    allowed = frozenset(allowed_roles)

    def role_gate(
            response: Response,
            email: Annotated[str, Depends(get_current_email_from_token)],
            db: Session = Depends(get_db),
    ) -> str:
        role = get_role_by_email(db, email)
        if role is None:
            raise _unauthorized("user not found")

        if role not in allowed:
            logger.warning(f"Role {role.value} denied for {email}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden: Insufficient role",
            )

        response.headers["X-User-Email"] = email
        return email

    return role_gate


require_staff = require_roles(models.UserRole.STAFF, models.UserRole.ADMIN)
require_customer = require_roles(models.UserRole.CUSTOMER)
