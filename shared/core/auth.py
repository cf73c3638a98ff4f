import uuid
from datetime import datetime, timedelta, timezone
from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.orm import Session

from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken
from shared.core.database import get_grocery_db as get_db

security = HTTPBearer()


def create_access_token(data: dict, expires_minutes: int | None = None) -> str:
    """Sign a bearer token with the shared secret.

    Tokens are normally issued by the external auth service; this exists for
    operators and tests that need to mint one against the same secret.
    """
    payload = data.copy()
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES
    payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    if "user_id" in payload:
        payload["user_id"] = str(payload["user_id"])

    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        return UserToken(**payload)
    except (JWTError, ValidationError):
        return error_response(
            message="Invalid or expired token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )


def validate_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    user_data = verify_token(credentials.credentials)

    user = db.query(Users).filter(Users.id == _as_uuid(user_data.user_id)).first()

    if not user:
        return error_response(
            message="User not found",
            status_code=AppStatusCode.AUTHENTICATION_USER_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if user.status.lower() != "active":
        return error_response(
            message="User is not active. Access denied",
            status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE,
            http_status=status.HTTP_403_FORBIDDEN
        )

    user_data.name = user.name
    user_data.phone = user.phone
    user_data.status = user.status
    return user_data


def _as_uuid(value: str):
    try:
        return uuid.UUID(value)
    except ValueError:
        return error_response(
            message="Invalid token structure",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )
