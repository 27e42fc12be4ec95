from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Header, status
from app.core.config import settings
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import NOT_AUTHENTICATED, INVALID_TOKEN

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unknown or malformed hash
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(
    user_id: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "type": "access",
    }

    if expires_delta is None and settings.ACCESS_TOKEN_EXPIRE_MINUTES:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    if expires_delta is not None:
        payload["exp"] = int((now + expires_delta).timestamp())

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def verify_token(token: str, expected_type: Optional[str] = "access") -> dict:
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
        if expected_type and payload.get("type") != expected_type:
            raise JWTError("Invalid token type")
        if not payload.get("sub"):
            raise JWTError("Token has no subject")
        return payload
    except JWTError:
        raise CustomHTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            error_code=INVALID_TOKEN,
            headers={"WWW-Authenticate": "Bearer"},
        )

def extract_token(authorization: Optional[str]) -> Optional[str]:
    """Accept both "Bearer <token>" and a bare token in the Authorization header."""
    if not authorization:
        return None
    parts = authorization.strip().split()
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None

async def get_current_user_id(
    authorization: Optional[str] = Header(None)
) -> str:
    """
    Resolve the authenticated user id from the Authorization header.
    Does not check that the user still exists; handlers do that.
    """
    token = extract_token(authorization)
    if not token:
        raise CustomHTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            error_code=NOT_AUTHENTICATED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(token, expected_type="access")
    return payload["sub"]
