"""
Signup and signin endpoints
"""

import logging
from fastapi import APIRouter, status
from app.schemas.auth import UserSignin, Token, SignupResponse
from app.schemas.user import UserCreate
from app.core.security import verify_password, create_access_token
from app.crud.user import get_user_by_username, create_user
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import (
    USER_ALREADY_EXISTS,
    USER_DOES_NOT_EXIST,
    INVALID_CREDENTIALS,
    INTERNAL_ERROR
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_in: UserCreate):
    """Create an account and return a token for it"""
    try:
        existing_user = await get_user_by_username(user_in.username)
        if existing_user:
            raise CustomHTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User already exists, try different username",
                error_code=USER_ALREADY_EXISTS
            )

        user = await create_user(user_in)
        return {
            "message": "User Created Successfully",
            "token": create_access_token(str(user.id)),
        }

    except CustomHTTPException:
        raise
    except Exception:
        logger.exception(f"Signup failed for {user_in.username}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error while signing up.",
            error_code=INTERNAL_ERROR
        )


@router.post("/signin", response_model=Token)
async def signin(credentials: UserSignin):
    try:
        user = await get_user_by_username(credentials.username)
        if not user:
            logger.warning(f"Signin attempt for non-existent user: {credentials.username}")
            raise CustomHTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="User doesn't exist, Register yourself first.",
                error_code=USER_DOES_NOT_EXIST
            )

        if not verify_password(credentials.password, user.password):
            logger.warning(f"Failed signin attempt for user: {user.username}")
            raise CustomHTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid username or password.",
                error_code=INVALID_CREDENTIALS,
                headers={"WWW-Authenticate": "Bearer"},
            )

        return {"token": create_access_token(str(user.id))}

    except CustomHTTPException:
        raise
    except Exception:
        logger.exception(f"Signin failed for {credentials.username}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error while signing in.",
            error_code=INTERNAL_ERROR
        )
