import logging
from fastapi import APIRouter, Depends, status
from app.core.security import get_current_user_id
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import (
    USER_NOT_FOUND,
    TARGET_USER_NOT_FOUND,
    ALREADY_FOLLOWING,
    NOT_FOLLOWING,
    CANNOT_FOLLOW_SELF,
    INTERNAL_ERROR
)
from app.crud.user import get_user_by_id, get_users_by_ids, follow_user, unfollow_user
from app.schemas.user import UserPublic
from app.schemas.follow import FollowingResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["follow"])


async def _load_pair(current_user_id: str, target_id: str):
    """Fetch the authenticated user and the target, or raise 401 / 403"""
    current_user = await get_user_by_id(current_user_id)
    if not current_user:
        raise CustomHTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid User",
            error_code=USER_NOT_FOUND
        )

    target = await get_user_by_id(target_id)
    if not target:
        raise CustomHTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid Params UserId",
            error_code=TARGET_USER_NOT_FOUND
        )
    return current_user, target


@router.put("/follow/{user_id}", response_model=MessageResponse)
async def follow(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id)
):
    try:
        current_user, target = await _load_pair(current_user_id, user_id)

        if current_user.id == target.id:
            raise CustomHTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot follow yourself",
                error_code=CANNOT_FOLLOW_SELF
            )

        if target.id in current_user.following:
            raise CustomHTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You are already following this user",
                error_code=ALREADY_FOLLOWING
            )

        await follow_user(current_user, target)
        return {"message": "User followed"}

    except CustomHTTPException:
        raise
    except Exception:
        logger.exception(f"User {current_user_id} failed to follow {user_id}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error while following user",
            error_code=INTERNAL_ERROR
        )


@router.delete("/follow/{user_id}", response_model=MessageResponse)
async def unfollow(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id)
):
    try:
        current_user, target = await _load_pair(current_user_id, user_id)

        if target.id not in current_user.following:
            raise CustomHTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You are not following this user",
                error_code=NOT_FOLLOWING
            )

        await unfollow_user(current_user, target)
        return {"message": "User unfollowed"}

    except CustomHTTPException:
        raise
    except Exception:
        logger.exception(f"User {current_user_id} failed to unfollow {user_id}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error while unfollowing user",
            error_code=INTERNAL_ERROR
        )


@router.get("/following", response_model=FollowingResponse)
async def get_following(current_user_id: str = Depends(get_current_user_id)):
    """Users the authenticated user follows"""
    try:
        current_user = await get_user_by_id(current_user_id)
        if not current_user:
            raise CustomHTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found, Invalid User",
                error_code=USER_NOT_FOUND
            )

        following = await get_users_by_ids(current_user.following)
        return {
            "length": len(following),
            "user": {
                "id": str(current_user.id),
                "following": [UserPublic.from_user(user) for user in following],
            },
        }

    except CustomHTTPException:
        raise
    except Exception:
        logger.exception(f"Fetching following of {current_user_id} failed")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve following list",
            error_code=INTERNAL_ERROR
        )
