import logging
from fastapi import APIRouter, Depends, status
from app.core.security import get_current_user_id
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import USER_NOT_FOUND, INTERNAL_ERROR
from app.crud.user import get_user_by_id, get_users_by_ids, update_user
from app.schemas.user import UserPublic, UserUpdate
from app.schemas.follow import FollowersResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Profiles"])


def _user_not_found() -> CustomHTTPException:
    return CustomHTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="User not found, Invalid User",
        error_code=USER_NOT_FOUND
    )


def _internal_error(detail: str) -> CustomHTTPException:
    return CustomHTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
        error_code=INTERNAL_ERROR
    )


@router.get("/profile", response_model=UserPublic)
async def get_profile(user_id: str = Depends(get_current_user_id)):
    """The authenticated user's profile, without the password"""
    try:
        user = await get_user_by_id(user_id)
        if not user:
            raise _user_not_found()
        return UserPublic.from_user(user)

    except CustomHTTPException:
        raise
    except Exception:
        logger.exception(f"Fetching profile of {user_id} failed")
        raise _internal_error("Error while fetching user profile")


@router.get("/followers", response_model=FollowersResponse)
async def get_followers(user_id: str = Depends(get_current_user_id)):
    """Follower count and the follower profiles of the authenticated user"""
    try:
        user = await get_user_by_id(user_id)
        if not user:
            raise _user_not_found()

        followers = await get_users_by_ids(user.followers)
        return {
            "length": len(followers),
            "user": {
                "id": str(user.id),
                "followers": [UserPublic.from_user(follower) for follower in followers],
            },
        }

    except CustomHTTPException:
        raise
    except Exception:
        logger.exception(f"Fetching followers of {user_id} failed")
        raise _internal_error("Error while fetching followers")


@router.put("/updateProfile", response_model=MessageResponse)
async def update_profile(
    user_in: UserUpdate,
    user_id: str = Depends(get_current_user_id)
):
    """Overwrite every profile field of the authenticated user"""
    try:
        user = await get_user_by_id(user_id)
        if not user:
            raise _user_not_found()

        await update_user(user, user_in)
        logger.info(f"Updated profile of {user_id}")
        return {"message": "Profile updated successfully"}

    except CustomHTTPException:
        raise
    except Exception:
        logger.exception(f"Updating profile of {user_id} failed")
        raise _internal_error("Error while updating profile")
