"""
User CRUD operations:
- Account creation and lookup
- Profile updates
- Follow/unfollow, keeping User.following and User.followers in step
"""
import logging
from datetime import datetime
from typing import List, Optional, Union

from beanie import PydanticObjectId
from beanie.operators import AddToSet, In, Pull, Set
from fastapi import status
from pymongo.errors import DuplicateKeyError

from app.core.error_codes import USER_ALREADY_EXISTS
from app.core.exceptions import CustomHTTPException
from app.core.security import get_password_hash
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

UserId = Union[str, PydanticObjectId]


def _as_object_id(user_id: UserId) -> Optional[PydanticObjectId]:
    if isinstance(user_id, PydanticObjectId):
        return user_id
    if not PydanticObjectId.is_valid(str(user_id)):
        return None
    return PydanticObjectId(str(user_id))


def _username_taken() -> CustomHTTPException:
    return CustomHTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="User already exists, try different username",
        error_code=USER_ALREADY_EXISTS
    )


async def get_user_by_id(user_id: UserId) -> Optional[User]:
    """Retrieve user by id; a malformed id is treated as not found"""
    object_id = _as_object_id(user_id)
    if object_id is None:
        return None
    return await User.get(object_id)


async def get_user_by_username(username: str) -> Optional[User]:
    return await User.find_one(User.username == username)


async def get_users_by_ids(user_ids: List[UserId]) -> List[User]:
    object_ids = [oid for oid in (_as_object_id(user_id) for user_id in user_ids) if oid is not None]
    if not object_ids:
        return []
    users = await User.find(In(User.id, object_ids)).to_list()
    # Keep the order of the id list (follow order), not collection order
    by_id = {user.id: user for user in users}
    return [by_id[oid] for oid in object_ids if oid in by_id]


async def create_user(user_in: UserCreate) -> User:
    """
    Create a new account with a hashed password.
    The unique index on username catches signups racing past the route's lookup.
    """
    user = User(
        username=user_in.username,
        password=get_password_hash(user_in.password),
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        about=user_in.about,
    )
    try:
        await user.insert()
    except DuplicateKeyError:
        raise _username_taken()
    logger.info(f"Created user {user.id} ({user.username})")
    return user


async def update_user(user: User, user_in: UserUpdate) -> None:
    """Overwrite every profile field, rehashing the password"""
    try:
        await User.find_one(User.id == user.id).update(
            Set({
                User.username: user_in.username,
                User.password: get_password_hash(user_in.password),
                User.first_name: user_in.first_name,
                User.last_name: user_in.last_name,
                User.about: user_in.about,
                User.updated_at: datetime.utcnow(),
            })
        )
    except DuplicateKeyError:
        raise _username_taken()


async def _add_to_set(user_id: PydanticObjectId, field: str, value: PydanticObjectId) -> None:
    await User.find_one(User.id == user_id).update(AddToSet({field: value}))


async def _pull(user_id: PydanticObjectId, field: str, value: PydanticObjectId) -> None:
    await User.find_one(User.id == user_id).update(Pull({field: value}))


async def _compensate(undo, user_id: PydanticObjectId, field: str, value: PydanticObjectId) -> None:
    """Run a reverting write; a failure is logged so the caller's original error wins"""
    try:
        await undo(user_id, field, value)
    except Exception:
        logger.error(
            f"Reverting {user_id}.{field} for {value} failed, relationship left asymmetric",
            exc_info=True
        )


async def follow_user(follower: User, target: User) -> None:
    """
    Add target to follower.following and follower to target.followers.

    The two writes are separate updates. If the second one fails the first is
    pulled back out so the pair stays symmetric, then the error propagates.
    A crash between the two writes still leaves them asymmetric.
    """
    await _add_to_set(follower.id, "following", target.id)
    try:
        await _add_to_set(target.id, "followers", follower.id)
    except Exception:
        logger.error(
            f"Adding {follower.id} to followers of {target.id} failed, "
            f"reverting {follower.id}.following",
            exc_info=True
        )
        await _compensate(_pull, follower.id, "following", target.id)
        raise
    logger.info(f"User {follower.id} followed {target.id}")


async def unfollow_user(follower: User, target: User) -> None:
    """Inverse of follow_user, with the same compensation on a failed second write"""
    await _pull(follower.id, "following", target.id)
    try:
        await _pull(target.id, "followers", follower.id)
    except Exception:
        logger.error(
            f"Removing {follower.id} from followers of {target.id} failed, "
            f"restoring {follower.id}.following",
            exc_info=True
        )
        await _compensate(_add_to_set, follower.id, "following", target.id)
        raise
    logger.info(f"User {follower.id} unfollowed {target.id}")
