from pydantic import BaseModel
from typing import List
from app.schemas.user import UserPublic

class MessageResponse(BaseModel):
    message: str

class FollowersUser(BaseModel):
    id: str
    followers: List[UserPublic]

class FollowersResponse(BaseModel):
    length: int
    user: FollowersUser

class FollowingUser(BaseModel):
    id: str
    following: List[UserPublic]

class FollowingResponse(BaseModel):
    length: int
    user: FollowingUser
