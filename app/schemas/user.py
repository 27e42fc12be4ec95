from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, StrictStr

class UserBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: StrictStr = Field(..., min_length=1)
    first_name: StrictStr = Field(..., alias="firstName", min_length=1)
    last_name: StrictStr = Field(..., alias="lastName", min_length=1)
    about: Optional[StrictStr] = None

class UserCreate(UserBase):
    password: StrictStr = Field(..., min_length=1)

class UserUpdate(UserBase):
    # Every field is rewritten on update, the password included
    password: StrictStr = Field(..., min_length=1)

class UserPublic(BaseModel):
    """A user as returned to clients: everything but the password."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    about: Optional[str] = None
    following: List[str] = Field(default_factory=list)
    followers: List[str] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user) -> "UserPublic":
        return cls(
            id=str(user.id),
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            about=user.about,
            following=[str(user_id) for user_id in user.following],
            followers=[str(user_id) for user_id in user.followers],
        )
