from datetime import datetime
from typing import List, Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import Field


class User(Document):
    """A registered account and both sides of its follow relationships.

    ``following`` and ``followers`` are denormalized back-references: whenever
    B is in A.following, A must be in B.followers. Nothing in the database
    enforces this; app.crud.user keeps the two lists in step.
    """
    username: Indexed(str, unique=True)
    password: str = Field(..., description="bcrypt hash, never the plaintext")
    first_name: str
    last_name: str
    about: Optional[str] = None
    following: List[PydanticObjectId] = Field(default_factory=list)
    followers: List[PydanticObjectId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"
