import copy
import os

# Settings are read when app.core.config is first imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["ENVIRONMENT"] = "testing"
os.environ["API_PREFIX"] = ""

import pytest
from beanie import PydanticObjectId
from fastapi import status
from fastapi.testclient import TestClient
from types import SimpleNamespace

from app.core.error_codes import USER_ALREADY_EXISTS
from app.core.exceptions import CustomHTTPException
from app.core.security import get_password_hash

# Route modules import these CRUD functions by name
PATCHED_MODULES = {
    "app.api.auth": ["get_user_by_username", "create_user"],
    "app.api.profiles": ["get_user_by_id", "get_users_by_ids", "update_user"],
    "app.api.follow": ["get_user_by_id", "get_users_by_ids", "follow_user", "unfollow_user"],
}


class InMemoryUserStore:
    """Stands in for the users collection: every read returns a fresh copy."""

    def __init__(self):
        self.users = {}

    def _find(self, user_id):
        if isinstance(user_id, PydanticObjectId):
            return self.users.get(user_id)
        if not PydanticObjectId.is_valid(str(user_id)):
            return None
        return self.users.get(PydanticObjectId(str(user_id)))

    def _check_username_free(self, username, exclude_id=None):
        # Mirrors the unique index on users.username
        for user in self.users.values():
            if user.username == username and user.id != exclude_id:
                raise CustomHTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="User already exists, try different username",
                    error_code=USER_ALREADY_EXISTS
                )

    async def get_user_by_id(self, user_id):
        user = self._find(user_id)
        return copy.deepcopy(user) if user else None

    async def get_user_by_username(self, username):
        for user in self.users.values():
            if user.username == username:
                return copy.deepcopy(user)
        return None

    async def get_users_by_ids(self, user_ids):
        found = (self._find(user_id) for user_id in user_ids)
        return [copy.deepcopy(user) for user in found if user]

    async def create_user(self, user_in):
        self._check_username_free(user_in.username)
        user = SimpleNamespace(
            id=PydanticObjectId(),
            username=user_in.username,
            password=get_password_hash(user_in.password),
            first_name=user_in.first_name,
            last_name=user_in.last_name,
            about=user_in.about,
            following=[],
            followers=[],
        )
        self.users[user.id] = user
        return copy.deepcopy(user)

    async def update_user(self, user, user_in):
        self._check_username_free(user_in.username, exclude_id=user.id)
        stored = self.users[user.id]
        stored.username = user_in.username
        stored.password = get_password_hash(user_in.password)
        stored.first_name = user_in.first_name
        stored.last_name = user_in.last_name
        stored.about = user_in.about

    async def follow_user(self, follower, target):
        following = self.users[follower.id].following
        if target.id not in following:
            following.append(target.id)
        followers = self.users[target.id].followers
        if follower.id not in followers:
            followers.append(follower.id)

    async def unfollow_user(self, follower, target):
        following = self.users[follower.id].following
        if target.id in following:
            following.remove(target.id)
        followers = self.users[target.id].followers
        if follower.id in followers:
            followers.remove(follower.id)


@pytest.fixture
def user_store(monkeypatch):
    store = InMemoryUserStore()
    for module, names in PATCHED_MODULES.items():
        for name in names:
            monkeypatch.setattr(f"{module}.{name}", getattr(store, name))
    return store


@pytest.fixture
def client(user_store):
    # Not entered as a context manager, so the lifespan never connects to MongoDB
    from app.main import app
    return TestClient(app)


@pytest.fixture
def signup(client):
    """Register a user and return (user_id, headers) for it"""
    def _signup(username, password="secret", first_name="First", last_name="Last", about=None):
        payload = {
            "username": username,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
        }
        if about is not None:
            payload["about"] = about
        response = client.post("/signup", json=payload)
        assert response.status_code == 201, response.text
        token = response.json()["token"]
        profile = client.get("/profile", headers={"Authorization": f"Bearer {token}"})
        return profile.json()["id"], {"Authorization": f"Bearer {token}"}
    return _signup
