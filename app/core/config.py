"""
Application configuration settings.
Loads from environment variables (and an optional .env file) with type checking.
"""

from pydantic import validator
from pydantic_settings import BaseSettings, NoDecode
from typing import Annotated, List

class Settings(BaseSettings):
    # Application Metadata
    PROJECT_TITLE: str = "Follow API"
    PROJECT_DESCRIPTION: str = "User accounts and a unidirectional follow relationship between users"
    PROJECT_VERSION: str = "1.0.0"
    API_PREFIX: str = ""
    ENVIRONMENT: str = "development"  # or 'testing', 'production'

    # Database Configuration
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "follow_api"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Authentication
    SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    # 0 issues tokens without an exp claim
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @validator("API_PREFIX")
    def normalize_api_prefix(cls, v):
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    @validator("ACCESS_TOKEN_EXPIRE_MINUTES")
    def validate_token_expiry(cls, v):
        if v < 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES cannot be negative")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


settings = Settings()
