"""
Models package initialization
"""

from .user import User

# Every Beanie document registered with init_beanie at startup
document_models = [User]

__all__ = ["User", "document_models"]
