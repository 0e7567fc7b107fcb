"""
Directory Infrastructure Layer
==============================

Contains:
- Models: SQLAlchemy ORM models for users and assets
- Repositories: SQLAlchemy implementations of the directory interfaces
- Seed: the default staff list
"""

from helpdesk.directory.infrastructure.models import AssetModel, UserModel
from helpdesk.directory.infrastructure.repositories import (
    SQLAlchemyAssetRepository,
    SQLAlchemyUserRepository,
)
from helpdesk.directory.infrastructure.seed import default_users, seed_users

__all__ = [
    "AssetModel",
    "UserModel",
    "SQLAlchemyAssetRepository",
    "SQLAlchemyUserRepository",
    "default_users",
    "seed_users",
]
