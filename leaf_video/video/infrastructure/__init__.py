"""
Video Infrastructure Layer.

Contains implementations of domain interfaces using external dependencies
like the relational database and in-process caches.
"""

from .database import Base, Database
from .repositories import (
    SqlAlchemyVideoRepository,
    SqlAlchemyResourceRepository,
    SqlAlchemyPartitionRepository,
    SqlAlchemyUserRepository,
)
from .caching import InMemoryUploadTracker, InMemoryClickLimiter, SqlAlchemyUploadTracker

__all__ = [
    "Base",
    "Database",
    "SqlAlchemyVideoRepository",
    "SqlAlchemyResourceRepository",
    "SqlAlchemyPartitionRepository",
    "SqlAlchemyUserRepository",
    "InMemoryUploadTracker",
    "InMemoryClickLimiter",
    "SqlAlchemyUploadTracker",
]
