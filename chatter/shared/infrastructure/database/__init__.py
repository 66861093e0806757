"""
MongoDB infrastructure: client lifecycle, entity base model,
generic repository and startup migrations.
"""

from .connection import MongoConnectionManager
from .entity import Entity, parse_object_id
from .migrations import MigrationRunner, run_startup_migrations
from .repository import EntityT, MongoRepository

__all__ = [
    "MongoConnectionManager",
    "Entity",
    "parse_object_id",
    "MigrationRunner",
    "run_startup_migrations",
    "EntityT",
    "MongoRepository",
]
