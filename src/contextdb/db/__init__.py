"""contextdb metadata catalog."""

from contextdb.db.connection import Database
from contextdb.db.migrations import MIGRATIONS, run_migrations
from contextdb.db.repository import Repository
from contextdb.db.schema import initialize

__all__ = [
    "Database",
    "Repository",
    "initialize",
    "run_migrations",
    "MIGRATIONS",
]
