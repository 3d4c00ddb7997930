"""Database access layer."""

from .manager import (
    DatabaseManager,
    DatabaseSession,
    DatabaseError,
    CollaboratorError,
    ConnectionError,
    QueryError,
    PersistenceError,
)
from .tables import ClassifierRun, MetaFeatureRun

__all__ = [
    'DatabaseManager',
    'DatabaseSession',
    'DatabaseError',
    'CollaboratorError',
    'ConnectionError',
    'QueryError',
    'PersistenceError',
    'ClassifierRun',
    'MetaFeatureRun',
]
