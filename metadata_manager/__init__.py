"""
Metadata Manager - stores classifier evaluation results and data set meta
features, and reads them back as dense pandas tables.

Basic usage:
    from metadata_manager import MetaDataStore
"""

__version__ = "0.1.0"

# Core classes
from .store import MetaDataStore
from .sets import SetRegistry
from .runs import ExperimentLifecycle
from .results import MatrixReader, pivot

# Common enums and utilities
from .common import (
    RunStatus,
    SetCategory,
    ClassifierKey,
    MalformedInputError,
    MISSING_VALUE_SENTINEL,
    encode_measurement,
    decode_measurement,
    Factory,
)

# Database layer
from .db import DatabaseManager, DatabaseError, CollaboratorError, PersistenceError

__all__ = [
    # Version
    '__version__',
    # Core
    'MetaDataStore',
    'SetRegistry',
    'ExperimentLifecycle',
    'MatrixReader',
    'pivot',
    # Enums and keys
    'RunStatus',
    'SetCategory',
    'ClassifierKey',
    'MalformedInputError',
    # Sentinel codec
    'MISSING_VALUE_SENTINEL',
    'encode_measurement',
    'decode_measurement',
    # Construction by name
    'Factory',
    # Database
    'DatabaseManager',
    'DatabaseError',
    'CollaboratorError',
    'PersistenceError',
]
