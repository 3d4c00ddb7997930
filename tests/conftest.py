"""
Global test fixtures for the metadata_manager test suite.

Every fixture works on a fresh SQLite database inside pytest's ``tmp_path``,
so tests never share state.
"""
import logging

import pytest

from metadata_manager.common.common import LOG_NAME
from metadata_manager.db.manager import DatabaseManager
from metadata_manager.results.matrix_reader import MatrixReader
from metadata_manager.runs.lifecycle import ExperimentLifecycle
from metadata_manager.sets.registry import SetRegistry


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test_metadata.db"


@pytest.fixture
def db_manager(db_path):
    """Create a test database manager."""
    return DatabaseManager(database_path=str(db_path), use_sqlite=True, recreate=True)


@pytest.fixture
def registry(db_manager):
    return SetRegistry(db_manager)


@pytest.fixture
def lifecycle(db_manager):
    return ExperimentLifecycle(db_manager)


@pytest.fixture
def reader(db_manager, registry):
    return MatrixReader(db_manager, registry)


@pytest.fixture
def count_rows(db_manager):
    """Return a helper counting the rows of a table."""
    def _count(table: str) -> int:
        with db_manager.session() as session:
            return session.query(f"SELECT COUNT(*) AS n FROM {table}")[0]["n"]
    return _count


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handler changes a CompositeLogger made to the package logger."""
    yield
    package_logger = logging.getLogger(LOG_NAME)
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers = []
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
