"""Database manager for experiment metadata."""
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union
import logging
import sqlite3
import mysql.connector
from pathlib import Path

from metadata_manager.db.db import init_sqlite_db, init_mysql_db, connect_sqlite, connect_mysql

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Base class for database-related errors."""
    pass

class CollaboratorError(DatabaseError):
    """The underlying database failed; never retried."""
    pass

class ConnectionError(CollaboratorError):
    """Error connecting to the database."""
    pass

class QueryError(CollaboratorError):
    """Error executing a database query."""
    pass

class PersistenceError(DatabaseError):
    """A write was rejected by the database or matched no row."""

    def __init__(self, message: str, operation: str = "", params: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.operation = operation
        self.params = dict(params or {})


class DatabaseSession:
    """A single connection and transaction handed out by :meth:`DatabaseManager.session`.

    Sessions must not outlive the ``with`` block that created them.
    """

    def __init__(self, connection, use_sqlite: bool):
        self.connection = connection
        self.use_sqlite = use_sqlite
        if use_sqlite:
            self.cursor = connection.cursor()
        else:
            self.cursor = connection.cursor(dictionary=True)

    def _get_placeholder(self) -> str:
        """Get the appropriate parameter placeholder for the current database."""
        return "?" if self.use_sqlite else "%s"

    def _execute_query(self, query: str, params: tuple = None) -> Any:
        logger.debug("Executing %s with %s", " ".join(query.split()), params)
        try:
            if params:
                self.cursor.execute(query, params)
            else:
                self.cursor.execute(query)
            return self.cursor
        except (sqlite3.Error, mysql.connector.Error) as e:
            raise QueryError(f"Query execution failed: {e}") from e

    def query(self, query: str, params: tuple = None) -> List[Dict[str, Any]]:
        """Run a read query and return its rows as dictionaries."""
        return list(self._execute_query(query, params).fetchall())

    def _insert(self, table: str, fields: Mapping[str, Any]):
        ph = self._get_placeholder()
        columns = ", ".join(fields.keys())
        placeholders = ", ".join([ph] * len(fields))
        query = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"
        return self._execute_query(query, tuple(fields.values()))

    def insert(self, table: str, fields: Mapping[str, Any]) -> int:
        """Insert one row and return the id generated for it."""
        return self._insert(table, fields).lastrowid

    def insert_without_id(self, table: str, fields: Mapping[str, Any]) -> None:
        """Insert one row into a table without a generated id."""
        self._insert(table, fields)

    def update(self, table: str, values: Mapping[str, Any], where: Mapping[str, Any]) -> int:
        """Update rows matching all ``where`` equalities.

        Returns:
            The number of matched rows.
        """
        ph = self._get_placeholder()
        assignments = ", ".join(f"{column} = {ph}" for column in values)
        conditions = " AND ".join(f"{column} = {ph}" for column in where)
        query = f"UPDATE {table} SET {assignments} WHERE {conditions}"
        cursor = self._execute_query(query, tuple(values.values()) + tuple(where.values()))
        return cursor.rowcount


class DatabaseManager:
    """Manages database access for experiment metadata.

    The manager only stores connection parameters. Every operation obtains
    its own connection through :meth:`session`, which commits when the block
    finishes, rolls back when it raises and always closes the connection.
    Both SQLite and MySQL backends are supported.

    Attributes:
        use_sqlite (bool): Whether SQLite is being used as the backend
        database_path (str): SQLite file path or MySQL database name
        readonly (bool): Whether sessions may only read
    """

    def __init__(self, database_path: Union[str, Path] = "metadata_manager.db",
                 use_sqlite: bool = False, host: str = "localhost",
                 user: str = "root", password: str = "", recreate: bool = False, readonly: bool = False):
        """
        Store connection parameters and make sure the schema exists.
        """
        self.database_path = str(database_path)
        self.use_sqlite = use_sqlite
        self.host = host
        self.user = user
        self.password = password
        self.readonly = readonly
        if readonly:
            # Open once so a bad path fails here and not on first use.
            with self.session():
                pass
            return
        try:
            if use_sqlite:
                init_sqlite_db(self.database_path, recreate=recreate)
            else:
                init_mysql_db(host, user, password, self.database_path, recreate=recreate)
        except (sqlite3.Error, OSError, mysql.connector.Error) as e:
            raise ConnectionError(f"Failed to connect to database: {e}") from e

    def _connect(self):
        try:
            if self.use_sqlite:
                return connect_sqlite(self.database_path, readonly=self.readonly)
            return connect_mysql(self.host, self.user, self.password, self.database_path)
        except (sqlite3.Error, OSError, mysql.connector.Error) as e:
            raise ConnectionError(f"Failed to connect to database: {e}") from e

    @contextmanager
    def session(self) -> Iterator[DatabaseSession]:
        """Open a connection for the duration of a ``with`` block."""
        connection = self._connect()
        try:
            session = DatabaseSession(connection, self.use_sqlite)
            yield session
            try:
                connection.commit()
            except (sqlite3.Error, mysql.connector.Error) as e:
                raise QueryError(f"Commit failed: {e}") from e
        except Exception:
            connection.rollback()
            raise
        finally:
            connection.close()
