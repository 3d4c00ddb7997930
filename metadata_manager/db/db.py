"""Database initialization and utilities."""
import os
import sqlite3
import mysql.connector
from mysql.connector.constants import ClientFlag
from pathlib import Path
from typing import Union

# Table and column names are read by other tools, keep them stable.
TABLE_CLASSIFIER_SETS = "classifier_sets"
TABLE_CLASSIFIER_SET_MEMBERS = "classifier_set_members"
TABLE_CLASSIFIER_RUNS = "classifier_runs"
TABLE_DATASET_SETS = "dataset_sets"
TABLE_DATASET_SET_MEMBERS = "dataset_set_members"
TABLE_METAFEATURE_SETS = "metafeature_sets"
TABLE_METAFEATURE_SET_MEMBERS = "metafeature_set_members"
TABLE_METAFEATURE_GROUPS = "metafeature_groups"
TABLE_METAFEATURE_GROUP_MEMBERS = "metafeature_group_members"
TABLE_METAFEATURE_RUNS = "metafeature_runs"
TABLE_METAFEATURE_VALUES = "metafeature_values"
TABLE_METAFEATURE_TIMES = "metafeature_times"

COL_DATASET_ID = "dataset_id"
COL_DATASET_SET_NAME = "dataset_set_name"
COL_CLASSIFIER_RUN_ID = "classifier_run_id"
COL_CLASSIFIER_NAME = "classifier_name"
COL_CLASSIFIER_CONFIGURATION = "classifier_configuration"
COL_CLASSIFIER_PERFORMANCE = "predictive_accuracy"
COL_CLASSIFIER_SET_NAME = "classifier_set_name"
COL_CLASSIFIER_EVALUATION_METHOD = "classifier_evaluation_method"
COL_METAFEATURE_RUN_ID = "metafeature_run_id"
COL_METAFEATURE_NAME = "metafeature_name"
COL_METAFEATURE_VALUE = "metafeature_value"
COL_METAFEATURE_SET_NAME = "metafeature_set_name"
COL_METAFEATURE_GROUP_NAME = "metafeature_group"
COL_METAFEATURE_COMPUTATION_TIME = "time"
COL_STATUS = "status"

_STATUS_CHECK = "CHECK (status IN ('created', 'running', 'finished', 'error'))"

# SQL statements for creating tables
MYSQL_TABLES = {
    TABLE_CLASSIFIER_SETS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_CLASSIFIER_SETS} (
        {COL_CLASSIFIER_SET_NAME} VARCHAR(255) PRIMARY KEY
    )
    """,
    # No composite key: name plus configuration exceeds the MySQL index length limit.
    TABLE_CLASSIFIER_SET_MEMBERS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_CLASSIFIER_SET_MEMBERS} (
        {COL_CLASSIFIER_SET_NAME} VARCHAR(255) NOT NULL,
        {COL_CLASSIFIER_NAME} VARCHAR(255) NOT NULL,
        {COL_CLASSIFIER_CONFIGURATION} VARCHAR(1024) NOT NULL,
        FOREIGN KEY ({COL_CLASSIFIER_SET_NAME}) REFERENCES {TABLE_CLASSIFIER_SETS}({COL_CLASSIFIER_SET_NAME})
    )
    """,
    TABLE_CLASSIFIER_RUNS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_CLASSIFIER_RUNS} (
        {COL_CLASSIFIER_RUN_ID} INT PRIMARY KEY AUTO_INCREMENT,
        {COL_DATASET_ID} INT NOT NULL,
        {COL_CLASSIFIER_NAME} VARCHAR(255) NOT NULL,
        {COL_CLASSIFIER_CONFIGURATION} VARCHAR(1024) NOT NULL,
        {COL_CLASSIFIER_EVALUATION_METHOD} VARCHAR(255),
        {COL_CLASSIFIER_PERFORMANCE} DOUBLE,
        {COL_STATUS} VARCHAR(20) NOT NULL DEFAULT 'created' {_STATUS_CHECK}
    )
    """,
    TABLE_DATASET_SETS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_DATASET_SETS} (
        {COL_DATASET_SET_NAME} VARCHAR(255) PRIMARY KEY
    )
    """,
    TABLE_DATASET_SET_MEMBERS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_DATASET_SET_MEMBERS} (
        {COL_DATASET_SET_NAME} VARCHAR(255) NOT NULL,
        {COL_DATASET_ID} INT NOT NULL,
        PRIMARY KEY ({COL_DATASET_SET_NAME}, {COL_DATASET_ID}),
        FOREIGN KEY ({COL_DATASET_SET_NAME}) REFERENCES {TABLE_DATASET_SETS}({COL_DATASET_SET_NAME})
    )
    """,
    TABLE_METAFEATURE_SETS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_METAFEATURE_SETS} (
        {COL_METAFEATURE_SET_NAME} VARCHAR(255) PRIMARY KEY
    )
    """,
    TABLE_METAFEATURE_SET_MEMBERS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_METAFEATURE_SET_MEMBERS} (
        {COL_METAFEATURE_SET_NAME} VARCHAR(255) NOT NULL,
        {COL_METAFEATURE_NAME} VARCHAR(255) NOT NULL,
        PRIMARY KEY ({COL_METAFEATURE_SET_NAME}, {COL_METAFEATURE_NAME}),
        FOREIGN KEY ({COL_METAFEATURE_SET_NAME}) REFERENCES {TABLE_METAFEATURE_SETS}({COL_METAFEATURE_SET_NAME})
    )
    """,
    TABLE_METAFEATURE_GROUPS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_METAFEATURE_GROUPS} (
        {COL_METAFEATURE_GROUP_NAME} VARCHAR(255) PRIMARY KEY
    )
    """,
    TABLE_METAFEATURE_GROUP_MEMBERS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_METAFEATURE_GROUP_MEMBERS} (
        {COL_METAFEATURE_GROUP_NAME} VARCHAR(255) NOT NULL,
        {COL_METAFEATURE_NAME} VARCHAR(255) NOT NULL,
        PRIMARY KEY ({COL_METAFEATURE_GROUP_NAME}, {COL_METAFEATURE_NAME}),
        FOREIGN KEY ({COL_METAFEATURE_GROUP_NAME}) REFERENCES {TABLE_METAFEATURE_GROUPS}({COL_METAFEATURE_GROUP_NAME})
    )
    """,
    TABLE_METAFEATURE_RUNS: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_METAFEATURE_RUNS} (
        {COL_METAFEATURE_RUN_ID} INT PRIMARY KEY AUTO_INCREMENT,
        {COL_DATASET_ID} INT NOT NULL,
        {COL_STATUS} VARCHAR(20) NOT NULL DEFAULT 'created' {_STATUS_CHECK}
    )
    """,
    TABLE_METAFEATURE_VALUES: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_METAFEATURE_VALUES} (
        {COL_METAFEATURE_RUN_ID} INT NOT NULL,
        {COL_METAFEATURE_NAME} VARCHAR(255) NOT NULL,
        {COL_METAFEATURE_VALUE} DOUBLE,
        FOREIGN KEY ({COL_METAFEATURE_RUN_ID}) REFERENCES {TABLE_METAFEATURE_RUNS}({COL_METAFEATURE_RUN_ID})
    )
    """,
    TABLE_METAFEATURE_TIMES: f"""
    CREATE TABLE IF NOT EXISTS {TABLE_METAFEATURE_TIMES} (
        {COL_METAFEATURE_RUN_ID} INT NOT NULL,
        {COL_METAFEATURE_GROUP_NAME} VARCHAR(255) NOT NULL,
        {COL_METAFEATURE_COMPUTATION_TIME} DOUBLE,
        FOREIGN KEY ({COL_METAFEATURE_RUN_ID}) REFERENCES {TABLE_METAFEATURE_RUNS}({COL_METAFEATURE_RUN_ID})
    )
    """,
}

# SQLite version of the tables (replacing MySQL-specific syntax)
SQLITE_TABLES = {
    name: sql.replace("INT PRIMARY KEY AUTO_INCREMENT", "INTEGER PRIMARY KEY AUTOINCREMENT")
             .replace("DOUBLE", "REAL")
    for name, sql in MYSQL_TABLES.items()
}


def dict_factory(cursor: sqlite3.Cursor, row: tuple) -> dict:
    """Convert SQLite row to dictionary."""
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def connect_sqlite(db_path: Union[str, Path], readonly: bool = False) -> sqlite3.Connection:
    """Open a connection to an existing (or new) SQLite database file."""
    if readonly:
        conn = sqlite3.connect(Path(db_path).absolute().as_uri() + "?mode=ro", uri=True)
    else:
        conn = sqlite3.connect(str(db_path))
    conn.row_factory = dict_factory
    return conn


def init_sqlite_db(db_path: Union[str, Path], recreate: bool = False) -> None:
    """Create the SQLite database file and all tables.

    Args:
        db_path: Path to SQLite database file
        recreate: If True, delete existing database file
    """
    db_path = Path(db_path)

    if recreate and db_path.exists():
        os.remove(db_path)

    # Create parent directory if it doesn't exist
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = connect_sqlite(db_path)
    try:
        cursor = conn.cursor()
        # Create tables in order (due to foreign key constraints)
        for create_sql in SQLITE_TABLES.values():
            cursor.execute(create_sql)
        conn.commit()
    finally:
        conn.close()


def connect_mysql(host: str, user: str, password: str, database: str):
    """Open a connection to an existing MySQL database.

    ``FOUND_ROWS`` makes ``rowcount`` of an UPDATE report matched rows, so an
    update that rewrites identical values is not mistaken for a missing row.
    """
    return mysql.connector.connect(
        host=host,
        user=user,
        password=password,
        database=database,
        client_flags=[ClientFlag.FOUND_ROWS],
    )


def init_mysql_db(host: str, user: str, password: str, database: str,
                  recreate: bool = False) -> None:
    """Create the MySQL database and all tables.

    Args:
        host: Database host
        user: Database user
        password: Database password
        database: Database name
        recreate: If True, drop and recreate database
    """
    # First connect without database to create it
    conn = mysql.connector.connect(
        host=host,
        user=user,
        password=password
    )
    try:
        cursor = conn.cursor()

        if recreate:
            cursor.execute(f"DROP DATABASE IF EXISTS {database}")

        cursor.execute(f"CREATE DATABASE IF NOT EXISTS {database}")
        cursor.execute(f"USE {database}")

        # Create tables in order (due to foreign key constraints)
        for create_sql in MYSQL_TABLES.values():
            cursor.execute(create_sql)

        conn.commit()
    finally:
        conn.close()
