"""Database targets and persistence connectors for SQLite, PostgreSQL and MySQL."""

import json
import logging
from contextlib import contextmanager
from typing import (
    Annotated, Any, Callable, Dict, Iterator, List, Literal, Optional, Protocol, Sequence, Tuple,
    Union,
)

from pydantic import BaseModel, Field, TypeAdapter, field_validator
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, URL, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from .dialects import build_create_table, build_parameterized_insert
from .errors import DatabaseConnectionError, DDLError, InsertBatchError, SchemaValidationError
from .models import Dialect, Row, TableSchema
from .validators import validate_connection_string


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


class SQLiteTarget(BaseModel):
    """An embedded SQLite database file."""

    kind: Literal["sqlite"] = "sqlite"
    file_path: str = Field(..., min_length=1, description="Database file path")

    def to_url(self) -> URL:
        return URL.create("sqlite", database=self.file_path)

    def describe(self) -> str:
        return f"sqlite:{self.file_path}"


class PostgreSQLTarget(BaseModel):
    """A PostgreSQL server, given as a connection string or as parameters."""

    kind: Literal["postgresql"] = "postgresql"
    connection_string: Optional[str] = Field(default=None, description="postgresql:// URL")
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="", description="Database name")
    username: Optional[str] = Field(default=None, description="Database username")
    password: Optional[str] = Field(default=None, description="Database password")
    ssl_mode: Optional[str] = Field(default=None, description="SSL mode")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    def to_url(self) -> URL:
        if self.connection_string:
            return _parse_url(self.connection_string).set(drivername="postgresql+psycopg2")
        return URL.create(
            "postgresql+psycopg2",
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database or None,
        )

    def connect_args(self) -> Dict[str, Any]:
        return {"sslmode": self.ssl_mode} if self.ssl_mode else {}

    def describe(self) -> str:
        return self.to_url().render_as_string(hide_password=True)


class MySQLTarget(BaseModel):
    """A MySQL server, given as a connection string or as parameters."""

    kind: Literal["mysql"] = "mysql"
    connection_string: Optional[str] = Field(default=None, description="mysql:// URL")
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=3306, description="Database port")
    database: str = Field(default="", description="Database name")
    username: Optional[str] = Field(default=None, description="Database username")
    password: Optional[str] = Field(default=None, description="Database password")
    charset: str = Field(default="utf8mb4", description="Character set")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    def to_url(self) -> URL:
        if self.connection_string:
            return _parse_url(self.connection_string).set(drivername="mysql+pymysql")
        return URL.create(
            "mysql+pymysql",
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database or None,
        )

    def connect_args(self) -> Dict[str, Any]:
        return {"charset": self.charset}

    def describe(self) -> str:
        return self.to_url().render_as_string(hide_password=True)


DatabaseTarget = Annotated[
    Union[SQLiteTarget, PostgreSQLTarget, MySQLTarget], Field(discriminator="kind")
]

_target_adapter = TypeAdapter(DatabaseTarget)


def _parse_url(connection_string: str) -> URL:
    try:
        return make_url(connection_string)
    except ArgumentError as e:
        raise DatabaseConnectionError(f"Malformed connection string: {e}") from e


def parse_database_target(connection_string: str) -> Union[SQLiteTarget, PostgreSQLTarget, MySQLTarget]:
    """Turn a connection string into a database target.

    Accepted forms: ``sqlite:<path>``, ``sqlite:///<path>``,
    ``postgresql://...``, ``postgres://...`` and ``mysql://...``.
    """
    try:
        validate_connection_string(connection_string)
    except SchemaValidationError as e:
        raise DatabaseConnectionError(str(e)) from e

    if connection_string.startswith("sqlite:"):
        path = connection_string[len("sqlite:"):]
        if path.startswith("///"):
            path = path[3:]
        elif path.startswith("//"):
            path = path[2:]
        if not path:
            raise DatabaseConnectionError("SQLite target requires a file path")
        return SQLiteTarget(file_path=path)

    if connection_string.startswith(("postgresql://", "postgres://", "postgresql+")):
        return PostgreSQLTarget(connection_string=connection_string)

    if connection_string.startswith(("mysql://", "mysql+")):
        return MySQLTarget(connection_string=connection_string)

    raise DatabaseConnectionError(f"Unsupported database type: {connection_string.split(':', 1)[0]}")


def target_from_dict(data: Dict[str, Any]) -> Union[SQLiteTarget, PostgreSQLTarget, MySQLTarget]:
    """Build a target from a ``{"kind": ..., ...}`` mapping, e.g. from YAML."""
    return _target_adapter.validate_python(data)


class PersistenceConnector(Protocol):
    """Operations every backend connector provides."""

    dialect: Dialect

    def connect(self, target) -> Connection: ...

    def test(self, target) -> bool: ...

    def create_table(self, handle: Connection, schema: TableSchema) -> None: ...

    def drop_table(self, handle: Connection, table_name: str) -> None: ...

    def truncate_table(self, handle: Connection, table_name: str) -> None: ...

    def insert_batch(self, handle: Connection, schema: TableSchema, rows: Sequence[Row],
                     batch_size: int = 1000,
                     progress_callback: Optional[ProgressCallback] = None) -> int: ...

    def close(self, handle: Connection) -> None: ...


def _open_handle(url: URL, description: str, **engine_kwargs) -> Connection:
    """Create an engine, check out one connection and verify it with ``SELECT 1``."""
    logger.info(f"Connecting to {description}")
    engine = None
    handle = None
    try:
        engine = create_engine(url, **engine_kwargs)
        handle = engine.connect()
        handle.execute(text("SELECT 1"))
        handle.rollback()
        logger.info("Database connection established successfully")
        return handle
    except SQLAlchemyError as e:
        logger.error(f"Failed to connect to database: {e}")
        if handle is not None:
            handle.close()
        if engine is not None:
            engine.dispose()
        raise DatabaseConnectionError(f"Database connection failed: {e}") from e
    except ImportError as e:
        logger.error(f"Database driver is not installed: {e}")
        raise DatabaseConnectionError(f"Database driver is not installed: {e}") from e


def _close_handle(handle: Connection) -> None:
    engine = handle.engine
    try:
        handle.close()
    finally:
        engine.dispose()
    logger.info("Database connection closed")


def _test_target(connector: PersistenceConnector, target) -> bool:
    try:
        handle = connector.connect(target)
    except Exception as e:
        logger.debug(f"Connection test failed: {e}")
        return False
    try:
        handle.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.debug(f"Connection test query failed: {e}")
        return False
    finally:
        try:
            connector.close(handle)
        except Exception as e:
            logger.debug(f"Failed to close test connection: {e}")


def _execute_ddl(handle: Connection, statements: List[str], table_name: str, action: str) -> None:
    try:
        with handle.begin():
            for statement in statements:
                handle.execute(text(statement))
        logger.info(f"Successfully executed {action} on table: {table_name}")
    except SQLAlchemyError as e:
        logger.error(f"Failed to {action} table {table_name}: {e}")
        raise DDLError(f"Failed to {action} table {table_name}: {e}", table_name=table_name) from e


def _bind_row(schema: TableSchema, row: Row, booleans_as_int: bool = False) -> Dict[str, Any]:
    """Named parameters ``p0..pn`` in schema column order."""
    params = {}
    for i, column in enumerate(schema.columns):
        value = row.get(column.name)
        if isinstance(value, bool) and booleans_as_int:
            value = 1 if value else 0
        elif isinstance(value, (dict, list)):
            value = json.dumps(value)
        params[f"p{i}"] = value
    return params


def _chunks(rows: Sequence[Row], batch_size: int) -> Iterator[Sequence[Row]]:
    if batch_size < 1:
        raise ValueError("Batch size must be a positive number")
    for start in range(0, len(rows), batch_size):
        yield rows[start:start + batch_size]


def _insert_chunks_explicit(handle: Connection, schema: TableSchema, rows: Sequence[Row],
                            batch_size: int, booleans_as_int: bool,
                            progress_callback: Optional[ProgressCallback]) -> int:
    """Insert row by row, one transaction per chunk, rolling back a failed chunk."""
    statement = text(build_parameterized_insert(schema))
    inserted_count = 0
    batch_count = (len(rows) + batch_size - 1) // batch_size

    for index, chunk in enumerate(_chunks(rows, batch_size)):
        transaction = handle.begin()
        try:
            for row in chunk:
                handle.execute(statement, _bind_row(schema, row, booleans_as_int))
            transaction.commit()
        except SQLAlchemyError as e:
            transaction.rollback()
            logger.error(f"Batch {index + 1}/{batch_count} failed and was rolled back: {e}")
            raise InsertBatchError(
                f"Batch {index + 1} failed: {e}", committed_count=inserted_count, batch_index=index
            ) from e
        except Exception:
            transaction.rollback()
            raise

        inserted_count += len(chunk)
        logger.debug(f"Batch {index + 1}/{batch_count} committed: {len(chunk)} rows")
        if progress_callback:
            progress_callback(len(chunk))

    return inserted_count


class SQLiteConnector:
    """Embedded SQLite file database."""

    dialect = Dialect.SQLITE

    def connect(self, target: SQLiteTarget) -> Connection:
        if not isinstance(target, SQLiteTarget):
            raise DatabaseConnectionError(f"SQLite connector cannot open target: {target!r}")
        return _open_handle(target.to_url(), target.describe())

    def test(self, target: SQLiteTarget) -> bool:
        return _test_target(self, target)

    def create_table(self, handle: Connection, schema: TableSchema) -> None:
        _execute_ddl(handle, [build_create_table(schema, self.dialect)], schema.name, "create")

    def drop_table(self, handle: Connection, table_name: str) -> None:
        _execute_ddl(handle, [f"DROP TABLE IF EXISTS {table_name}"], table_name, "drop")

    def truncate_table(self, handle: Connection, table_name: str) -> None:
        # SQLite has no TRUNCATE
        _execute_ddl(handle, [f"DELETE FROM {table_name}"], table_name, "truncate")

    def insert_batch(self, handle: Connection, schema: TableSchema, rows: Sequence[Row],
                     batch_size: int = 1000,
                     progress_callback: Optional[ProgressCallback] = None) -> int:
        """Insert each chunk with one executemany inside the driver's transaction block.

        Returns ``len(rows)``; per-row results are not inspected.
        """
        statement = text(build_parameterized_insert(schema))
        committed = 0

        for index, chunk in enumerate(_chunks(rows, batch_size)):
            params = [_bind_row(schema, row) for row in chunk]
            try:
                with handle.begin():
                    handle.execute(statement, params)
            except SQLAlchemyError as e:
                logger.error(f"Batch {index + 1} failed and was rolled back: {e}")
                raise InsertBatchError(
                    f"Batch {index + 1} failed: {e}", committed_count=committed, batch_index=index
                ) from e
            committed += len(chunk)
            if progress_callback:
                progress_callback(len(chunk))

        return len(rows)

    def close(self, handle: Connection) -> None:
        _close_handle(handle)


class PostgreSQLConnector:
    """PostgreSQL via psycopg2."""

    dialect = Dialect.POSTGRESQL

    def connect(self, target: PostgreSQLTarget) -> Connection:
        if not isinstance(target, PostgreSQLTarget):
            raise DatabaseConnectionError(f"PostgreSQL connector cannot open target: {target!r}")
        return _open_handle(
            target.to_url(), target.describe(),
            pool_pre_ping=True, connect_args=target.connect_args(),
        )

    def test(self, target: PostgreSQLTarget) -> bool:
        return _test_target(self, target)

    def create_table(self, handle: Connection, schema: TableSchema) -> None:
        _execute_ddl(handle, [build_create_table(schema, self.dialect)], schema.name, "create")

    def drop_table(self, handle: Connection, table_name: str) -> None:
        _execute_ddl(handle, [f"DROP TABLE IF EXISTS {table_name}"], table_name, "drop")

    def truncate_table(self, handle: Connection, table_name: str) -> None:
        _execute_ddl(handle, [f"TRUNCATE TABLE {table_name}"], table_name, "truncate")

    def insert_batch(self, handle: Connection, schema: TableSchema, rows: Sequence[Row],
                     batch_size: int = 1000,
                     progress_callback: Optional[ProgressCallback] = None) -> int:
        return _insert_chunks_explicit(handle, schema, rows, batch_size, False, progress_callback)

    def close(self, handle: Connection) -> None:
        _close_handle(handle)


class MySQLConnector:
    """MySQL via PyMySQL. Booleans are sent as 0/1."""

    dialect = Dialect.MYSQL

    def connect(self, target: MySQLTarget) -> Connection:
        if not isinstance(target, MySQLTarget):
            raise DatabaseConnectionError(f"MySQL connector cannot open target: {target!r}")
        return _open_handle(
            target.to_url(), target.describe(),
            pool_pre_ping=True, connect_args=target.connect_args(),
        )

    def test(self, target: MySQLTarget) -> bool:
        return _test_target(self, target)

    def create_table(self, handle: Connection, schema: TableSchema) -> None:
        _execute_ddl(handle, [build_create_table(schema, self.dialect)], schema.name, "create")

    def drop_table(self, handle: Connection, table_name: str) -> None:
        _execute_ddl(handle, [f"DROP TABLE IF EXISTS {table_name}"], table_name, "drop")

    def truncate_table(self, handle: Connection, table_name: str) -> None:
        _execute_ddl(handle, [f"TRUNCATE TABLE {table_name}"], table_name, "truncate")

    def insert_batch(self, handle: Connection, schema: TableSchema, rows: Sequence[Row],
                     batch_size: int = 1000,
                     progress_callback: Optional[ProgressCallback] = None) -> int:
        return _insert_chunks_explicit(handle, schema, rows, batch_size, True, progress_callback)

    def close(self, handle: Connection) -> None:
        _close_handle(handle)


CONNECTORS: Dict[str, Callable[[], PersistenceConnector]] = {
    "sqlite": SQLiteConnector,
    "postgresql": PostgreSQLConnector,
    "mysql": MySQLConnector,
}


def connector_for(target) -> PersistenceConnector:
    """Select the connector by the target's ``kind`` tag."""
    kind = getattr(target, "kind", None)
    if kind not in CONNECTORS:
        raise DatabaseConnectionError(f"Unsupported database target: {target!r}")
    return CONNECTORS[kind]()


@contextmanager
def open_connection(target) -> Iterator[Tuple[PersistenceConnector, Connection]]:
    """Connect to ``target`` and always close the handle on exit."""
    connector = connector_for(target)
    handle = connector.connect(target)
    try:
        yield connector, handle
    finally:
        try:
            connector.close(handle)
        except Exception as e:
            logger.error(f"Failed to close database connection: {e}")


def check_connection(target) -> bool:
    """Connect, run a trivial query and close. Never raises."""
    try:
        return connector_for(target).test(target)
    except DatabaseConnectionError:
        return False
