"""Exception hierarchy for schema validation, connections and persistence."""

from typing import Optional


class TableGenError(Exception):
    """Base class for all TableGen errors."""


class SchemaValidationError(TableGenError, ValueError):
    """Raised when a table name, column name or row count is invalid."""


class DatabaseConnectionError(TableGenError, ConnectionError):
    """Raised when a database target is malformed or unreachable."""


class DDLError(TableGenError):
    """Raised when CREATE, DROP or TRUNCATE fails."""

    def __init__(self, message: str, table_name: Optional[str] = None):
        super().__init__(message)
        self.table_name = table_name


class InsertBatchError(TableGenError):
    """Raised when a chunk's transaction fails.

    The failing chunk is rolled back. Rows from chunks committed before it
    stay persisted and are counted in ``committed_count``.
    """

    def __init__(self, message: str, committed_count: int = 0,
                 batch_index: Optional[int] = None):
        super().__init__(message)
        self.committed_count = committed_count
        self.batch_index = batch_index
