"""Input validation for identifiers, row counts and database targets."""

import re

from .errors import SchemaValidationError


MAX_ROW_COUNT = 1_000_000

IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

RESERVED_KEYWORDS = frozenset([
    'select', 'from', 'where', 'insert', 'update', 'delete', 'create', 'drop',
    'alter', 'table', 'index', 'view', 'join', 'inner', 'outer', 'left', 'right',
    'union', 'distinct', 'order', 'group', 'having', 'limit', 'offset', 'and',
    'or', 'not', 'null', 'is', 'in', 'between', 'like', 'as', 'into', 'values',
    'set', 'primary', 'key', 'foreign', 'references', 'constraint', 'unique',
    'check', 'default', 'cascade', 'restrict', 'no', 'action', 'case',
    'when', 'then', 'else', 'end', 'exists', 'any', 'all', 'some', 'true',
    'false', 'current_date', 'current_time', 'current_timestamp', 'user',
    'session_user', 'system_user',
])


def _validate_identifier(name: str, label: str) -> str:
    if not name or not name.strip():
        raise SchemaValidationError(f"{label} name cannot be empty")

    if not IDENTIFIER_PATTERN.match(name):
        raise SchemaValidationError(
            f"{label} name must start with letter or underscore and contain "
            f"only letters, numbers, and underscores: {name!r}"
        )

    if name.lower() in RESERVED_KEYWORDS:
        raise SchemaValidationError(f"{label} name cannot be a reserved SQL keyword: {name!r}")

    return name


def validate_table_name(name: str) -> str:
    """Validate a table name and return it unchanged."""
    return _validate_identifier(name, "Table")


def validate_column_name(name: str) -> str:
    """Validate a column name and return it unchanged."""
    return _validate_identifier(name, "Column")


def validate_row_count(count: int) -> int:
    """Row counts must lie in ``1..MAX_ROW_COUNT``."""
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise SchemaValidationError("Row count must be a positive number")

    if count > MAX_ROW_COUNT:
        raise SchemaValidationError(f"Row count cannot exceed {MAX_ROW_COUNT:,}")

    return count


def validate_connection_string(connection_string: str) -> str:
    if not connection_string or not connection_string.strip():
        raise SchemaValidationError("Connection string cannot be empty")

    # sqlite:<path> is the one accepted form without a scheme separator
    if not connection_string.startswith("sqlite:") and "://" not in connection_string:
        raise SchemaValidationError("Invalid connection string format")

    return connection_string


def validate_file_path(path: str) -> str:
    if not path or not str(path).strip():
        raise SchemaValidationError("File path cannot be empty")
    return path
