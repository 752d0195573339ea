"""SQL dialect mapping: column types, constraint clauses and INSERT text."""

import json
from typing import Any, Dict, Iterable, List, Union

from .models import ColumnSpec, Dialect, GeneratorKind, Row, TableSchema


INTEGER_KINDS = frozenset([GeneratorKind.INTEGER, GeneratorKind.RANGE])

NUMERIC_KINDS = frozenset([
    GeneratorKind.FLOAT,
    GeneratorKind.PRICE,
    GeneratorKind.PERCENTAGE,
    GeneratorKind.LATITUDE,
    GeneratorKind.LONGITUDE,
])

# Per dialect: integer, numeric, boolean, json, everything else
TYPE_MAP: Dict[Dialect, Dict[str, str]] = {
    Dialect.SQLITE: {
        "integer": "INTEGER",
        "numeric": "INTEGER",
        "boolean": "INTEGER",
        "json": "TEXT",
        "text": "TEXT",
    },
    Dialect.POSTGRESQL: {
        "integer": "INTEGER",
        "numeric": "NUMERIC",
        "boolean": "BOOLEAN",
        "json": "JSONB",
        "text": "TEXT",
    },
    Dialect.MYSQL: {
        "integer": "INT",
        "numeric": "DECIMAL(10,2)",
        "boolean": "TINYINT(1)",
        "json": "JSON",
        "text": "VARCHAR(255)",
    },
}


def _type_group(kind: Union[GeneratorKind, str]) -> str:
    if kind in INTEGER_KINDS:
        return "integer"
    if kind in NUMERIC_KINDS:
        return "numeric"
    if kind == GeneratorKind.BOOLEAN:
        return "boolean"
    if kind == GeneratorKind.JSON:
        return "json"
    return "text"


def column_type(kind: Union[GeneratorKind, str], dialect: Union[Dialect, str]) -> str:
    """Native column type for a generator kind under ``dialect``."""
    return TYPE_MAP[Dialect(dialect)][_type_group(kind)]


def render_literal(value: Any, dialect: Union[Dialect, str]) -> str:
    """Render a Python value as a SQL literal for a standalone script."""
    dialect = Dialect(dialect)

    if value is None:
        return "NULL"
    if isinstance(value, bool):
        if dialect == Dialect.MYSQL:
            return "1" if value else "0"
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (dict, list)):
        value = json.dumps(value)
    return "'" + str(value).replace("'", "''") + "'"


def constraint_clauses(column: ColumnSpec, dialect: Union[Dialect, str]) -> List[str]:
    """Constraint clauses in order: PRIMARY KEY, UNIQUE, NOT NULL, DEFAULT."""
    constraints = column.constraints
    clauses = []

    if constraints.primary_key:
        clauses.append("PRIMARY KEY")
    if constraints.unique:
        clauses.append("UNIQUE")
    if constraints.not_null:
        clauses.append("NOT NULL")
    if constraints.has_default:
        clauses.append(f"DEFAULT {render_literal(constraints.default_value, dialect)}")

    return clauses


def build_column_definition(column: ColumnSpec, dialect: Union[Dialect, str]) -> str:
    parts = [column.name, column_type(column.kind, dialect)]
    parts.extend(constraint_clauses(column, dialect))
    return " ".join(parts)


def build_create_table(schema: TableSchema, dialect: Union[Dialect, str]) -> str:
    """Idempotent CREATE TABLE statement for ``schema``."""
    columns = ",\n".join(f"  {build_column_definition(column, dialect)}" for column in schema.columns)
    return f"CREATE TABLE IF NOT EXISTS {schema.name} (\n{columns}\n);"


def build_insert_statements(schema: TableSchema, rows: Iterable[Row],
                            dialect: Union[Dialect, str]) -> str:
    """One literal INSERT statement per row, newline separated."""
    columns = schema.column_names
    column_list = ", ".join(columns)

    statements = []
    for row in rows:
        values = ", ".join(render_literal(row.get(name), dialect) for name in columns)
        statements.append(f"INSERT INTO {schema.name} ({column_list}) VALUES ({values});")

    return "\n".join(statements)


def build_parameterized_insert(schema: TableSchema) -> str:
    """INSERT with named binds ``:p0``, ``:p1`` ... in schema column order."""
    columns = ", ".join(schema.column_names)
    placeholders = ", ".join(f":p{i}" for i in range(len(schema.columns)))
    return f"INSERT INTO {schema.name} ({columns}) VALUES ({placeholders})"


def build_script(schema: TableSchema, rows: Iterable[Row], dialect: Union[Dialect, str]) -> str:
    """CREATE TABLE followed by the INSERT statements."""
    return f"{build_create_table(schema, dialect)}\n\n{build_insert_statements(schema, rows, dialect)}"
