"""Tests for SQL dialect mapping."""

import pytest

from tablegen.core.dialects import (
    build_column_definition, build_create_table, build_insert_statements,
    build_parameterized_insert, build_script, column_type, constraint_clauses, render_literal,
)
from tablegen.core.models import (
    ColumnConstraints, ColumnSpec, Dialect, GeneratorKind, TableSchema,
)


class TestColumnType:
    """Test kind -> native type mapping."""

    @pytest.mark.parametrize("dialect", list(Dialect))
    @pytest.mark.parametrize("kind", list(GeneratorKind))
    def test_every_kind_maps_in_every_dialect(self, kind, dialect):
        assert column_type(kind, dialect)

    @pytest.mark.parametrize("dialect,expected", [
        (Dialect.SQLITE, "INTEGER"),
        (Dialect.POSTGRESQL, "NUMERIC"),
        (Dialect.MYSQL, "DECIMAL(10,2)"),
    ])
    def test_price(self, dialect, expected):
        assert column_type(GeneratorKind.PRICE, dialect) == expected

    @pytest.mark.parametrize("kind,dialect,expected", [
        (GeneratorKind.INTEGER, Dialect.MYSQL, "INT"),
        (GeneratorKind.INTEGER, Dialect.POSTGRESQL, "INTEGER"),
        (GeneratorKind.RANGE, Dialect.MYSQL, "INT"),
        (GeneratorKind.BOOLEAN, Dialect.SQLITE, "INTEGER"),
        (GeneratorKind.BOOLEAN, Dialect.POSTGRESQL, "BOOLEAN"),
        (GeneratorKind.BOOLEAN, Dialect.MYSQL, "TINYINT(1)"),
        (GeneratorKind.JSON, Dialect.SQLITE, "TEXT"),
        (GeneratorKind.JSON, Dialect.POSTGRESQL, "JSONB"),
        (GeneratorKind.JSON, Dialect.MYSQL, "JSON"),
        (GeneratorKind.EMAIL, Dialect.MYSQL, "VARCHAR(255)"),
        (GeneratorKind.TIMESTAMP, Dialect.POSTGRESQL, "TEXT"),
        (GeneratorKind.LATITUDE, Dialect.POSTGRESQL, "NUMERIC"),
    ])
    def test_specific_types(self, kind, dialect, expected):
        assert column_type(kind, dialect) == expected

    def test_unknown_kind_is_text(self):
        assert column_type("hologram", "mysql") == "VARCHAR(255)"

    def test_accepts_dialect_string(self):
        assert column_type(GeneratorKind.JSON, "postgresql") == "JSONB"


class TestRenderLiteral:
    """Test literal rendering for standalone scripts."""

    def test_null(self):
        assert render_literal(None, Dialect.SQLITE) == "NULL"

    def test_quote_escaping(self):
        assert render_literal("O'Brien", Dialect.POSTGRESQL) == "'O''Brien'"

    @pytest.mark.parametrize("dialect,true_text,false_text", [
        (Dialect.SQLITE, "TRUE", "FALSE"),
        (Dialect.POSTGRESQL, "TRUE", "FALSE"),
        (Dialect.MYSQL, "1", "0"),
    ])
    def test_booleans(self, dialect, true_text, false_text):
        assert render_literal(True, dialect) == true_text
        assert render_literal(False, dialect) == false_text

    def test_numbers_unquoted(self):
        assert render_literal(42, Dialect.MYSQL) == "42"
        assert render_literal(19.99, Dialect.MYSQL) == "19.99"

    def test_json_values(self):
        assert render_literal({"a": "it's"}, Dialect.POSTGRESQL) == "'{\"a\": \"it''s\"}'"


class TestConstraints:
    """Test constraint clauses and column definitions."""

    def test_clause_order(self):
        column = ColumnSpec(name="code", kind="word", constraints=ColumnConstraints(
            default_value="x", not_null=True, unique=True, primary_key=True,
        ))
        assert constraint_clauses(column, Dialect.SQLITE) == [
            "PRIMARY KEY", "UNIQUE", "NOT NULL", "DEFAULT 'x'",
        ]

    def test_no_constraints(self):
        assert constraint_clauses(ColumnSpec(name="note"), Dialect.SQLITE) == []

    def test_boolean_default_per_dialect(self):
        column = ColumnSpec(name="active", kind="boolean",
                            constraints=ColumnConstraints(default_value=True))
        assert build_column_definition(column, Dialect.MYSQL) == "active TINYINT(1) DEFAULT 1"
        assert build_column_definition(column, Dialect.POSTGRESQL) == "active BOOLEAN DEFAULT TRUE"


class TestStatements:
    """Test CREATE TABLE and INSERT text."""

    def test_create_table(self, users_schema):
        assert build_create_table(users_schema, Dialect.POSTGRESQL) == (
            "CREATE TABLE IF NOT EXISTS users (\n"
            "  id TEXT UNIQUE NOT NULL,\n"
            "  age INTEGER,\n"
            "  email TEXT\n"
            ");"
        )

    def test_insert_statements(self):
        schema = TableSchema(name="notes", columns=[
            ColumnSpec(name="title"), ColumnSpec(name="done", kind="boolean"),
        ])
        rows = [{"title": "it's", "done": True}, {"title": None, "done": False}]
        assert build_insert_statements(schema, rows, Dialect.MYSQL) == (
            "INSERT INTO notes (title, done) VALUES ('it''s', 1);\n"
            "INSERT INTO notes (title, done) VALUES (NULL, 0);"
        )

    def test_missing_column_renders_null(self):
        schema = TableSchema(name="notes", columns=[ColumnSpec(name="title")])
        assert "VALUES (NULL)" in build_insert_statements(schema, [{}], Dialect.SQLITE)

    def test_parameterized_insert(self, users_schema):
        assert build_parameterized_insert(users_schema) == (
            "INSERT INTO users (id, age, email) VALUES (:p0, :p1, :p2)"
        )

    def test_script(self, users_schema):
        rows = [{"id": "a", "age": 1, "email": "a@example.com"}]
        script = build_script(users_schema, rows, Dialect.SQLITE)
        create, inserts = script.split("\n\n")
        assert create.startswith("CREATE TABLE IF NOT EXISTS users")
        assert inserts == "INSERT INTO users (id, age, email) VALUES ('a', 1, 'a@example.com');"
