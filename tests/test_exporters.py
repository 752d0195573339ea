"""Tests for file exporters."""

import csv
import json

import pytest

from tablegen.core.exporters import (
    build_prisma_model, build_typescript_interface, export_csv, export_data, export_json,
    export_prisma, export_sql, export_typescript, model_name, prisma_type, typescript_type,
)
from tablegen.core.generator import generate_rows
from tablegen.core.models import (
    ColumnConstraints, ColumnSpec, Dialect, ExportFormat, GeneratorKind, TableSchema,
)


@pytest.fixture
def rows():
    return [
        {"id": "a1", "age": 3, "email": "a@example.com"},
        {"id": "b2", "age": None, "email": "b, \"quoted\"@example.com"},
    ]


class TestJsonExport:
    """Test JSON export."""

    def test_round_trip(self, tmp_path, users_schema):
        data = generate_rows(users_schema, 20, seed=42)
        path = export_json(data, tmp_path / "users.json")
        assert json.loads(path.read_text(encoding="utf-8")) == data

    def test_pretty_and_compact(self, tmp_path, rows):
        pretty = export_json(rows, tmp_path / "pretty.json").read_text()
        compact = export_json(rows, tmp_path / "compact.json", pretty=False).read_text()
        assert "\n  " in pretty
        assert "\n" not in compact
        assert json.loads(pretty) == json.loads(compact)

    def test_creates_parent_directories(self, tmp_path, rows):
        path = export_json(rows, tmp_path / "nested" / "deeper" / "out.json")
        assert path.exists()

    def test_overwrites_existing_file(self, tmp_path, rows):
        target = tmp_path / "out.json"
        target.write_text("stale content that is longer than the new file " * 20)
        export_json(rows[:1], target)
        assert json.loads(target.read_text()) == rows[:1]


class TestCsvExport:
    """Test CSV export."""

    def test_header_and_quoting(self, tmp_path, rows):
        path = export_csv(rows, tmp_path / "users.csv", ["id", "age", "email"])
        with open(path, newline="", encoding="utf-8") as f:
            records = list(csv.reader(f))

        assert records[0] == ["id", "age", "email"]
        assert records[1] == ["a1", "3", "a@example.com"]
        assert records[2] == ["b2", "", "b, \"quoted\"@example.com"]

    def test_booleans_and_json(self, tmp_path):
        data = [{"flag": True, "payload": {"k": 1}}, {"flag": False, "payload": None}]
        path = export_csv(data, tmp_path / "flags.csv", ["flag", "payload"])
        with open(path, newline="", encoding="utf-8") as f:
            records = list(csv.reader(f))
        assert records[1] == ["true", '{"k": 1}']
        assert records[2] == ["false", ""]

    def test_generated_rows_round_trip(self, tmp_path, users_schema):
        data = generate_rows(users_schema, 15, seed=9)
        path = export_csv(data, tmp_path / "users.csv", users_schema.column_names)
        with open(path, newline="", encoding="utf-8") as f:
            records = list(csv.DictReader(f))
        assert [r["email"] for r in records] == [row["email"] for row in data]
        assert [int(r["age"]) for r in records] == [row["age"] for row in data]


class TestSqlExport:
    """Test SQL script export."""

    def test_script_written(self, tmp_path, users_schema, rows):
        path = export_sql(users_schema, rows, tmp_path / "users.sql", Dialect.MYSQL)
        content = path.read_text(encoding="utf-8")
        assert content.startswith("CREATE TABLE IF NOT EXISTS users (")
        assert "id VARCHAR(255) UNIQUE NOT NULL" in content
        assert content.count("INSERT INTO users") == 2
        assert "'b, \"quoted\"@example.com'" in content


class TestSchemaExports:
    """Test TypeScript and Prisma schema output."""

    def test_model_name(self):
        assert model_name("order_items") == "OrderItems"
        assert model_name("users") == "Users"

    def test_typescript_types(self):
        assert typescript_type(GeneratorKind.EMAIL) == "string"
        assert typescript_type(GeneratorKind.PRICE) == "number"
        assert typescript_type(GeneratorKind.BOOLEAN) == "boolean"
        assert typescript_type(GeneratorKind.JSON) == "Record<string, unknown>"
        assert typescript_type(GeneratorKind.LITERAL) == "any"
        assert typescript_type("hologram") == "any"

    def test_typescript_interface(self, users_schema):
        assert build_typescript_interface(users_schema) == (
            "export interface Users {\n"
            "  id: string;\n"
            "  age?: number;\n"
            "  email?: string;\n"
            "}\n"
        )

    def test_prisma_types(self):
        assert prisma_type(GeneratorKind.INTEGER) == "Int"
        assert prisma_type(GeneratorKind.RANGE) == "Int"
        assert prisma_type(GeneratorKind.PRICE) == "Float"
        assert prisma_type(GeneratorKind.BOOLEAN) == "Boolean"
        assert prisma_type(GeneratorKind.JSON) == "Json"
        assert prisma_type(GeneratorKind.UUID) == "String"

    def test_prisma_model(self):
        schema = TableSchema(name="order_items", columns=[
            ColumnSpec(name="id", kind="uuid",
                       constraints=ColumnConstraints(primary_key=True, not_null=True)),
            ColumnSpec(name="sku", kind="slug", constraints=ColumnConstraints(unique=True)),
            ColumnSpec(name="quantity", kind="integer",
                       constraints=ColumnConstraints(default_value=1, not_null=False)),
            ColumnSpec(name="status", kind="literal",
                       constraints=ColumnConstraints(default_value="new")),
            ColumnSpec(name="gift", kind="boolean",
                       constraints=ColumnConstraints(default_value=False)),
        ])
        assert build_prisma_model(schema) == (
            "model OrderItems {\n"
            "  id String @id\n"
            "  sku String @unique\n"
            "  quantity Int? @default(1)\n"
            "  status String @default(\"new\")\n"
            "  gift Boolean @default(false)\n"
            "}\n"
        )

    def test_schema_files_written(self, tmp_path, users_schema):
        ts_path = export_typescript(users_schema, tmp_path / "types" / "users.ts")
        prisma_path = export_prisma(users_schema, tmp_path / "users.prisma")
        assert ts_path.read_text().startswith("export interface Users {")
        assert prisma_path.read_text().startswith("model Users {")


class TestExportData:
    """Test the format dispatcher."""

    @pytest.mark.parametrize("fmt,marker", [
        (ExportFormat.JSON, "["),
        (ExportFormat.CSV, "id,age,email"),
        (ExportFormat.SQL, "CREATE TABLE IF NOT EXISTS users"),
        (ExportFormat.TYPESCRIPT, "export interface Users"),
        (ExportFormat.PRISMA, "model Users"),
    ])
    def test_dispatch(self, tmp_path, users_schema, rows, fmt, marker):
        path = export_data(fmt, users_schema, rows, tmp_path / f"users{fmt.extension}")
        assert path.read_text(encoding="utf-8").startswith(marker)

    def test_dispatch_by_string(self, tmp_path, users_schema, rows):
        path = export_data("sql", users_schema, rows, tmp_path / "users.sql", dialect="postgresql")
        assert "id TEXT UNIQUE NOT NULL" in path.read_text()

    def test_unknown_format(self, tmp_path, users_schema, rows):
        with pytest.raises(ValueError):
            export_data("xml", users_schema, rows, tmp_path / "users.xml")
