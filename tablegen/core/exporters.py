"""File exporters: JSON, CSV, SQL script, TypeScript interface and Prisma model."""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from .dialects import build_script
from .models import Dialect, ExportFormat, GeneratorKind, Row, TableSchema


logger = logging.getLogger(__name__)

TEXT_KINDS = frozenset([
    GeneratorKind.FIRST_NAME, GeneratorKind.LAST_NAME, GeneratorKind.FULL_NAME,
    GeneratorKind.EMAIL, GeneratorKind.USERNAME, GeneratorKind.PASSWORD,
    GeneratorKind.SENTENCE, GeneratorKind.PARAGRAPH, GeneratorKind.WORD, GeneratorKind.SLUG,
    GeneratorKind.DATE, GeneratorKind.FUTURE_DATE, GeneratorKind.PAST_DATE,
    GeneratorKind.RECENT_DATE, GeneratorKind.TIMESTAMP,
    GeneratorKind.URL, GeneratorKind.DOMAIN_NAME, GeneratorKind.IP_ADDRESS,
    GeneratorKind.USER_AGENT, GeneratorKind.UUID,
    GeneratorKind.PHONE_NUMBER, GeneratorKind.STREET_ADDRESS, GeneratorKind.CITY,
    GeneratorKind.COUNTRY, GeneratorKind.ZIP_CODE, GeneratorKind.STATE,
    GeneratorKind.COMPANY_NAME, GeneratorKind.JOB_TITLE, GeneratorKind.DEPARTMENT,
    GeneratorKind.PRODUCT_NAME, GeneratorKind.PRODUCT_DESCRIPTION, GeneratorKind.CATEGORY,
    GeneratorKind.IMAGE_URL, GeneratorKind.AVATAR_URL,
])

NUMBER_KINDS = frozenset([
    GeneratorKind.INTEGER, GeneratorKind.FLOAT, GeneratorKind.PRICE,
    GeneratorKind.PERCENTAGE, GeneratorKind.RANGE,
    GeneratorKind.LATITUDE, GeneratorKind.LONGITUDE,
])

WHOLE_NUMBER_KINDS = frozenset([GeneratorKind.INTEGER, GeneratorKind.RANGE])


def _prepare_path(output_path: Union[str, Path]) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def model_name(table_name: str) -> str:
    """``order_items`` -> ``OrderItems``."""
    return "".join(part[:1].upper() + part[1:] for part in table_name.split("_") if part) or table_name


def export_json(rows: Sequence[Row], output_path: Union[str, Path], pretty: bool = True) -> Path:
    """Write the full row sequence as a JSON array."""
    rows = list(rows)
    path = _prepare_path(output_path)
    with open(path, "w", encoding="utf-8") as f:
        if pretty:
            json.dump(rows, f, indent=2, default=str, ensure_ascii=False)
        else:
            json.dump(rows, f, separators=(",", ":"), default=str, ensure_ascii=False)
    logger.info(f"Exported {len(rows)} rows to JSON: {path}")
    return path


def csv_value(value: Any) -> Any:
    """Text form of a value in a CSV field."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def export_csv(rows: Iterable[Row], output_path: Union[str, Path], columns: List[str]) -> Path:
    """Write a header row from ``columns`` and one record per row."""
    path = _prepare_path(output_path)
    count = 0
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(columns)
        for row in rows:
            writer.writerow([csv_value(row.get(column)) for column in columns])
            count += 1
    logger.info(f"Exported {count} rows to CSV: {path}")
    return path


def export_sql(schema: TableSchema, rows: Iterable[Row], output_path: Union[str, Path],
               dialect: Union[Dialect, str] = Dialect.SQLITE) -> Path:
    path = _prepare_path(output_path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(build_script(schema, rows, dialect))
    logger.info(f"Exported SQL script ({Dialect(dialect).value}) to: {path}")
    return path


def typescript_type(kind) -> str:
    if kind in TEXT_KINDS:
        return "string"
    if kind in NUMBER_KINDS:
        return "number"
    if kind == GeneratorKind.BOOLEAN:
        return "boolean"
    if kind == GeneratorKind.JSON:
        return "Record<string, unknown>"
    return "any"


def build_typescript_interface(schema: TableSchema) -> str:
    fields = []
    for column in schema.columns:
        optional = "" if column.constraints.not_null else "?"
        fields.append(f"  {column.name}{optional}: {typescript_type(column.kind)};")
    body = "\n".join(fields)
    return f"export interface {model_name(schema.name)} {{\n{body}\n}}\n"


def export_typescript(schema: TableSchema, output_path: Union[str, Path]) -> Path:
    path = _prepare_path(output_path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(build_typescript_interface(schema))
    logger.info(f"Exported TypeScript interface to: {path}")
    return path


def prisma_type(kind) -> str:
    if kind in NUMBER_KINDS:
        return "Int" if kind in WHOLE_NUMBER_KINDS else "Float"
    if kind == GeneratorKind.BOOLEAN:
        return "Boolean"
    if kind == GeneratorKind.JSON:
        return "Json"
    return "String"


def _prisma_default(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value)
    return repr(value)


def build_prisma_model(schema: TableSchema) -> str:
    lines = []
    for column in schema.columns:
        constraints = column.constraints
        field_type = prisma_type(column.kind)
        if constraints.not_null is False:
            field_type += "?"

        attributes = []
        if constraints.primary_key:
            attributes.append("@id")
        if constraints.unique:
            attributes.append("@unique")
        if constraints.has_default:
            attributes.append(f"@default({_prisma_default(constraints.default_value)})")

        line = f"  {column.name} {field_type}"
        if attributes:
            line += " " + " ".join(attributes)
        lines.append(line)

    body = "\n".join(lines)
    return f"model {model_name(schema.name)} {{\n{body}\n}}\n"


def export_prisma(schema: TableSchema, output_path: Union[str, Path]) -> Path:
    path = _prepare_path(output_path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(build_prisma_model(schema))
    logger.info(f"Exported Prisma model to: {path}")
    return path


def export_data(export_format: Union[ExportFormat, str], schema: TableSchema, rows: Sequence[Row],
                output_path: Union[str, Path], dialect: Optional[Union[Dialect, str]] = None,
                pretty: bool = True) -> Path:
    """Write ``rows``/``schema`` to ``output_path`` in ``export_format``."""
    export_format = ExportFormat(export_format)

    if export_format == ExportFormat.JSON:
        return export_json(rows, output_path, pretty=pretty)
    elif export_format == ExportFormat.CSV:
        return export_csv(rows, output_path, schema.column_names)
    elif export_format == ExportFormat.SQL:
        return export_sql(schema, rows, output_path, dialect or Dialect.SQLITE)
    elif export_format == ExportFormat.TYPESCRIPT:
        return export_typescript(schema, output_path)
    else:
        return export_prisma(schema, output_path)
