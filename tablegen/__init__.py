"""
TableGen - Generate realistic dummy tables from a declared schema.

This package provides tools to:
- Generate reproducible fake rows for a table schema
- Export them as JSON, CSV, SQL scripts, TypeScript interfaces or Prisma models
- Persist them in batched transactions into SQLite, PostgreSQL or MySQL
"""

__version__ = "1.0.0"

from tablegen.core.models import (
    ColumnConstraints, ColumnSpec, Dialect, ExportFormat, GenerationConfig, GeneratorKind,
    TableSchema,
)
from tablegen.core.generator import RowGenerator, generate_rows, generate_rows_batch
from tablegen.core.exporters import export_data
from tablegen.core.inserter import DataInserter

__all__ = [
    "ColumnConstraints",
    "ColumnSpec",
    "Dialect",
    "ExportFormat",
    "GenerationConfig",
    "GeneratorKind",
    "TableSchema",
    "RowGenerator",
    "generate_rows",
    "generate_rows_batch",
    "export_data",
    "DataInserter",
]
