"""Row generation engine with per-row deterministic seeding."""

import logging
from typing import Iterator, List, Optional

from .models import GenerationConfig, Row, TableSchema
from .registry import ValueGenerator


logger = logging.getLogger(__name__)


class RowGenerator:
    """Generates rows for a table schema.

    Before row ``i`` the value generator is re-seeded with ``seed + i`` (or
    ``i`` when no seed is given). Each row is therefore reproducible on its
    own and batching never changes a row's values.
    """

    def __init__(self, locale: str = "en", value_generator: Optional[ValueGenerator] = None):
        self.value_generator = value_generator or ValueGenerator(locale)

    def generate_row(self, schema: TableSchema, index: int, seed: Optional[int] = None) -> Row:
        """Generate the row at ``index`` (0-based)."""
        self.value_generator.reseed(seed + index if seed is not None else index)
        return {column.name: self.value_generator.generate(column) for column in schema.columns}

    def generate_rows(self, schema: TableSchema, row_count: int,
                      seed: Optional[int] = None) -> List[Row]:
        logger.info(f"Generating {row_count} rows for table: {schema.name}")
        rows = [self.generate_row(schema, i, seed) for i in range(row_count)]
        logger.info(f"Successfully generated {len(rows)} rows for {schema.name}")
        return rows

    def generate_rows_batch(self, schema: TableSchema, row_count: int, batch_size: int,
                            seed: Optional[int] = None) -> Iterator[List[Row]]:
        """Yield ``ceil(row_count / batch_size)`` chunks of consecutive rows."""
        if batch_size < 1:
            raise ValueError("Batch size must be a positive number")

        for start in range(0, row_count, batch_size):
            end = min(start + batch_size, row_count)
            logger.debug(f"Generating rows {start + 1}-{end}/{row_count} for {schema.name}")
            yield [self.generate_row(schema, i, seed) for i in range(start, end)]


def generate_rows(schema: TableSchema, row_count: int, locale: str = "en",
                  seed: Optional[int] = None) -> List[Row]:
    """Generate ``row_count`` rows for ``schema``."""
    return RowGenerator(locale).generate_rows(schema, row_count, seed)


def generate_rows_batch(schema: TableSchema, row_count: int, batch_size: int,
                        locale: str = "en", seed: Optional[int] = None) -> Iterator[List[Row]]:
    """Chunked variant of :func:`generate_rows`, producing the same rows."""
    return RowGenerator(locale).generate_rows_batch(schema, row_count, batch_size, seed)


def generate_from_config(schema: TableSchema, config: GenerationConfig) -> List[Row]:
    """Generate rows using a validated :class:`GenerationConfig`."""
    return generate_rows(schema, config.row_count, config.locale, config.seed)
