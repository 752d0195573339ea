"""Persistence workflow: prepare the table and insert rows chunk by chunk."""

import logging
import time
from typing import Callable, Optional, Sequence

from sqlalchemy import text
from tqdm import tqdm

from .database import open_connection
from .errors import InsertBatchError
from .models import InsertResult, Row, TableSchema


logger = logging.getLogger(__name__)


class DataInserter:
    """Creates the target table and inserts generated rows with progress tracking."""

    def __init__(self, show_progress: bool = True):
        self.show_progress = show_progress

    def insert(self, target, schema: TableSchema, rows: Sequence[Row],
               batch_size: int = 1000, drop_table: bool = False, truncate_table: bool = False,
               progress_callback: Optional[Callable[[str, int, int], None]] = None) -> InsertResult:
        """Insert ``rows`` into ``target``.

        The table is dropped (optional), created if missing and truncated
        (optional) before inserting. A failed chunk does not raise: the
        returned result carries the committed count and the error. Connection
        and DDL errors propagate. The connection is closed on every path.
        """
        result = InsertResult(table_name=schema.name, rows_requested=len(rows))
        start_time = time.time()

        with open_connection(target) as (connector, handle):
            if drop_table:
                logger.info(f"Dropping table: {schema.name}")
                connector.drop_table(handle, schema.name)

            logger.info(f"Creating table: {schema.name}")
            connector.create_table(handle, schema)

            if truncate_table:
                logger.info(f"Truncating table: {schema.name}")
                connector.truncate_table(handle, schema.name)

            if not rows:
                logger.warning(f"No data to insert for table: {schema.name}")
                return result

            logger.info(f"Inserting {len(rows)} rows into table: {schema.name}")

            with tqdm(total=len(rows), desc=f"Inserting {schema.name}",
                      disable=not self.show_progress) as pbar:
                def on_chunk(chunk_size: int) -> None:
                    result.committed_count += chunk_size
                    pbar.update(chunk_size)
                    if progress_callback:
                        progress_callback(schema.name, result.committed_count, len(rows))

                try:
                    connector.insert_batch(handle, schema, rows, batch_size, on_chunk)
                except InsertBatchError as e:
                    result.committed_count = e.committed_count
                    result.error = e
                    logger.error(f"Inserted {e.committed_count}/{len(rows)} rows into "
                                 f"{schema.name} before failure: {e}")

        result.time_seconds = time.time() - start_time
        if result.error is None:
            logger.info(f"Successfully inserted {result.committed_count}/{len(rows)} rows into "
                        f"{schema.name} in {result.time_seconds:.2f} seconds")
        return result

    def get_table_row_count(self, target, table_name: str) -> int:
        """Get current row count for a table."""
        with open_connection(target) as (_, handle):
            return handle.execute(text(f"SELECT COUNT(*) FROM {table_name}")).scalar() or 0
