import logging
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from moviedb.errors import RecordInsertError, RecordShapeError
from moviedb.extract import read_records


@dataclass
class LoadResult:
    table: str
    total: int
    inserted: int = 0
    error: Exception = None

    @property
    def ok(self):
        return self.error is None


def load(table_name, records, engine, registry, progress_every=10_000, null_sentinel="NULL"):
    """Inserts records (header first) into table_name, one autocommitted insert each.

    Stops at the first record that fails validation or is rejected by the
    database; everything inserted before it stays. The failure is logged and
    returned on the LoadResult rather than raised.
    """
    schema = registry.get(table_name)
    records = records[1:]
    result = LoadResult(table=table_name, total=len(records))
    logging.info(f"Loading {table_name} table ({len(records):,} records)")

    statement = text(schema.insert_sql())
    autocommit = engine.execution_options(isolation_level="AUTOCOMMIT")
    with autocommit.connect() as conn:
        for i, record in enumerate(records):
            problem = schema.validate(record, null_sentinel)
            if problem:
                result.error = RecordShapeError(table_name, i, record, problem)
                break
            try:
                conn.execute(statement, schema.params(record))
            except SQLAlchemyError as e:
                result.error = RecordInsertError(table_name, i, record, getattr(e, "orig", None) or e)
                break
            result.inserted += 1
            if i % progress_every == 0:
                logging.info(f" {table_name} - Inserted {i:,} records ({i / len(records) * 100:.2f}%)")

    if result.error is not None:
        logging.error(f"Error inserting record, stopping {table_name}: {result.error}")
        logging.error(f"{table_name}: {result.inserted:,} of {result.total:,} records loaded")
    else:
        logging.info(f"Loaded {result.inserted:,} records into {table_name}")
    return result


def load_file(table_name, path, engine, registry, progress_every=10_000, null_sentinel="NULL"):
    registry.get(table_name)
    logging.info(f"Loading {table_name} table with {path}")
    records = read_records(path)
    return load(
        table_name, records, engine, registry,
        progress_every=progress_every, null_sentinel=null_sentinel,
    )
