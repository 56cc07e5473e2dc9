import csv
import logging
import os
import sys
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError

from moviedb.config import create_store_engine, load_settings
from moviedb.errors import ReportError, SchemaProvisioningError, UnknownTableError
from moviedb.load import load_file, provision
from moviedb.report import export_top_ranked
from moviedb.schema import LOAD_ORDER, default_registry
from moviedb.transform.null_values import normalize_null_ranks


@dataclass
class BootstrapSummary:
    results: list = field(default_factory=list)
    failed_tables: list = field(default_factory=list)

    @property
    def ok(self):
        return not self.failed_tables


def bootstrap(settings, registry):
    """Creates and fills the database unless the database file already exists.

    Returns None when the bootstrap was skipped. Schema errors, missing CSV
    files and unparsable CSV abort the run; a table that fails part way
    through is logged and the next table is loaded anyway.
    """
    db_path = settings.database_path
    if os.path.exists(db_path):
        logging.info(f"Database {db_path} already exists. Skipping creation process")
        return None

    engine = create_store_engine(db_path)
    try:
        provision(engine, registry)
    finally:
        engine.dispose()

    summary = BootstrapSummary()
    engine = create_store_engine(db_path)
    try:
        for table_name in LOAD_ORDER:
            try:
                result = load_file(
                    table_name,
                    settings.source_path(table_name),
                    engine,
                    registry,
                    progress_every=settings.progress_every,
                    null_sentinel=settings.null_sentinel,
                )
            except UnknownTableError as e:
                logging.error(f"Skipping {table_name}: {e}")
                summary.failed_tables.append(table_name)
                continue
            summary.results.append(result)
            if not result.ok:
                summary.failed_tables.append(table_name)
    finally:
        engine.dispose()

    if summary.ok:
        logging.info("Tables successfully loaded")
    else:
        logging.warning(f"Tables loaded with errors in: {', '.join(summary.failed_tables)}")
    return summary


def main():
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    logging.info(f"Starting movie database bootstrap ({settings.database_path})")

    try:
        bootstrap(settings, default_registry())
    except (SchemaProvisioningError, OSError, csv.Error) as e:
        logging.error(f"Bootstrap FAILED: {e}")
        sys.exit(1)

    engine = create_store_engine(settings.database_path)
    try:
        if settings.normalize_null_ranks:
            try:
                normalize_null_ranks(engine, settings.null_sentinel)
            except SQLAlchemyError as e:
                logging.error(f"Could not normalize null ranks: {e}")
        export_top_ranked(engine, settings.output_path)
    except ReportError as e:
        logging.error(f"Report step failed: {e}")
    except OSError as e:
        logging.error(f"Could not write {settings.output_path}: {e}")
        sys.exit(1)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
