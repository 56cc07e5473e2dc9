import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from moviedb.errors import SchemaProvisioningError


def provision(engine, registry):
    """Creates every table that doesn't exist yet, referenced tables first.

    Each statement is committed on its own; tables created before a failure
    are left in place.
    """
    with engine.connect() as conn:
        for table_name in registry.dependency_order():
            try:
                conn.execute(text(registry.create_sql(table_name)))
                conn.commit()
            except SQLAlchemyError as e:
                logging.error(f"Error creating table {table_name}: {e}")
                raise SchemaProvisioningError(table_name, e) from e
            logging.info(f"Ensured table {table_name}")
    logging.info("Tables successfully created")
