import logging

from sqlalchemy import text


def normalize_null_ranks(engine, sentinel="NULL"):
    """Replaces the sentinel string in movies.rank with a real NULL."""
    logging.info(f"Replacing {sentinel!r} ranks with NULL ...")
    with engine.begin() as conn:
        result = conn.execute(
            text("UPDATE movies SET rank = NULL WHERE rank = :sentinel"),
            {"sentinel": sentinel},
        )
    logging.info(f"movies.rank cleaned: {result.rowcount:,} rows updated.")
    return result.rowcount
