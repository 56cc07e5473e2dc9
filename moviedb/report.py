import logging

import pandas as pd
from pandas.errors import DatabaseError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from moviedb.errors import ReportError

# Three best-ranked movies per genre. Ranks that are not stored as numbers
# (e.g. the "NULL" sentinel string) are left out.
TOP_RANKED_SQL = """
WITH ranked_movies AS (
    SELECT
        m.name,
        m.rank,
        mg.genre,
        m.year,
        ROW_NUMBER() OVER (
            PARTITION BY mg.genre
            ORDER BY m.rank DESC
        ) AS rank_position
    FROM movies m
    INNER JOIN movies_genres mg ON m.id = mg.movie_id
    WHERE m.rank IS NOT NULL
      AND typeof(m.rank) IN ('integer', 'real')
)
SELECT
    genre,
    name,
    year,
    rank
FROM ranked_movies
WHERE rank_position <= 3
ORDER BY genre, rank DESC;
"""


def format_row(genre, name, year, rank):
    return f'{genre},"{name}",{int(year)},{float(rank):.1f}\n'


def export_top_ranked(engine, output_path):
    """Writes the top three movies of every genre to output_path, overwriting it.

    Returns the number of lines written. Query failures are raised as
    ReportError; rows that can't be formatted are logged and skipped.
    """
    logging.info("Querying the database")
    try:
        with engine.connect() as conn:
            df = pd.read_sql(text(TOP_RANKED_SQL), conn)
    except (SQLAlchemyError, DatabaseError) as e:
        logging.error(f"Error executing query: {e}")
        raise ReportError(f"Ranking query failed: {e}") from e

    written = 0
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        for row in df.itertuples(index=False, name=None):
            try:
                line = format_row(*row)
            except (TypeError, ValueError) as e:
                logging.error(f"Error scanning row {row}: {e}")
                continue
            f.write(line)
            written += 1

    logging.info(f"Successfully exported {written:,} query results to {output_path}")
    return written
