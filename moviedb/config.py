import os
from dataclasses import dataclass

from dotenv import load_dotenv
from sqlalchemy import create_engine

load_dotenv()

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_path: str = "./movies.db"
    data_dir: str = "./data"
    output_path: str = "./query_results.csv"
    null_sentinel: str = "NULL"
    normalize_null_ranks: bool = False
    progress_every: int = 10_000
    log_level: str = "INFO"

    def source_path(self, table_name):
        return os.path.join(self.data_dir, f"IMDB-{table_name}.csv")


def load_settings():
    """Builds Settings from the environment (and .env, if present)."""
    defaults = Settings()
    progress_every = int(os.getenv("MOVIEDB_PROGRESS_EVERY", defaults.progress_every))
    if progress_every < 1:
        raise ValueError(f"MOVIEDB_PROGRESS_EVERY must be at least 1, got {progress_every}")
    return Settings(
        database_path=os.getenv("MOVIEDB_DATABASE_PATH", defaults.database_path),
        data_dir=os.getenv("MOVIEDB_DATA_DIR", defaults.data_dir),
        output_path=os.getenv("MOVIEDB_OUTPUT_PATH", defaults.output_path),
        null_sentinel=os.getenv("MOVIEDB_NULL_SENTINEL", defaults.null_sentinel),
        normalize_null_ranks=os.getenv("MOVIEDB_NORMALIZE_NULL_RANKS", "false").strip().lower() in TRUTHY,
        progress_every=progress_every,
        log_level=os.getenv("MOVIEDB_LOG_LEVEL", defaults.log_level).upper(),
    )


def create_store_engine(database_path):
    return create_engine(f"sqlite:///{database_path}")
