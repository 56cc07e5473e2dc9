"""Bootstrap a SQLite movie database from IMDB CSV extracts and report on it."""

__version__ = "0.1.0"
