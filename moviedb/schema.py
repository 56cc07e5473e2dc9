"""Table definitions for the movie database.

Each table carries two views of itself: the columns and constraints used to
create it, and the ordered, typed bindings an insert for it expects. The
bindings follow the column order of the matching IMDB CSV extract.
"""
import enum
import re
from dataclasses import dataclass, field

from moviedb.errors import UnknownTableError


class FieldType(enum.Enum):
    INTEGER = "integer"
    REAL = "real"
    TEXT = "text"


INTEGER_RE = re.compile(r"^\s*[-+]?\d+\s*$")


@dataclass(frozen=True)
class Binding:
    column: str
    type: FieldType = FieldType.TEXT
    nullable: bool = True

    def check(self, value, null_sentinel="NULL"):
        """Returns None when value fits this binding, otherwise the reason it doesn't."""
        if self.type is FieldType.TEXT:
            return None
        if value.strip() == "" or value == null_sentinel:
            return None if self.nullable else f"{self.column} is required"
        if self.type is FieldType.INTEGER:
            if INTEGER_RE.match(value):
                return None
            return f"{self.column} expects an integer, got {value!r}"
        try:
            float(value)
        except ValueError:
            return f"{self.column} expects a number, got {value!r}"
        return None


@dataclass(frozen=True)
class TableSchema:
    name: str
    columns: tuple
    bindings: tuple
    constraints: tuple = ()
    references: tuple = field(default=())

    def create_sql(self):
        lines = [f'"{col}" {decl}' for col, decl in self.columns]
        lines.extend(self.constraints)
        body = ",\n    ".join(lines)
        return f"CREATE TABLE IF NOT EXISTS {self.name} (\n    {body}\n);"

    def insert_sql(self):
        cols = ", ".join(b.column for b in self.bindings)
        params = ", ".join(f":{b.column}" for b in self.bindings)
        return f"INSERT INTO {self.name} ({cols}) VALUES ({params})"

    def validate(self, record, null_sentinel="NULL"):
        """Returns None if record matches the bindings, otherwise a reason string."""
        if len(record) != len(self.bindings):
            return f"expected {len(self.bindings)} fields, got {len(record)}"
        for binding, value in zip(self.bindings, record):
            problem = binding.check(value, null_sentinel)
            if problem:
                return problem
        return None

    def params(self, record):
        return {b.column: value for b, value in zip(self.bindings, record)}


class SchemaRegistry:
    def __init__(self, tables):
        self._tables = {t.name: t for t in tables}

    def __contains__(self, table_name):
        return table_name in self._tables

    def __iter__(self):
        return iter(self._tables.values())

    def names(self):
        return list(self._tables)

    def get(self, table_name):
        try:
            return self._tables[table_name]
        except KeyError:
            raise UnknownTableError(table_name) from None

    def create_sql(self, table_name):
        return self.get(table_name).create_sql()

    def insert_sql(self, table_name):
        return self.get(table_name).insert_sql()

    def dependency_order(self):
        """Table names with every referenced table ahead of the tables referencing it.

        Ties keep registration order.
        """
        ordered, done = [], set()
        pending = list(self._tables.values())
        while pending:
            ready = [t for t in pending if all(r in done or r == t.name for r in t.references)]
            if not ready:
                names = ", ".join(t.name for t in pending)
                raise ValueError(f"Circular or missing table references among: {names}")
            for table in ready:
                ordered.append(table.name)
                done.add(table.name)
            pending = [t for t in pending if t.name not in done]
        return ordered


ACTORS = TableSchema(
    name="actors",
    columns=(
        ("id", "INTEGER NOT NULL PRIMARY KEY"),
        ("first_name", "TEXT"),
        ("last_name", "TEXT"),
        ("gender", "TEXT"),
    ),
    bindings=(
        Binding("id", FieldType.INTEGER, nullable=False),
        Binding("first_name"),
        Binding("last_name"),
        Binding("gender"),
    ),
)

MOVIES = TableSchema(
    name="movies",
    columns=(
        ("id", "INTEGER NOT NULL PRIMARY KEY"),
        ("name", "TEXT"),
        ("year", "INTEGER"),
        ("rank", "REAL"),
    ),
    bindings=(
        Binding("id", FieldType.INTEGER, nullable=False),
        Binding("name"),
        Binding("year", FieldType.INTEGER),
        Binding("rank", FieldType.REAL),
    ),
)

DIRECTORS = TableSchema(
    name="directors",
    columns=(
        ("id", "INTEGER NOT NULL PRIMARY KEY"),
        ("first_name", "TEXT"),
        ("last_name", "TEXT"),
    ),
    bindings=(
        Binding("id", FieldType.INTEGER, nullable=False),
        Binding("first_name"),
        Binding("last_name"),
    ),
)

ROLES = TableSchema(
    name="roles",
    columns=(
        ("id", "INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT"),
        ("actor_id", "INTEGER"),
        ("movie_id", "INTEGER"),
        ("role", "TEXT"),
    ),
    constraints=(
        "FOREIGN KEY(actor_id) REFERENCES actors(id)",
        "FOREIGN KEY(movie_id) REFERENCES movies(id)",
    ),
    references=("actors", "movies"),
    bindings=(
        Binding("actor_id", FieldType.INTEGER, nullable=False),
        Binding("movie_id", FieldType.INTEGER, nullable=False),
        Binding("role"),
    ),
)

MOVIES_GENRES = TableSchema(
    name="movies_genres",
    columns=(
        ("movie_id", "INTEGER"),
        ("genre", "TEXT"),
    ),
    constraints=(
        "PRIMARY KEY(movie_id, genre)",
        "FOREIGN KEY(movie_id) REFERENCES movies(id)",
    ),
    references=("movies",),
    bindings=(
        Binding("movie_id", FieldType.INTEGER, nullable=False),
        Binding("genre"),
    ),
)

DIRECTORS_GENRES = TableSchema(
    name="directors_genres",
    columns=(
        ("director_id", "INTEGER"),
        ("genre", "TEXT"),
        ("prob", "FLOAT"),
    ),
    constraints=("FOREIGN KEY(director_id) REFERENCES directors(id)",),
    references=("directors",),
    bindings=(
        Binding("director_id", FieldType.INTEGER, nullable=False),
        Binding("genre"),
        Binding("prob", FieldType.REAL),
    ),
)

# Load order of the CSV extracts; also a valid dependency order.
LOAD_ORDER = ("actors", "movies", "directors", "roles", "movies_genres", "directors_genres")


def default_registry():
    return SchemaRegistry([ACTORS, MOVIES, DIRECTORS, ROLES, MOVIES_GENRES, DIRECTORS_GENRES])
