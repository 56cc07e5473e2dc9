import pytest
from sqlalchemy import event, inspect, text

from moviedb.errors import SchemaProvisioningError
from moviedb.load import provision
from moviedb.schema import Binding, SchemaRegistry, TableSchema, default_registry


def capture_statements(engine):
    statements = []

    @event.listens_for(engine, "before_cursor_execute")
    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    return statements


def test_creates_every_table(engine, registry):
    provision(engine, registry)
    assert set(inspect(engine).get_table_names()) >= set(registry.names())


def test_referenced_tables_are_created_first(engine, registry):
    statements = capture_statements(engine)
    provision(engine, registry)
    created = [s.split()[5] for s in statements if s.startswith("CREATE TABLE")]
    assert created == ["actors", "movies", "directors", "roles", "movies_genres", "directors_genres"]


def test_provisioning_twice_is_harmless(provisioned, registry, fetch):
    with provisioned.begin() as conn:
        conn.execute(text("INSERT INTO actors (id, first_name) VALUES (1, 'Ada')"))
    provision(provisioned, registry)
    assert fetch(provisioned, "SELECT id, first_name FROM actors") == [(1, "Ada")]


def test_failure_stops_and_keeps_created_tables(engine):
    broken = TableSchema(
        "broken",
        (("id", "INTEGER NOT A REAL TYPE ((("),),
        (Binding("id"),),
        references=("actors",),
    )
    tables = list(default_registry())[:1] + [broken]
    with pytest.raises(SchemaProvisioningError) as exc:
        provision(engine, SchemaRegistry(tables))
    assert exc.value.table_name == "broken"
    assert inspect(engine).get_table_names() == ["actors"]
