import pytest
from sqlalchemy import text

from moviedb.config import create_store_engine
from moviedb.load import provision
from moviedb.schema import default_registry


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def engine(tmp_path):
    engine = create_store_engine(tmp_path / "test.db")
    yield engine
    engine.dispose()


@pytest.fixture
def provisioned(engine, registry):
    provision(engine, registry)
    return engine


@pytest.fixture
def fetch():
    def _fetch(engine, sql):
        with engine.connect() as conn:
            return conn.execute(text(sql)).fetchall()
    return _fetch


@pytest.fixture
def write_csv(tmp_path):
    def _write(name, lines, directory=None):
        path = (directory or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
