import os
import sys
import uuid

import pytest
from pgvector import Vector
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

# Add the parent directory to sys.path to allow imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pgsearch import settings
from pgsearch.inspector import substituted_sql
from pgsearch.logging_setup import logger
from tests.tables import Author, Post  # noqa: F401

requires_database = pytest.mark.skipif(
    settings.TEST_DATABASE_URL is None, reason="PGSEARCH_TEST_DATABASE_URL is not set"
)


def sql(query) -> str:
    """Substituted SQL of the query on a single line"""
    return " ".join(substituted_sql(query).split())


class FakeEmbeddingProvider:
    """Deterministic embeddings for a fixed vocabulary, unknown terms map to the origin"""

    def __init__(self, vectors=None):
        self.vectors = vectors or {
            "wizard": [1.0, 0.0, 0.0],
            "dragon": [0.0, 1.0, 0.0],
            "recipe": [0.0, 0.0, 1.0],
        }
        self.calls = []

    def generate(self, terms, **options):
        self.calls.append((list(terms), options))
        return [Vector(self.vectors.get(term, [0.0, 0.0, 0.0])) for term in terms]

    def embedding_model(self, **options):
        return options.get("model", "fake/embedding-3d")


@pytest.fixture
def embedding_provider():
    return FakeEmbeddingProvider()


@pytest.fixture(scope="module")
def test_engine():
    """
    Creates a throwaway database with pg_trgm and vector enabled and the test tables
    """
    url = make_url(settings.TEST_DATABASE_URL)
    test_db_name = f"test_pgsearch_{str(uuid.uuid4())[:8]}"
    admin_engine = create_engine(url, isolation_level="AUTOCOMMIT")

    with admin_engine.connect() as conn:
        conn.execute(text(f"CREATE DATABASE {test_db_name}"))

    engine = create_engine(url.set(database=test_db_name))
    with engine.begin() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS pg_trgm"))
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    with admin_engine.connect() as conn:
        try:
            conn.execute(text(f"DROP DATABASE IF EXISTS {test_db_name}"))
        except Exception as e:
            logger.error(f"Error dropping database: {e}")
    admin_engine.dispose()


@pytest.fixture
def test_db(test_engine):
    """Create a fresh database session for each test"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.execute(text("TRUNCATE posts, authors RESTART IDENTITY CASCADE"))
        db.commit()
        db.close()
