"""Fixtures pytest: sesión SQLite en memoria."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from toga_legal.db.models import Base


@pytest.fixture(scope="function")
def db_session():
    """Sesión DB en memoria para tests (compartida entre hilos para el TestClient)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = Session()

    yield session

    session.close()
    Base.metadata.drop_all(engine)
