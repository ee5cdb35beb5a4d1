import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.testclient import TestClient

from app.main import app
from app.db.session import Base, enable_sqlite_foreign_keys, get_db
from app.auth.session import SessionProvider

from helpers import PASSWORD


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def producer(db):
    return SessionProvider(db).sign_up("farm@example.com", PASSWORD, "producer", "Ferme du Val")


@pytest.fixture
def other_producer(db):
    return SessionProvider(db).sign_up("orchard@example.com", PASSWORD, "producer", "Verger Martin")


@pytest.fixture
def consumer(db):
    return SessionProvider(db).sign_up("eater@example.com", PASSWORD, "consumer")

