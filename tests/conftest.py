"""
Pytest configuration and fixtures for the wedding RSVP tests.
"""

import io
import os

# Point the app at the test database before any api module is imported
os.environ['DATABASE_URL'] = os.getenv('TEST_DATABASE_URL', 'sqlite://')
os.environ.setdefault('LOG_FILE', os.devnull)

import pytest
import openpyxl
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from backend.models.schema import Base
from services.repository import WeddingRepository

TEST_DATABASE_URL = os.environ['DATABASE_URL']


def _sqlite_engine(url: str):
    eng = create_engine(url, connect_args={'check_same_thread': False}, poolclass=StaticPool)

    # pysqlite does not emit BEGIN itself, which breaks SAVEPOINT handling
    @event.listens_for(eng, 'connect')
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng, 'begin')
    def do_begin(conn):
        conn.exec_driver_sql('BEGIN')

    return eng


@pytest.fixture(scope='session')
def engine():
    """Create test database engine."""
    if TEST_DATABASE_URL.startswith('sqlite'):
        eng = _sqlite_engine(TEST_DATABASE_URL)
    else:
        eng = create_engine(TEST_DATABASE_URL)
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture(scope='function')
def session(engine):
    """
    Create a new database session for a test.

    Commits made by the code under test only release savepoints; everything
    is rolled back when the test ends.
    """
    connection = engine.connect()
    transaction = connection.begin()
    sess = Session(bind=connection, join_transaction_mode='create_savepoint')

    yield sess

    sess.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def repository(session):
    return WeddingRepository(session)


@pytest.fixture
def client(session):
    """API test client bound to the test session."""
    from api.dependencies import get_db
    from api.main import app

    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_workbook():
    """Build an in-memory .xlsx from a header list and row lists."""
    def build(headers, rows):
        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.append(headers)
        for row in rows:
            sheet.append(row)
        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()
    return build


@pytest.fixture
def guest_rows():
    """Valid guest rows as read from a sheet."""
    return [
        {'name': 'John & Jane Smith', 'email': 'john.smith@email.com', 'allocatedSeats': 2,
         'notes': 'Couple from work'},
        {'name': 'The Johnson Family', 'email': 'johnson.family@email.com', 'allocatedSeats': 4},
        {'name': 'Maria Garcia', 'allocatedSeats': 1},
    ]


@pytest.fixture
def entourage_rows():
    """Valid entourage rows, one per category."""
    return [
        {'name': 'Josefina Igaya', 'role': 'Mother of the Bride', 'category': 'parents',
         'side': 'bride', 'sortOrder': 1},
        {'name': 'Ponciano Rivera', 'role': 'Principal Sponsor', 'category': 'sponsors',
         'side': 'male', 'sortOrder': 1},
        {'name': 'Rommel Columbano', 'role': 'Best Man', 'category': 'other',
         'side': 'both', 'sortOrder': 1},
    ]
