"""
Pytest configuration and fixtures

Tests run against a throwaway SQLite database migrated to Alembic head.
Rows written during a test are deleted when the test finishes.
"""
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add the project root to the path so we can import core, services, routers
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Must be set before core.config is imported anywhere
_TEST_DB_DIR = tempfile.mkdtemp(prefix="health_bmi_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}"
os.environ["ENVIRONMENT"] = "test"


@pytest.fixture(scope="session", autouse=True)
def _ensure_db_schema_is_at_head():
    """Apply every Alembic migration to the test database once per session."""
    try:
        from alembic import command
        from alembic.config import Config

        project_root = Path(__file__).resolve().parents[1]
        cfg = Config(str(project_root / "alembic.ini"))
        # script_location in alembic.ini is relative ("alembic")
        cfg.set_main_option("script_location", str(project_root / "alembic"))
        command.upgrade(cfg, "head")
    except Exception as e:
        # Tests should fail loudly if migrations cannot be applied.
        raise RuntimeError(f"Failed to upgrade DB to Alembic head: {e}") from e


from fastapi.testclient import TestClient

from core.database import SessionLocal, get_db
from main import app
from models import HealthRecord


@pytest.fixture
def db_session():
    """
    Session shared between the test and the app via dependency override.

    Every health record is deleted afterwards so tests stay independent.
    """
    session = SessionLocal()

    def _override_get_db():
        yield session

    app.dependency_overrides[get_db] = _override_get_db
    yield session

    app.dependency_overrides.pop(get_db, None)
    session.rollback()
    session.query(HealthRecord).delete()
    session.commit()
    session.close()


@pytest.fixture
def client(db_session):
    return TestClient(app)


@pytest.fixture
def valid_payload():
    """The reference input from the API docs: 65 kg at 170 cm -> BMI 22.5"""
    return {
        "name": "Budi",
        "age": 25,
        "gender": "male",
        "height": 170,
        "weight": 65,
    }
