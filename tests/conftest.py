# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
import os
import logging

# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from leetlog.utils.config import settings
from leetlog.models.log import LogEntry
from leetlog.services.catalog_service import CatalogService

# --- Define Test Catalog Path ---
TEST_PROBLEMS_JSON = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'data', 'test_problems.json'))

# --- Fixture to Modify Settings ---
@pytest.fixture(scope="session", autouse=True)
def modify_settings_for_test_catalog():
    if not os.path.exists(TEST_PROBLEMS_JSON):
        pytest.fail(f"Test catalog file not found at: {TEST_PROBLEMS_JSON}")
    original_path = settings.CATALOG_FILE_PATH
    try:
        settings.CATALOG_FILE_PATH = TEST_PROBLEMS_JSON
        logger.info(f"Using test catalog '{TEST_PROBLEMS_JSON}' for the session.")
        yield
    finally:
        settings.CATALOG_FILE_PATH = original_path

@pytest.fixture
def catalog() -> CatalogService:
    service = CatalogService()
    service.load_problems(TEST_PROBLEMS_JSON)
    return service

@pytest.fixture
def make_entry():
    def _make(problem_id="1", time_taken=10.0, looked_up=False, title=None, slug=None):
        return LogEntry(
            problem_id=str(problem_id),
            title=title or f"Problem {problem_id}",
            slug=slug or f"problem-{problem_id}",
            time_taken=time_taken,
            looked_up=looked_up,
        )
    return _make

# --- Store Backend Fixture ---
@pytest.fixture(params=["sql", "files"])
def store_settings(request, tmp_path):
    """Points the app at a fresh store of each backend for one test."""
    originals = (settings.STORE_BACKEND, settings.database_url, settings.USER_DATA_DIR)
    settings.STORE_BACKEND = request.param
    settings.database_url = f"sqlite+aiosqlite:///{tmp_path / 'leetlog_test.db'}"
    settings.USER_DATA_DIR = str(tmp_path / "userData")
    yield request.param
    settings.STORE_BACKEND, settings.database_url, settings.USER_DATA_DIR = originals

# --- TestClient Fixture ---
@pytest.fixture
def client(store_settings):
    """
    Creates the TestClient after settings point at a temporary store, so app
    startup loads the test catalog and an empty store.
    """
    from leetlog.main import app
    logger.info(f"Creating TestClient against the '{store_settings}' store.")
    with TestClient(app) as c:
        yield c
