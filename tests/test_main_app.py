# tests/test_main_app.py
import pytest
from fastapi.testclient import TestClient
from leetlog.utils.logger import logger

def test_read_root(client: TestClient):
    """Test if the root endpoint returns the welcome message."""
    logger.info("Testing root endpoint...")
    response = client.get("/")
    assert response.status_code == 200
    assert "Welcome to the LeetLog API" in response.json()["message"]

def test_storage_corruption_is_reported(client: TestClient, store_settings, tmp_path):
    """A corrupt record surfaces as a distinct error, not as an empty log."""
    if store_settings != "files":
        pytest.skip("Corrupting a record by hand needs the file layout.")
    (tmp_path / "userData" / "broken.json").write_text("{nope", encoding="utf-8")
    response = client.get("/users/broken/streak")
    assert response.status_code == 500
    assert response.json()["error"] == "storage_corruption"
    # Other users are unaffected
    assert client.get("/users/fine/streak").json()["streak"] == 0
