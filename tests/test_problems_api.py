# tests/test_problems_api.py
import pytest
from fastapi.testclient import TestClient

@pytest.mark.api
class TestProblemsAPI:
    def test_get_problem(self, client: TestClient):
        response = client.get("/problems/42")
        assert response.status_code == 200
        assert response.json() == {
            "id": 42,
            "title": "Trapping Rain Water",
            "slug": "trapping-rain-water",
            "difficulty": "Hard",
            "paid_only": False,
            "url": "https://leetcode.com/problems/trapping-rain-water/",
        }

    def test_get_problem_not_found(self, client: TestClient):
        assert client.get("/problems/9999").status_code == 404

    def test_random_problem_excludes_solved(self, client: TestClient):
        client.post("/users/rnd/log", json={"problem_id": "4", "time_taken": 30, "looked_up": "no"})
        response = client.get("/problems/random", params={"difficulty": "hard", "user_id": "rnd"})
        assert response.status_code == 200
        assert response.json()["id"] == 42

    def test_random_problem_pool_exhausted(self, client: TestClient):
        for problem_id in ("4", "42"):
            client.post("/users/rnd/log", json={"problem_id": problem_id, "time_taken": 30, "looked_up": "no"})
        response = client.get("/problems/random", params={"difficulty": "hard", "user_id": "rnd"})
        assert response.status_code == 404

    def test_random_problem_bad_difficulty(self, client: TestClient):
        assert client.get("/problems/random", params={"difficulty": "extreme"}).status_code == 422

    def test_featured_problem(self, client: TestClient):
        response = client.get("/problems/featured")
        assert response.status_code == 200
        data = response.json()
        assert data["problem"]["paid_only"] is False
        assert "selected_at" in data
        # Held until the rotation interval elapses
        assert client.get("/problems/featured").json()["problem"]["id"] == data["problem"]["id"]
