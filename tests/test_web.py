"""Tests for the web API."""

import aiosqlite
import pytest
from fastapi.testclient import TestClient

from fishing_journal.web import create_app

CONTEST = {
    "date": "2024-05-01",
    "location": "Messancy",
    "total_weight": "3000",
    "ranking": "Gagné",
    "water_characteristic": "Teintée",
    "temperature": "",
    "weather_conditions": ["Pluie"],
    "catches": ["Gardons", "Brèmes"],
    "lines": [
        {"id": "l1", "float_size": "1.5", "main_line": "", "hook": "n°18"},
    ],
}


@pytest.fixture
def client(temp_db_path):
    with TestClient(create_app(temp_db_path)) as client:
        yield client


class TestWebApi:
    """Tests for the JSON routes."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.json()["status"] == "healthy"

    def test_empty_journal(self, client):
        assert client.get("/stats").json() is None

        data = client.get("/contests").json()
        assert data["items"] == []
        assert data["total_pages"] == 1

    def test_create_contest_normalizes(self, client):
        response = client.post("/contests", json=CONTEST)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] is not None
        assert data["created_at"] is not None
        assert data["total_weight"] == 3000
        assert data["temperature"] is None
        assert data["lines"][0]["float_size"] == 1.5
        assert "main_line" not in data["lines"][0]

    def test_snapshot_follows_writes(self, client):
        client.post("/contests", json=CONTEST)
        client.post("/contests", json={**CONTEST, "date": "2024-04-01", "total_weight": 1000, "ranking": "3e"})

        assert client.get("/stats").json() == {
            "average_weight": 2000,
            "favorite_location": "Messancy",
            "win_rate": 50,
        }

        data = client.get("/contests", params={"catch": "Brèmes"}).json()
        assert data["total_items"] == 2
        assert data["locations"] == ["Messancy"]
        assert data["catches"] == ["Brèmes", "Gardons"]
        assert [c["date"] for c in data["items"]] == ["2024-05-01", "2024-04-01"]

    def test_filters_combine(self, client):
        client.post("/contests", json=CONTEST)
        client.post("/contests", json={**CONTEST, "location": "Virton"})

        data = client.get("/contests", params={"location": "Virton", "catch": "Carpes"}).json()
        assert data["items"] == []

    def test_get_contest(self, client):
        contest_id = client.post("/contests", json=CONTEST).json()["id"]

        assert client.get(f"/contests/{contest_id}").json()["location"] == "Messancy"
        assert client.get("/contests/999").status_code == 404

    def test_save_failure(self, client):
        async def broken_append(entry):
            raise aiosqlite.OperationalError("disk I/O error")

        client.app.state.repository.append = broken_append
        response = client.post("/contests", json=CONTEST)

        assert response.status_code == 503
        assert "error" in response.json()

    def test_repeated_line_ids_made_unique(self, client):
        payload = dict(CONTEST, lines=[{"id": "a"}, {"id": "a"}])
        response = client.post("/contests", json=payload)

        assert response.status_code == 201
        ids = [line["id"] for line in response.json()["lines"]]
        assert len(ids) == 2
        assert len(set(ids)) == 2

    def test_weather(self, client):
        data = client.get("/weather", params={"location": "Messancy sous la pluie", "date": "2024-05-01"}).json()

        assert data["condition"] == "Pluie"
        assert data["icon"] == "🌧️"
        assert 9 <= data["temperature"] <= 15
