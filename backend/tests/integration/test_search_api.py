"""Integration tests for the bike search endpoints."""

import pytest
from fastapi.testclient import TestClient

from bikefit.main import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_search_caps_and_counts(client, bike_dataset):
    response = client.post("/api/v1/bikes/search", json={
        "bikes": bike_dataset,
        "criteria": {"reachTarget": 380, "stackTarget": 560, "reachRange": 10, "stackRange": 10},
    })
    assert response.status_code == 200
    body = response.json()
    assert body["displayed"] == 100
    assert body["totalMatches"] == 150
    assert len(body["matches"]) == 100
    diffs = [match["totalDiff"] for match in body["matches"]]
    assert diffs == sorted(diffs)


def test_search_from_sheet_rows(client):
    values = [
        ["Brand", "Model", "Size", "Reach", "Stack", "Frame Material"],
        ["Trek", "Domane", "54", "380", "560", "Carbon"],
        ["Canyon", "Endurace", "S", "384", "566", "Aluminium"],
        ["Cervelo", "R5", "51", "370", "540", "Carbon"],
    ]
    response = client.post("/api/v1/bikes/search", json={
        "values": values,
        "criteria": {"reachTarget": 380, "stackTarget": 560, "materialFilter": ["Carbon"]},
    })
    assert response.status_code == 200
    body = response.json()
    assert body["totalMatches"] == 1
    assert body["matches"][0]["model"] == "Domane"
    assert body["matches"][0]["material"] == "Carbon"


def test_search_sort_column(client, bike_dataset):
    response = client.post("/api/v1/bikes/search", json={
        "bikes": bike_dataset,
        "criteria": {"reachTarget": 380, "stackTarget": 560, "reachRange": 10, "stackRange": 10},
        "sortColumn": "brand",
    })
    brands = [match["brand"] for match in response.json()["matches"]]
    assert brands == sorted(brands)


def test_search_warnings(client):
    response = client.post("/api/v1/bikes/search", json={
        "bikes": [],
        "criteria": {"reachTarget": 620, "stackTarget": 560},
    })
    assert response.status_code == 200
    assert len(response.json()["warnings"]) == 1


def test_search_requires_dataset(client):
    response = client.post("/api/v1/bikes/search", json={
        "criteria": {"reachTarget": 380, "stackTarget": 560},
    })
    assert response.status_code == 422
    assert response.json()["success"] is False


def test_summary(client, bike_dataset):
    response = client.post("/api/v1/bikes/summary", json={"bikes": bike_dataset})
    assert response.status_code == 200
    body = response.json()
    assert body["bounds"]["reach"] == {"min": 355, "max": 410, "count": 152}
    assert body["bounds"]["sta"]["count"] == 150
    assert body["options"]["brands"] == ["Canyon", "Specialized", "Trek"]
