"""Tests for API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from rectunion.config import Settings
from rectunion.dependencies import get_settings
from rectunion.main import app
from tests.conftest import DISJOINT_RECTANGLES, FRAME_RECTANGLES, SAMPLE_OUTLINE, SAMPLE_RECTANGLES


client = TestClient(app)


@pytest.fixture
def tiny_budget():
    app.dependency_overrides[get_settings] = lambda: Settings(rectunion_max_grid_cells=4)
    yield
    app.dependency_overrides.clear()


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["transforms_registered"] == 8


def test_union_sample():
    response = client.post("/api/union", json={"rectangles": SAMPLE_RECTANGLES})
    assert response.status_code == 200
    data = response.json()
    assert len(data["polygons"]) == 1
    outer = [(p["x"], p["y"]) for p in data["polygons"][0]["outer"]]
    assert outer == SAMPLE_OUTLINE
    assert data["loop_count"] == 1
    assert data["hole_count"] == 0
    assert data["area"] == pytest.approx(63.0)
    assert data["processing_time_ms"] >= 0


def test_union_frame_has_hole():
    response = client.post("/api/union", json={"rectangles": FRAME_RECTANGLES})
    data = response.json()
    assert data["hole_count"] == 1
    assert data["polygons"][0]["area"] == pytest.approx(8.0)
    assert len(data["polygons"][0]["holes"][0]) == 4


def test_union_disjoint():
    response = client.post("/api/union", json={"rectangles": DISJOINT_RECTANGLES})
    data = response.json()
    assert len(data["polygons"]) == 2
    assert data["hole_count"] == 0


def test_union_empty():
    response = client.post("/api/union", json={"rectangles": []})
    assert response.status_code == 200
    assert response.json()["polygons"] == []


def test_union_unsimplified():
    rects = [{"x": 0, "y": 0, "width": 4, "height": 1}, {"x": 1, "y": 0, "width": 1, "height": 1}]
    response = client.post("/api/union", json={"rectangles": rects, "simplify": False})
    assert len(response.json()["polygons"][0]["outer"]) == 8


def test_union_with_verification():
    response = client.post(
        "/api/union",
        json={"rectangles": SAMPLE_RECTANGLES, "verify_coverage": True},
    )
    assert response.status_code == 200


def test_union_resource_limit(tiny_budget):
    response = client.post("/api/union", json={"rectangles": DISJOINT_RECTANGLES})
    assert response.status_code == 413
    data = response.json()
    assert data["error"] == "resource_limit_exceeded"
    assert data["stage"] == "U0.02"


def test_union_non_finite_input():
    body = '{"rectangles": [{"x": Infinity, "y": 0, "width": 1, "height": 1}]}'
    response = client.post(
        "/api/union",
        content=body,
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_input"


def test_union_malformed_request():
    response = client.post("/api/union", json={"rectangles": [{"x": 1}]})
    assert response.status_code == 422
