"""Tests for the HTTP endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def client(config_dir):
    with TestClient(app) as test_client:
        yield test_client


def _texts() -> tuple[str, str]:
    left = [f"l{i}" for i in range(30)]
    right = list(left)
    right[15:16] = ["a", "b", "c"]
    return "\n".join(left), "\n".join(right)


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_align_returns_blocks_curves_and_regions(client) -> None:
    left, right = _texts()
    response = client.post(
        "/api/diff/align",
        json={"left_content": left, "right_content": right, "expanded_region_ids": [19]},
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["left_total_lines"], body["right_total_lines"]) == (30, 32)
    assert len(body["blocks"]) == 1
    assert body["blocks"][0]["operation"] == "modify"
    assert body["curves"][0]["right_end"] == 17
    assert [r["region_id"] for r in body["collapsed_regions"]] == [3, 19]
    assert [r["region_id"] for r in body["visible_collapsed_regions"]] == [3]


def test_expanding_every_region_turns_collapsing_off(client) -> None:
    left, right = _texts()
    response = client.post(
        "/api/diff/align",
        json={"left_content": left, "right_content": right, "expanded_region_ids": [3, 19, 99]},
    )

    assert response.status_code == 200
    assert response.json()["collapsed_regions"] == []
    assert response.json()["visible_collapsed_regions"] == []
    assert client.get("/api/config").json()["collapseUnchanged"] is False


def test_unknown_region_ids_do_not_change_settings(client) -> None:
    left, right = _texts()
    response = client.post(
        "/api/diff/align",
        json={"left_content": left, "right_content": right, "expanded_region_ids": [99]},
    )

    assert [r["region_id"] for r in response.json()["visible_collapsed_regions"]] == [3, 19]
    assert client.get("/api/config").json()["collapseUnchanged"] is True


def test_align_respects_collapse_flag(client) -> None:
    left, right = _texts()
    response = client.post(
        "/api/diff/align",
        json={"left_content": left, "right_content": right, "collapse_unchanged": False},
    )

    assert response.json()["collapsed_regions"] == []


def test_map_forward_and_inverse(client) -> None:
    payload = {
        "hunks": [{"left_start": 10, "left_end": 20, "right_start": 10, "right_end": 10}],
        "left_total_lines": 40,
        "right_total_lines": 30,
        "lines": [12.0, 25.0],
        "half_viewport_rows": 5.0,
    }
    forward = client.post("/api/diff/map", json=payload)
    assert forward.status_code == 200
    assert forward.json() == {"direction": "forward", "lines": [5.0, 15.0]}

    inverse = client.post("/api/diff/map", json={**payload, "direction": "inverse", "lines": [5.0]})
    assert inverse.json()["lines"] == [5.0]


def test_map_rejects_malformed_hunks(client) -> None:
    response = client.post(
        "/api/diff/map",
        json={
            "hunks": [{"left_start": 8, "left_end": 4, "right_start": 8, "right_end": 9}],
            "left_total_lines": 10,
            "right_total_lines": 10,
            "lines": [1.0],
        },
    )

    assert response.status_code == 422
    assert "ends before it starts" in response.json()["detail"]


def test_config_round_trip(client) -> None:
    assert client.get("/api/config").json()["contextLines"] == 3

    response = client.put("/api/config", json={"contextLines": 2, "collapseUnchanged": False})
    assert response.status_code == 200

    settings = client.get("/api/config").json()
    assert settings == {
        "collapseUnchanged": False,
        "contextLines": 2,
        "minimumCollapseThreshold": 4,
    }
