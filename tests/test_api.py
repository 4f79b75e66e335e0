"""Tests for the FastAPI backend."""

from __future__ import annotations

import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient  # noqa: E402

from backend.main import app  # noqa: E402


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_offsets(client):
    response = client.get("/offsets", params={"length": 1000})

    assert response.status_code == 200
    assert response.json()["offsets"] == [0, 250, 500, 750, 999]


def test_offsets_invalid_count(client):
    response = client.get("/offsets", params={"length": 4, "sample_count": 5})

    assert response.status_code == 400
    assert "exceeds file length" in response.json()["detail"]


def test_check_soft(client, make_file, large_payload):
    path_a = make_file("a.bin", large_payload)
    path_b = make_file("b.bin", large_payload)

    response = client.post("/check", json={"path_a": str(path_a), "path_b": str(path_b)})

    assert response.status_code == 200
    body = response.json()
    assert body["matched"] is True
    assert body["tier"] == "sampled"
    assert body["mode"] == "soft"
    assert body["offsets"] == [0, 2500, 5000, 7500, 9999]


@pytest.mark.parametrize("mode", ["strict", "micro", "meta", "hash"])
def test_check_other_modes(client, make_file, large_payload, mode):
    path_a = make_file("a.bin", large_payload)
    path_b = make_file("b.bin", large_payload)

    response = client.post(
        "/check",
        json={"path_a": str(path_a), "path_b": str(path_b), "mode": mode},
    )

    assert response.status_code == 200
    assert response.json()["matched"] is True


def test_check_unknown_mode(client, make_file):
    path_a = make_file("a.bin", b"x")

    response = client.post("/check", json={"path_a": str(path_a), "path_b": str(path_a), "mode": "fuzzy"})

    assert response.status_code == 400
    assert "Unsupported mode" in response.json()["detail"]


def test_check_missing_file(client, make_file, tmp_path):
    path_a = make_file("a.bin", b"x")

    response = client.post("/check", json={"path_a": str(path_a), "path_b": str(tmp_path / "gone.bin")})

    assert response.status_code == 404


def test_batch(client, tmp_path, large_payload):
    (tmp_path / "SourceFiles").mkdir()
    (tmp_path / "SourceFiles" / "a.bin").write_bytes(large_payload)
    (tmp_path / "copy.bin").write_bytes(large_payload)
    (tmp_path / "other.bin").write_bytes(b"other")

    response = client.post("/batch", json={"path": str(tmp_path)})

    assert response.status_code == 200
    body = response.json()
    assert body["checks_performed"] == 2
    assert body["matches"] == [[str(tmp_path / "SourceFiles" / "a.bin"), str(tmp_path / "copy.bin")]]
    assert len(body["report"]) == 2


def test_batch_missing_source_folder(client, tmp_path):
    response = client.post("/batch", json={"path": str(tmp_path)})

    assert response.status_code == 404


def test_batch_rejects_zero_workers(client, tmp_path):
    response = client.post("/batch", json={"path": str(tmp_path), "max_workers": 0})

    assert response.status_code == 400
