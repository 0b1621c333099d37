import os

import pytest
import requests


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "online"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/api/nao-existe")
    assert resp.status_code == 404
    body = resp.json()
    assert body["status_code"] == 404
    assert "timestamp" in body


# Teste de saúde da API publicada
@pytest.mark.skipif(not os.getenv("POLL_API_URL"), reason="POLL_API_URL não configurada")
def test_health_api():
    resp = requests.get(os.environ["POLL_API_URL"], timeout=10)
    assert resp.status_code == 200
    assert "Community Poll" in resp.text
