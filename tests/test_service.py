"""Service tests using the in-process ASGI TestClient."""

from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient

from paramsign.demo.run_demo import SAMPLE_PARAMS, run_demo
from paramsign.service.app import create_app
from paramsign.signatory import Signatory

KEY = "your_secret_key"


@pytest.fixture()
def signer():
    return Signatory(KEY, algorithm="md5", uppercase=False, clock=lambda: 1700000000.0)


@pytest.fixture()
def client(signer):
    return TestClient(create_app(signer))


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "algorithm": "md5"}


def test_sign(client, signer):
    resp = client.post("/sign", json={"params": SAMPLE_PARAMS})
    assert resp.status_code == 200
    assert resp.json()["sign"] == signer.generate_signature(SAMPLE_PARAMS)


def test_encode_decode(client):
    resp = client.post("/encode", json={"params": {"a": "1"}})
    assert resp.status_code == 200
    token = resp.json()["token"]

    resp = client.post("/decode", json={"token": token})
    assert resp.status_code == 200
    assert resp.json()["params"] == {"a": "1", "timestamp": "1700000000"}


def test_decode_corrupt_token(client):
    resp = client.post("/decode", json={"token": "%%%"})
    assert resp.status_code == 400


def test_validate(client, signer):
    sig = signer.generate_signature(SAMPLE_PARAMS)
    resp = client.post("/validate", json={"params": SAMPLE_PARAMS, "sign": sig})
    assert resp.json() == {"valid": True}

    resp = client.post("/validate", json={"params": SAMPLE_PARAMS, "sign": sig.upper()})
    assert resp.status_code == 200
    assert resp.json() == {"valid": False}


def test_verify_token(client):
    token = client.post(
        "/encode", json={"params": SAMPLE_PARAMS, "include_signature": True}
    ).json()["token"]
    resp = client.post("/verify_token", json={"token": token})
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is True
    assert body["params"]["client_id"] == "16327128"


def test_verify_token_corrupt(client):
    resp = client.post("/verify_token", json={"token": "@@@@"})
    assert resp.status_code == 400


def test_key_never_returned(client):
    for path, body in [
        ("/sign", {"params": SAMPLE_PARAMS}),
        ("/encode", {"params": SAMPLE_PARAMS, "include_signature": True}),
    ]:
        assert KEY not in client.post(path, json=body).text
    assert KEY not in client.get("/health").text


def test_create_app_requires_key(monkeypatch):
    monkeypatch.setattr("paramsign.service.app.SECRET_KEY", "")
    with pytest.raises(RuntimeError):
        create_app()


def test_create_app_from_config(monkeypatch):
    monkeypatch.setattr("paramsign.service.app.SECRET_KEY", KEY)
    app = create_app()
    assert app.state.signatory.key == KEY


def test_demo(client, signer):
    summary = run_demo(client)
    assert summary["sign"] == signer.generate_signature(SAMPLE_PARAMS)
    assert summary["decoded"] == dict(SAMPLE_PARAMS, sign=summary["sign"])
    assert summary["valid"] is True
    assert summary["tampered_valid"] is False
    assert summary["corrupt_status"] == 400


def test_decode_deeply_nested_token(client):
    body = '{"a":' + "[" * 100000 + "]" * 100000 + "}"
    token = base64.b64encode(body.encode()).decode()
    assert client.post("/decode", json={"token": token}).status_code == 400
    assert client.post("/verify_token", json={"token": token}).status_code == 400
