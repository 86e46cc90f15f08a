"""
Unit tests for RequestContextMiddleware and BodyLimitMiddleware.
"""

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from talentgate.crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware

pytestmark = pytest.mark.unit


@pytest.fixture
def small_app():
    app = FastAPI()
    app.add_middleware(BodyLimitMiddleware, max_body_bytes=16)
    app.add_middleware(RequestContextMiddleware)

    @app.post("/echo")
    async def echo(request: Request):
        body = await request.body()
        return {"size": len(body), "request_id": request.state.request_id}

    return app


def test_request_id_is_generated(small_app):
    response = TestClient(small_app).post("/echo", content=b"hi")

    assert response.status_code == 200
    assert response.headers["X-Request-Id"] == response.json()["request_id"]


def test_incoming_request_id_is_propagated(small_app):
    response = TestClient(small_app).post(
        "/echo", content=b"hi", headers={"X-Request-Id": "req-123"}
    )

    assert response.headers["X-Request-Id"] == "req-123"


def test_oversized_body_is_413(small_app):
    response = TestClient(small_app).post("/echo", content=b"x" * 17)

    assert response.status_code == 413
    assert response.headers["content-type"] == "application/problem+json"
    assert response.json()["code"] == "PAYLOAD_TOO_LARGE"


def test_body_at_limit_passes(small_app):
    response = TestClient(small_app).post("/echo", content=b"x" * 16)

    assert response.json()["size"] == 16


def test_full_app_sets_request_id(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.headers["X-Request-Id"]
