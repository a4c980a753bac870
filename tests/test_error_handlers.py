"""
Tests for the structured error body.
"""
from fastapi import FastAPI
from fastapi.testclient import TestClient

from jobtracker.core.error_handlers import register_exception_handlers
from jobtracker.core.exceptions import NotFoundError


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("database password is hunter2")

    @app.get("/missing")
    def missing():
        raise NotFoundError("Thing not found with id: 7")

    @app.get("/items/{item_id}")
    def item(item_id: int):
        return {"id": item_id}

    return app


client = TestClient(build_app(), raise_server_exceptions=False)


def test_unexpected_error_hides_details():
    response = client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == 500
    assert body["error"] == "Internal Server Error"
    assert body["message"] == "An unexpected error occurred"
    assert "hunter2" not in response.text
    assert "timestamp" in body


def test_app_error_body():
    response = client.get("/missing")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Resource Not Found"
    assert body["message"] == "Thing not found with id: 7"
    assert "validationErrors" not in body


def test_unknown_route_is_structured():
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json()["error"] == "Resource Not Found"


def test_path_validation_lists_field():
    response = client.get("/items/abc")

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation Error"
    assert body["message"] == "Input validation failed"
    assert "item_id" in body["validationErrors"]
