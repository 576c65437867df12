from fastapi import FastAPI
from fastapi.testclient import TestClient
from hookecho.errors import AuthError, PayloadError, register_exception_handlers


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/auth")
    def auth():
        raise AuthError("Invalid webhook token")

    @app.get("/payload")
    def payload():
        raise PayloadError()

    return app


def test_auth_error_is_401():
    r = TestClient(_app()).get("/auth")
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid webhook token"}


def test_payload_error_is_400():
    r = TestClient(_app()).get("/payload")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON payload"}


def test_error_message():
    assert PayloadError().message == "Invalid JSON payload"
    assert str(AuthError("nope")) == "nope"
