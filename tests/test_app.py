# tests/test_app.py

"""
Application startup and the error body contract.
"""

from fastapi.testclient import TestClient

from core.errors import StoreError
from main import create_app


def test_startup_tolerates_route_entries_without_path():
    app = create_app()

    # Nested routers can appear in app.routes as objects without .path/.methods
    class NestedRouterEntry:
        pass

    app.router.routes.append(NestedRouterEntry())

    with TestClient(app) as client:
        app.router.routes.pop()
        assert client.get("/health/app").status_code == 200


def test_store_errors_render_a_generic_message():
    app = create_app()

    @app.get("/broken")
    def broken():
        raise StoreError("Failed to fetch users/u-123", "permission denied for table users")

    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/broken")

    assert res.status_code == 500
    assert res.json() == {"error": "Database error"}
    assert "users" not in res.text
