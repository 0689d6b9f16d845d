import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware
from storefront.api import routers
from storefront.api.errors import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="test-secret")
    for router in routers:
        app.include_router(router, prefix="/api")
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def employee_client(client):
    """A client signed in as the bootstrap employee."""
    client.post("/api/employee/add", json={"email": "admin@store.com", "password": "admin-pass"})
    response = client.post("/api/employee/login", json={"email": "admin@store.com", "password": "admin-pass"})
    assert response.status_code == 200
    return client
