import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.store import InMemoryTodoStore


@pytest.fixture
def store():
    return InMemoryTodoStore()


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
def client(app):
    return TestClient(app)
