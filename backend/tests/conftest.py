import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


@pytest.fixture()
def client() -> TestClient:
    """
    Creates a fresh FastAPI app and TestClient for each test.
    Settings are explicit so the environment of the test runner does not leak in.
    """
    app = create_app(Settings())
    return TestClient(app)
