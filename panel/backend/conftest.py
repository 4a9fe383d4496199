import os
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("WINDOW_MINUTES", "10")
os.environ.setdefault("INTERVAL_SECONDS", "60")
os.environ.setdefault("SMOOTHING_WINDOW", "3")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.main import app


@pytest.fixture(scope="function")
def client():
    with TestClient(app) as c:
        yield c
