import pytest
import yaml
from fastapi.testclient import TestClient

from core.config import load_app_config
from main import app, create_app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def write_config(tmp_path):
    """Пишет app.yaml во временную папку и возвращает загруженный конфиг."""

    def _write(htmx=None, static=None, embedded=True):
        raw = {
            "app": {"name": "htmx-test", "title": "Test App", "version": "9.9.9"},
            "assets": {"embedded": embedded, "root": str(tmp_path)},
            "htmx": htmx or [],
            "static": static or [],
        }
        path = tmp_path / "app.yaml"
        path.write_text(yaml.safe_dump(raw))
        return load_app_config(path)

    return _write


@pytest.fixture
def make_client(write_config):
    def _make(**kwargs):
        return TestClient(create_app(write_config(**kwargs)))

    return _make
