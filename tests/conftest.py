from typing import List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from platesnap.config import Settings
from platesnap.main import create_app
from platesnap.utils.vision import get_model_factory


class FakeVisionModel:
    """Returns a canned reply and records what it was asked."""

    def __init__(self, reply: str):
        self.reply = reply
        self.error: Optional[Exception] = None
        self.calls: List[Tuple[str, bytes, str]] = []

    def describe(self, prompt, image, mime_type):
        self.calls.append((prompt, image, mime_type))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir):
    return Settings(gemini_api_key="test-key", upload_dir=upload_dir)


@pytest.fixture
def fake_model():
    return FakeVisionModel('{"items": []}')


@pytest.fixture
def app(settings, fake_model):
    app = create_app(settings)
    app.dependency_overrides[get_model_factory] = lambda: (lambda _settings: fake_model)
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
