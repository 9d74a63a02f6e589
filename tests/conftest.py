from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from inpaint_app.client.uploads import UploadedFile
from inpaint_app.config import Settings
from inpaint_app.main import create_app

BACKEND_URL = "http://backend.test"


def fake_response(status_code=200, content=b"", content_type="image/png", text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content
    resp.text = text
    resp.headers = {"Content-Type": content_type} if content_type else {}
    return resp


@pytest.fixture
def client():
    app = create_app(Settings(inpaint_api_url=BACKEND_URL))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def image_file():
    return UploadedFile("a.png", b"\x89PNG" + b"a" * 10240, "image/png")


@pytest.fixture
def mask_file():
    return UploadedFile("b.png", b"\x89PNG" + b"b" * 10240, "image/png")
