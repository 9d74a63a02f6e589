from unittest.mock import AsyncMock, patch

import pytest
import requests
from fastapi import Request

from conftest import BACKEND_URL, fake_response
from inpaint_app.config import get_settings
from inpaint_app.errors import ConfigurationError
from inpaint_app.main import create_app


def multipart_body():
    prepared = requests.Request(
        "POST",
        "http://proxy.test/api/inpaint",
        files={
            "image": ("a.png", b"image-bytes", "image/png"),
            "mask": ("b.png", b"mask-bytes", "image/png"),
        },
        data={"text": "cat sitting on a bench", "width": "512", "height": "512"},
    ).prepare()
    return prepared.body, prepared.headers["Content-Type"]


def test_success_relays_body_and_content_type(client):
    body, content_type = multipart_body()
    with patch("inpaint_app.inference.requests.post") as post:
        post.return_value = fake_response(200, b"generated", "image/webp")
        resp = client.post(
            "/api/inpaint", content=body, headers={"Content-Type": content_type}
        )

    assert resp.status_code == 200
    assert resp.content == b"generated"
    assert resp.headers["content-type"] == "image/webp"

    args, kwargs = post.call_args
    assert args[0] == f"{BACKEND_URL}/api/inpaint/"
    assert kwargs["data"] == body
    assert kwargs["headers"]["Content-Type"] == content_type


@pytest.mark.parametrize("status", [400, 422, 500, 503, 599])
def test_backend_error_keeps_status_and_hides_body(client, status):
    body, content_type = multipart_body()
    with patch("inpaint_app.inference.requests.post") as post:
        post.return_value = fake_response(
            status, b'{"detail": "model exploded"}', "application/json",
            text='{"detail": "model exploded"}',
        )
        resp = client.post(
            "/api/inpaint", content=body, headers={"Content-Type": content_type}
        )

    assert resp.status_code == status
    assert resp.json() == {"error": "Failed to process image"}


def test_network_failure_returns_internal_error(client):
    body, content_type = multipart_body()
    with patch("inpaint_app.inference.requests.post") as post:
        post.side_effect = requests.ConnectionError("connection refused")
        resp = client.post(
            "/api/inpaint", content=body, headers={"Content-Type": content_type}
        )

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_unexpected_exception_returns_internal_error(client):
    with patch("inpaint_app.inference.requests.post") as post:
        post.side_effect = RuntimeError("boom")
        resp = client.post("/api/inpaint", content=b"garbage")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_identical_payloads_are_forwarded_independently(client):
    body, content_type = multipart_body()
    with patch("inpaint_app.inference.requests.post") as post:
        post.side_effect = [
            fake_response(200, b"first", "image/png"),
            fake_response(200, b"second", "image/png"),
        ]
        first = client.post("/api/inpaint", content=body, headers={"Content-Type": content_type})
        second = client.post("/api/inpaint", content=body, headers={"Content-Type": content_type})

    assert post.call_count == 2
    assert first.content == b"first"
    assert second.content == b"second"


def test_missing_backend_url_fails_at_startup(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("INPAINT_API_URL", raising=False)
    get_settings.cache_clear()
    try:
        with pytest.raises(ConfigurationError):
            create_app()
    finally:
        get_settings.cache_clear()


def test_backend_url_read_from_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("INPAINT_API_URL", "http://inference.internal:9000/")
    get_settings.cache_clear()
    try:
        app = create_app()
    finally:
        get_settings.cache_clear()

    assert app.state.forwarder.inpaint_url == "http://inference.internal:9000/api/inpaint/"


def test_unreadable_request_body_returns_internal_error(client):
    body, content_type = multipart_body()
    with patch.object(Request, "body", new=AsyncMock(side_effect=RuntimeError("stream consumed"))), \
            patch("inpaint_app.inference.requests.post") as post:
        resp = client.post(
            "/api/inpaint", content=body, headers={"Content-Type": content_type}
        )

    post.assert_not_called()
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


@pytest.mark.parametrize("status", [301, 302, 303, 307])
def test_backend_redirect_is_not_followed(client, status):
    body, content_type = multipart_body()
    with patch("inpaint_app.inference.requests.post") as post:
        post.return_value = fake_response(status, b"", None)
        resp = client.post(
            "/api/inpaint", content=body, headers={"Content-Type": content_type},
            follow_redirects=False,
        )

    assert post.call_args.kwargs["allow_redirects"] is False
    assert resp.status_code == status
    assert resp.json() == {"error": "Failed to process image"}
