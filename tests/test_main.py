import logging

import pytest

from vidproxy.config.settings import config
from vidproxy.core.logging import RequestIdFilter
from vidproxy.i18n import i18n

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


def assert_cors(response):
    for header, value in CORS.items():
        assert response.headers[header] == value


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/vid", "/download", "/", "/does/not/exist"])
async def test_preflight_returns_empty_body_with_cors(client, fake_extractor, path):
    response = await client.options(path)
    assert response.status_code == 200
    assert response.content == b""
    assert_cors(response)
    assert fake_extractor.calls == []


@pytest.mark.asyncio
async def test_unknown_path(client):
    response = await client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"error": True, "message": "Endpoint not found"}
    assert response.headers["content-type"] == "application/json; charset=utf-8"
    assert_cors(response)


@pytest.mark.asyncio
async def test_unsupported_method_on_known_path(client):
    response = await client.post("/vid?id=dQw4w9WgXcQ")
    assert response.status_code == 404
    assert response.json() == {"error": True, "message": "Endpoint not found"}


@pytest.mark.asyncio
async def test_docs_disabled_outside_debug(client):
    response = await client.get("/openapi.json")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_index_page(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"] == "text/html; charset=utf-8"
    assert "<html" in response.text
    assert_cors(response)


@pytest.mark.asyncio
async def test_stylesheet(client):
    response = await client.get("/style.css")
    assert response.status_code == 200
    assert response.headers["content-type"] == "text/css; charset=utf-8"
    assert "body" in response.text
    assert_cors(response)


@pytest.mark.asyncio
async def test_missing_static_asset_is_internal_error(client, monkeypatch, tmp_path):
    monkeypatch.setattr(config.static, "directory", str(tmp_path))
    response = await client.get("/style.css")
    assert response.status_code == 500
    assert response.json() == {"error": True, "message": "Internal server error"}
    assert_cors(response)


@pytest.mark.asyncio
async def test_request_id_is_echoed(client):
    response = await client.get("/nope", headers={"X-Request-ID": "abc-123"})
    assert response.headers["x-request-id"] == "abc-123"


@pytest.mark.asyncio
async def test_request_id_is_generated(client):
    response = await client.get("/nope")
    assert response.headers["x-request-id"]


@pytest.mark.asyncio
async def test_error_messages_ignore_accept_language(client, monkeypatch):
    monkeypatch.setattr(i18n, "default_locale", "ja")
    headers = {"Accept-Language": "ja-JP,ja;q=0.9"}

    response = await client.get("/download", headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": True, "message": "Missing parameters"}

    response = await client.get("/nope", headers=headers)
    assert response.json() == {"error": True, "message": "Endpoint not found"}


@pytest.mark.asyncio
async def test_request_log_carries_request_id(client, caplog):
    service_logger = logging.getLogger("vidproxy")
    service_logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="vidproxy"):
            await client.get("/nope", headers={"X-Request-ID": "abc-123"})
    finally:
        service_logger.removeHandler(caplog.handler)

    formatter = logging.Formatter(config.logging.format)
    lines = [formatter.format(r) for r in caplog.records if r.getMessage() == "Request: /nope"]
    assert lines == ["request_id=abc-123 Request: /nope"]


def test_records_outside_requests_get_placeholder_request_id():
    record = logging.LogRecord("vidproxy", logging.INFO, __file__, 1, "startup", None, None)
    assert RequestIdFilter().filter(record)
    assert logging.Formatter(config.logging.format).format(record) == "request_id=- startup"
