import asyncio
import json

import pytest
from fastapi import Request, Response

from conftest import make_settings
from webembed.api.middleware.errors import build_exception_handler
from webembed.api.middleware.request_id import build_request_id_middleware


def _make_request(headers, method="GET", path="/assets/app.js"):
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "method": method,
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": b"",
        "headers": headers,
        "client": ("127.0.0.1", 1234),
        "server": ("testserver", 80),
        "scheme": "http",
        "http_version": "1.1",
    }

    async def receive():
        return {"type": "http.request", "body": b""}

    return Request(scope, receive)


def test_request_id_middleware_sets_header(monkeypatch):
    from webembed.api.middleware import request_id as mod

    captured = {"info": None, "metrics": []}

    class DummyLogger:
        def info(self, msg, extra=None):
            captured["info"] = (msg, extra)

    monkeypatch.setattr(mod, "configure_logging", lambda settings: DummyLogger())
    monkeypatch.setattr(mod.metrics, "inc", lambda name, value=1: captured["metrics"].append((name, value)))

    middleware = build_request_id_middleware(make_settings())

    request = _make_request([(b"x-request-id", b"req-123")])

    async def call_next(req):
        assert req.state.request_id == "req-123"
        return Response(status_code=304)

    response = asyncio.run(middleware(request, call_next))

    assert response.status_code == 304
    assert response.headers["X-Request-ID"] == "req-123"
    assert ("http_requests_total", 1) in captured["metrics"]
    assert captured["info"] is not None
    assert captured["info"][1]["status"] == 304
    assert captured["info"][1]["path"] == "/assets/app.js"


def test_request_id_middleware_logs_failures(monkeypatch):
    from webembed.api.middleware import request_id as mod

    captured = {"info": None}

    class DummyLogger:
        def info(self, msg, extra=None):
            captured["info"] = (msg, extra)

    monkeypatch.setattr(mod, "configure_logging", lambda settings: DummyLogger())

    middleware = build_request_id_middleware(make_settings())
    request = _make_request([], method="HEAD")

    async def call_next(req):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        asyncio.run(middleware(request, call_next))

    assert captured["info"][1]["status"] == 500
    assert captured["info"][1]["method"] == "HEAD"
    assert captured["info"][1]["request_id"]


def test_exception_handler_includes_request_id(monkeypatch):
    from webembed.api.middleware import errors as mod

    captured = {"exc": None, "metrics": []}

    class DummyLogger:
        def exception(self, msg, extra=None):
            captured["exc"] = (msg, extra)

    monkeypatch.setattr(mod, "configure_logging", lambda settings: DummyLogger())
    monkeypatch.setattr(mod.metrics, "inc", lambda name, value=1: captured["metrics"].append((name, value)))

    handler = build_exception_handler(make_settings())

    request = _make_request([])
    request.state.request_id = "req-xyz"

    response = asyncio.run(handler(request, RuntimeError("boom")))

    payload = json.loads(response.body.decode("utf-8"))
    assert response.status_code == 500
    assert payload["detail"] == "Internal Server Error"
    assert payload["request_id"] == "req-xyz"
    assert isinstance(payload["error_id"], str) and payload["error_id"]
    assert ("http_errors_5xx_total", 1) in captured["metrics"]
    assert captured["exc"] is not None
    assert captured["exc"][1]["path"] == "/assets/app.js"
