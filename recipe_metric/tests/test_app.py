import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest
import requests
from fastapi.testclient import TestClient

from recipe_metric.app import FETCH_FAILED, INTERNAL_ERROR, create_app


@dataclass
class _FakeResponse:
    status_code: int = 200
    text: str = ""


@dataclass
class _FakeFetcher:
    response: _FakeResponse | None = None
    error: Exception | None = None
    calls: list = field(default_factory=list)

    def get(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.response


def _client(fetcher):
    return TestClient(create_app(fetcher=fetcher))


def test_missing_url_returns_form():
    fetcher = _FakeFetcher()
    resp = _client(fetcher).get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Enter a URL to fetch and convert units" in resp.text
    assert fetcher.calls == []


def test_empty_url_returns_form():
    resp = _client(_FakeFetcher()).get("/", params={"url": ""})
    assert resp.status_code == 200
    assert "Enter a URL to fetch and convert units" in resp.text


def test_converts_fetched_page():
    page = "<html><body><p>Add 1 cup of flour</p></body></html>"
    fetcher = _FakeFetcher(response=_FakeResponse(text=page))
    resp = _client(fetcher).get("/", params={"url": "https://example.com/recipe"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.text == "<html><body><p>Add 240 ml of flour</p></body></html>"
    assert fetcher.calls == ["https://example.com/recipe"]


def test_upstream_404_is_mirrored():
    fetcher = _FakeFetcher(response=_FakeResponse(status_code=404, text="nope"))
    resp = _client(fetcher).get("/", params={"url": "https://example.com/missing"})
    assert resp.status_code == 404
    assert resp.text == FETCH_FAILED
    assert resp.headers["content-type"].startswith("text/plain")


def test_upstream_server_error_is_mirrored():
    fetcher = _FakeFetcher(response=_FakeResponse(status_code=503, text="<h1>down</h1>"))
    resp = _client(fetcher).get("/", params={"url": "https://example.com/busy"})
    assert resp.status_code == 503
    assert resp.text == FETCH_FAILED


def test_network_error_becomes_500(caplog):
    fetcher = _FakeFetcher(error=requests.ConnectionError("connection refused"))
    resp = _client(fetcher).get("/", params={"url": "https://example.invalid/"})
    assert resp.status_code == 500
    assert resp.text == INTERNAL_ERROR
    assert "Failed to convert https://example.invalid/" in caplog.text


class _Utf8PageHandler(BaseHTTPRequestHandler):
    body = "<p>Add ½ cup of flour and ⅓ cup of milk, café style</p>".encode("utf-8")

    def do_GET(self):
        self.send_response(200)
        self.send_header("Content-Type", "text/html")
        self.send_header("Content-Length", str(len(self.body)))
        self.end_headers()
        self.wfile.write(self.body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def utf8_page_url(monkeypatch):
    for var in ("HTTP_PROXY", "http_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    server = HTTPServer(("127.0.0.1", 0), _Utf8PageHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_port}/recipe"
    finally:
        server.shutdown()
        server.server_close()


def test_page_without_charset_is_read_as_utf8(utf8_page_url):
    resp = TestClient(create_app()).get("/", params={"url": utf8_page_url})
    assert resp.status_code == 200
    assert resp.text == "<p>Add 120 ml of flour and 80 ml of milk, café style</p>"
