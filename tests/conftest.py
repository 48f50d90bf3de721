"""Shared fixtures: a local stub of the Mailnow API and request helpers."""

from __future__ import annotations

import io
import json
import sys
import threading
import time
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

import pytest
import requests
from requests.adapters import BaseAdapter

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mailnow import EmailRequest

LIVE_KEY = "mn_live_7e59df7ce4a14545b443837804ec9722"
TEST_KEY = "mn_test_7e59df7ce4a14545b443837804ec9722"

SUCCESS_BODY: Dict[str, Any] = {
    "success": True,
    "message": "ok",
    "status_code": 200,
    "data": {"message_id": "msg_1", "status": "sent"},
}


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: Dict[str, str]
    body: bytes

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))


class StubHandler(BaseHTTPRequestHandler):
    server: "StubAPIServer"

    def _serve(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.requests.append(
            RecordedRequest(self.command, self.path, dict(self.headers), body)
        )
        if self.server.delay:
            time.sleep(self.server.delay)
        self.send_response(self.server.status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(self.server.payload)))
        self.end_headers()
        self.wfile.write(self.server.payload)

    do_POST = _serve
    do_GET = _serve

    def log_message(self, format: str, *args: Any) -> None:
        pass


class StubAPIServer(ThreadingHTTPServer):
    """In-process HTTP server returning one configurable reply."""

    daemon_threads = True

    def __init__(self) -> None:
        super().__init__(("127.0.0.1", 0), StubHandler)
        self.requests: List[RecordedRequest] = []
        self.status = 200
        self.payload = json.dumps(SUCCESS_BODY).encode("utf-8")
        self.delay = 0.0

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.server_port}"

    def respond(self, status: int, body: Union[Dict[str, Any], str, bytes], delay: float = 0.0) -> None:
        if isinstance(body, dict):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.status = status
        self.payload = body
        self.delay = delay


class CountingAdapter(BaseAdapter):
    """Transport adapter that fails the test if anything is sent."""

    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self.calls += 1
        raise AssertionError(f"unexpected network call to {request.url}")

    def close(self) -> None:
        pass


class FailingRaw(io.BytesIO):
    def read(self, *args: Any) -> bytes:
        raise requests.exceptions.ConnectionError("connection reset by peer")


def make_response(status: int, body: Union[str, bytes] = b"", raw: Any = None) -> requests.Response:
    """Build an unread ``requests.Response`` backed by an in-memory body."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    response = requests.Response()
    response.status_code = status
    response.raw = raw if raw is not None else io.BytesIO(body)
    return response


@pytest.fixture
def api_server() -> Iterator[StubAPIServer]:
    server = StubAPIServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def counting_session() -> Iterator[requests.Session]:
    session = requests.Session()
    adapter = CountingAdapter()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def email_request() -> EmailRequest:
    return EmailRequest(
        from_="sender@example.com",
        to="recipient@example.com",
        subject="Hello",
        html_body="<h1>Hello World</h1>",
    )
