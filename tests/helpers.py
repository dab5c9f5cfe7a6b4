"""Response builders and a recording mock transport for the test suite."""

import json
from typing import Any

import httpx


def envelope(data: Any = None, status: int = 200, success: bool = True, error: str | None = None) -> dict:
    """Build a standard KITE response envelope."""
    body: dict[str, Any] = {"success": success, "status": status}
    if data is not None:
        body["data"] = data
    if error is not None:
        body["error"] = error
    return body


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode())


class Recorder:
    """MockTransport handler that records requests and replies from a route table."""

    def __init__(self, routes: dict[tuple[str, str], Any] | None = None):
        self.routes = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.routes.get((request.method, request.url.raw_path.decode()))
        if reply is None:
            return json_response(envelope(status=404, success=False, error="Route not found"), 404)
        if isinstance(reply, httpx.Response):
            return httpx.Response(reply.status_code, content=reply.content, headers=reply.headers)
        if callable(reply):
            return reply(request)
        return json_response(reply)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)
