"""Test helper functions."""

import json
from io import BytesIO
from typing import Any, Dict, Optional, Tuple


class MockSocket:
    """Socket stand-in that feeds one raw request and records the response."""

    def __init__(self, raw_request: bytes):
        self.raw_request = raw_request
        self.sent = bytearray()

    def makefile(self, *args, **kwargs):
        return BytesIO(self.raw_request)

    def sendall(self, data):
        self.sent.extend(data)

    def close(self):
        pass


def build_raw_request(
    method: str = "POST",
    path: str = "/api/listings/create",
    body: Any = None,
    headers: Optional[Dict[str, str]] = None
) -> bytes:
    """Build raw HTTP request bytes; dict bodies are JSON encoded."""
    if body is None:
        payload = b""
    elif isinstance(body, (bytes, bytearray)):
        payload = bytes(body)
    elif isinstance(body, str):
        payload = body.encode("utf-8")
    else:
        payload = json.dumps(body).encode("utf-8")

    lines = [f"{method} {path} HTTP/1.1", "Host: localhost"]
    if payload:
        lines.append("Content-Type: application/json")
        lines.append(f"Content-Length: {len(payload)}")
    for name, value in (headers or {}).items():
        lines.append(f"{name}: {value}")

    return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8") + payload


def call_handler(
    handler_cls,
    method: str = "POST",
    path: str = "/api/listings/create",
    body: Any = None,
    headers: Optional[Dict[str, str]] = None
) -> Tuple[int, Dict[str, str], Any]:
    """Run a BaseHTTPRequestHandler subclass against one request.

    Returns (status, headers, parsed JSON body).
    """
    sock = MockSocket(build_raw_request(method, path, body, headers))
    handler_cls(sock, ("127.0.0.1", 8000), None)

    head, _, payload = bytes(sock.sent).partition(b"\r\n\r\n")
    head_lines = head.decode("iso-8859-1").split("\r\n")
    status = int(head_lines[0].split(" ")[1])
    response_headers = {}
    for line in head_lines[1:]:
        name, _, value = line.partition(":")
        response_headers[name.strip()] = value.strip()

    return status, response_headers, json.loads(payload.decode("utf-8")) if payload else None
