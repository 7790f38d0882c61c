"""
Fake NATS monitoring server that answers /jsz, for testing without NATS.

    python -m jsz_exporter.mock.fake_jsz_server
    jsz-exporter --url http://localhost:8222 once
"""

from __future__ import annotations

import json
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Callable, Optional
from urllib.parse import urlsplit

from jsz_exporter.mock.generator import MockJetStreamServer


class FakeJszServer(HTTPServer):
    """HTTPServer whose /jsz body comes from `payload_fn`.

    `status` and `raw_body` let tests force error responses or
    malformed documents.
    """

    def __init__(self, address, payload_fn: Callable[[], dict]):
        super().__init__(address, _JszHandler)
        self.payload_fn = payload_fn
        self.status = 200
        self.raw_body: Optional[bytes] = None
        self.requests = []

    @property
    def url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"


class _JszHandler(BaseHTTPRequestHandler):
    server: FakeJszServer

    def do_GET(self):
        parts = urlsplit(self.path)
        self.server.requests.append(self.path)
        if parts.path != "/jsz":
            self.send_response(404)
            self.end_headers()
            return

        if self.server.raw_body is not None:
            body = self.server.raw_body
        else:
            body = json.dumps(self.server.payload_fn()).encode()

        self.send_response(self.server.status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass  # Suppress request logging noise


def run_fake_server(host: str = "127.0.0.1", port: int = 8222, clustered: bool = True):
    mock = MockJetStreamServer(clustered=clustered)
    server = FakeJszServer((host, port), mock.payload)
    print(f"Fake NATS monitoring server running at {server.url}/jsz")
    print("Press Ctrl+C to stop.\n")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    server.server_close()
    print("\nServer stopped.")


if __name__ == "__main__":
    run_fake_server()
