"""
Fetcher that reads from the mock JetStream generator instead of HTTP.
Used for local development on machines without a NATS server.
"""

from __future__ import annotations

from typing import Dict

from jsz_exporter.metrics import Target
from jsz_exporter.mock.generator import MockJetStreamServer
from jsz_exporter.snapshot import JszSnapshot


class MockFetcher:
    """One simulated server per target, seeded from the target's position."""

    def __init__(self, seed: int = 42, clustered: bool = True):
        self._seed = seed
        self._clustered = clustered
        self._servers: Dict[str, MockJetStreamServer] = {}

    def fetch(self, target: Target) -> JszSnapshot:
        server = self._servers.get(target.id)
        if server is None:
            server = MockJetStreamServer(
                seed=self._seed + len(self._servers),
                server_id=target.id,
                clustered=self._clustered,
            )
            self._servers[target.id] = server
        return JszSnapshot.model_validate(server.payload())

    def close(self):
        self._servers.clear()
