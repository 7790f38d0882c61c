"""
Mock JetStream /jsz payload generator.

Produces fake but plausible snapshots so we can develop and test without
a NATS server. Each call advances a simulated clock: publishers append
messages to every stream and consumers chase the stream's last sequence,
sometimes falling behind.
"""

from __future__ import annotations

import random
from typing import List


class MockJetStreamServer:

    def __init__(
        self,
        seed: int = 42,
        server_id: str = "NDJWE4SOUJOJT2TY5Y2YQEOAHGAK5VIGXTGKWJSFHVCII4ITI3LBHBUV",
        accounts: int = 1,
        streams_per_account: int = 2,
        consumers_per_stream: int = 2,
        clustered: bool = False,
        domain: str = "",
    ):
        self._rng = random.Random(seed)
        self._tick = 0
        self.server_id = server_id
        self.clustered = clustered
        self.domain = domain

        self._streams: List[dict] = []
        for a in range(accounts):
            account = f"ACC{a}" if accounts > 1 else "$G"
            for s in range(streams_per_account):
                self._streams.append({
                    "account": account,
                    "name": f"STREAM_{a}_{s}" if accounts > 1 else f"STREAM_{s}",
                    "last_seq": 0,
                    "bytes": 0,
                    "consumers": [
                        {
                            "name": f"C{c}",
                            # Odd consumers are pull consumers, no deliver subject.
                            "deliver_subject": f"_INBOX.deliver.{s}.{c}" if c % 2 == 0 else "",
                            "delivered": 0,
                            "redelivered": 0,
                        }
                        for c in range(consumers_per_stream)
                    ],
                })

    def _cluster(self, leader: str) -> dict:
        return {"name": "mock-cluster", "leader": leader}

    def payload(self) -> dict:
        """Generate one /jsz?consumers=true document, advancing the clock."""
        self._tick += 1
        leader = "nats-0"

        accounts: dict = {}
        total_messages = total_bytes = total_consumers = 0

        for stream in self._streams:
            published = self._rng.randint(0, 50)
            stream["last_seq"] += published
            stream["bytes"] += published * self._rng.randint(64, 512)

            consumers = []
            for c in stream["consumers"]:
                # Consumers usually keep up, occasionally lag a few ticks behind
                lag = 0 if self._rng.random() > 0.2 else self._rng.randint(1, 40)
                c["delivered"] = max(c["delivered"], stream["last_seq"] - lag)
                ack_pending = self._rng.randint(0, 5) if c["delivered"] else 0
                if self._rng.random() > 0.9:
                    c["redelivered"] += 1

                detail = {
                    "stream_name": stream["name"],
                    "name": c["name"],
                    "config": {"durable_name": c["name"], "deliver_subject": c["deliver_subject"]},
                    "delivered": {"consumer_seq": c["delivered"], "stream_seq": c["delivered"]},
                    "ack_floor": {
                        "consumer_seq": max(0, c["delivered"] - ack_pending),
                        "stream_seq": max(0, c["delivered"] - ack_pending),
                    },
                    "num_ack_pending": ack_pending,
                    "num_redelivered": c["redelivered"],
                    "num_waiting": 0 if c["deliver_subject"] else self._rng.randint(0, 3),
                    "num_pending": stream["last_seq"] - c["delivered"],
                }
                if not c["deliver_subject"]:
                    del detail["config"]["deliver_subject"]
                if self.clustered:
                    detail["cluster"] = self._cluster(leader)
                consumers.append(detail)

            stream_detail = {
                "name": stream["name"],
                "state": {
                    "messages": stream["last_seq"],
                    "bytes": stream["bytes"],
                    "first_seq": 1 if stream["last_seq"] else 0,
                    "last_seq": stream["last_seq"],
                    "consumer_count": len(consumers),
                },
                "consumer_detail": consumers,
            }
            if self.clustered:
                stream_detail["cluster"] = self._cluster(leader)

            accounts.setdefault(stream["account"], []).append(stream_detail)
            total_messages += stream["last_seq"]
            total_bytes += stream["bytes"]
            total_consumers += len(consumers)

        doc = {
            "server_id": self.server_id,
            "config": {"max_memory": 1 << 30, "max_storage": 1 << 34, "store_dir": "/data/jetstream"},
            "memory": 0,
            "storage": total_bytes,
            "accounts": len(accounts),
            "streams": len(self._streams),
            "consumers": total_consumers,
            "messages": total_messages,
            "bytes": total_bytes,
            "account_details": [
                {"name": name, "id": name, "stream_detail": streams}
                for name, streams in accounts.items()
            ],
        }
        if self.domain:
            doc["config"]["domain"] = self.domain
        if self.clustered:
            doc["meta_cluster"] = {"name": "mock-cluster", "leader": leader, "cluster_size": 3}
        return doc
