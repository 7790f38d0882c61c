"""
Shared fixtures: a fake /jsz server running in a thread, and a small
hand-written snapshot with one stream and one consumer.
"""

import copy
import socket
import threading

import pytest

from jsz_exporter.mock.fake_jsz_server import FakeJszServer


ORDERS_SNAPSHOT = {
    "server_id": "NCUOUT6MLZ7ZBHFH5L6SS3XHBZ4ZIY7IYRKI7WLMR5FB5LXL3PZ2YIJA",
    "config": {"max_memory": 1073741824, "max_storage": 10737418240, "domain": ""},
    "streams": 2,
    "consumers": 5,
    "messages": 100,
    "bytes": 4096,
    "meta_cluster": {"name": "c1", "leader": "s1", "cluster_size": 3},
    "account_details": [
        {
            "name": "$G",
            "id": "$G",
            "stream_detail": [
                {
                    "name": "ORDERS",
                    "state": {
                        "messages": 10,
                        "bytes": 200,
                        "first_seq": 1,
                        "last_seq": 10,
                        "consumer_count": 1,
                    },
                    "consumer_detail": [
                        {
                            "stream_name": "ORDERS",
                            "name": "C1",
                            "config": {"durable_name": "C1", "deliver_subject": "orders.deliver"},
                            "delivered": {"consumer_seq": 9, "stream_seq": 10},
                            "ack_floor": {"consumer_seq": 8, "stream_seq": 9},
                            "num_ack_pending": 1,
                            "num_redelivered": 0,
                            "num_waiting": 0,
                            "num_pending": 5,
                        }
                    ],
                }
            ],
        }
    ],
}


@pytest.fixture
def jsz_server():
    """Factory fixture: jsz_server(payload_fn) -> running FakeJszServer."""
    started = []

    def _start(payload_fn):
        server = FakeJszServer(("127.0.0.1", 0), payload_fn)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        started.append(server)
        return server

    yield _start

    for server in started:
        server.shutdown()
        server.server_close()


@pytest.fixture
def silent_url():
    """URL of a socket that accepts connections into its backlog but never answers."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    host, port = sock.getsockname()
    yield f"http://{host}:{port}"
    sock.close()


@pytest.fixture
def orders_snapshot():
    return copy.deepcopy(ORDERS_SNAPSHOT)
