"""
Collector for NATS JetStream. Fetches /jsz?consumers=true from every
configured server and flattens the server -> account -> stream -> consumer
tree into gauge samples.

Label values are inherited downward: a stream sample carries its server's
four labels followed by its own two, a consumer sample carries its stream's
six followed by its own three. Missing cluster/domain data becomes "".
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Sequence, Tuple

from jsz_exporter.collector.base import MetricsCollector
from jsz_exporter.collector.descriptors import JszDescriptors, build_descriptors
from jsz_exporter.collector.fetcher import DEFAULT_TIMEOUT_SECONDS, SnapshotFetcher
from jsz_exporter.errors import FetchError
from jsz_exporter.metrics import MetricDescriptor, Sample, Target, make_sample
from jsz_exporter.snapshot import ConsumerDetail, JszSnapshot, StreamDetail

log = logging.getLogger(__name__)

Labels = Tuple[str, ...]


def server_labels(target_id: str, snapshot: JszSnapshot) -> Labels:
    return (target_id, snapshot.cluster_name, snapshot.domain, snapshot.cluster_leader)


def stream_labels(server: Labels, stream: StreamDetail) -> Labels:
    return server + (stream.name, stream.leader)


def consumer_labels(stream: Labels, consumer: ConsumerDetail) -> Labels:
    return stream + (consumer.name, consumer.leader, consumer.deliver_subject)


class JszCollector(MetricsCollector):

    def __init__(
        self,
        targets: Iterable[Target],
        namespace: str = "jetstream",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        fetcher=None,
    ):
        self._targets: Tuple[Target, ...] = tuple(targets)
        self._desc: JszDescriptors = build_descriptors(namespace)
        self._fetcher = fetcher or SnapshotFetcher(timeout_seconds=timeout_seconds)
        # Held for a whole collect() so overlapping scrapes run one after another.
        self._lock = threading.Lock()

    @property
    def targets(self) -> Tuple[Target, ...]:
        return self._targets

    @property
    def descriptors(self) -> JszDescriptors:
        return self._desc

    def describe(self) -> Sequence[MetricDescriptor]:
        return self._desc.all()

    def collect(self) -> List[Sample]:
        """Walk every target in order. Unreachable targets are logged and skipped."""
        with self._lock:
            samples: List[Sample] = []
            for target in self._targets:
                try:
                    snapshot = self._fetcher.fetch(target)
                except FetchError as e:
                    log.warning("ignoring server %s: %s", e.target_id, e.cause)
                    continue

                emitted = self._walk(target, snapshot)
                log.debug("server %s: %d samples", target.id, len(emitted))
                samples.extend(emitted)
            return samples

    def _walk(self, target: Target, snapshot: JszSnapshot) -> List[Sample]:
        d = self._desc
        out: List[Sample] = []

        srv = server_labels(target.id, snapshot)
        out.append(make_sample(d.streams, snapshot.streams, srv))
        out.append(make_sample(d.consumers, snapshot.consumers, srv))
        out.append(make_sample(d.messages, snapshot.messages, srv))
        out.append(make_sample(d.bytes, snapshot.bytes, srv))

        for stream in snapshot.iter_streams():
            stm = stream_labels(srv, stream)
            out.append(make_sample(d.stream_messages, stream.state.messages, stm))
            out.append(make_sample(d.stream_bytes, stream.state.bytes, stm))
            out.append(make_sample(d.stream_last_seq, stream.state.last_seq, stm))
            out.append(make_sample(d.stream_consumer_count, stream.state.consumer_count, stm))

            for consumer in stream.consumer_detail:
                con = consumer_labels(stm, consumer)
                out.append(make_sample(d.consumer_delivered_consumer_seq, consumer.delivered.consumer_seq, con))
                out.append(make_sample(d.consumer_delivered_stream_seq, consumer.delivered.stream_seq, con))
                out.append(make_sample(d.consumer_num_ack_pending, consumer.num_ack_pending, con))
                out.append(make_sample(d.consumer_num_redelivered, consumer.num_redelivered, con))
                out.append(make_sample(d.consumer_num_waiting, consumer.num_waiting, con))
                out.append(make_sample(d.consumer_num_pending, consumer.num_pending, con))

        return out

    def name(self) -> str:
        ids = ", ".join(t.id for t in self._targets) or "no targets"
        return f"JetStream ({ids})"

    def close(self):
        self._fetcher.close()
