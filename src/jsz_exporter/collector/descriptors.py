"""
Static metric descriptors for the /jsz collector.

Built once per collector from a namespace prefix and never mutated after.
Label tuples nest: stream labels extend server labels, consumer labels
extend stream labels, and samples must follow the same order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from jsz_exporter.metrics import MetricDescriptor


SERVER_LABELS: Tuple[str, ...] = ("server_id", "cluster", "domain", "meta_leader")
STREAM_LABELS: Tuple[str, ...] = SERVER_LABELS + ("stream_name", "stream_leader")
CONSUMER_LABELS: Tuple[str, ...] = STREAM_LABELS + ("consumer_name", "consumer_leader", "deliver_subject")


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """Join non-empty parts with underscores, e.g. jetstream_server_total_streams."""
    return "_".join(part for part in (namespace, subsystem, name) if part)


@dataclass(frozen=True)
class JszDescriptors:
    # Server
    streams: MetricDescriptor
    consumers: MetricDescriptor
    messages: MetricDescriptor
    bytes: MetricDescriptor

    # Stream
    stream_messages: MetricDescriptor
    stream_bytes: MetricDescriptor
    stream_last_seq: MetricDescriptor
    stream_consumer_count: MetricDescriptor

    # Consumer
    consumer_delivered_consumer_seq: MetricDescriptor
    consumer_delivered_stream_seq: MetricDescriptor
    consumer_num_ack_pending: MetricDescriptor
    consumer_num_redelivered: MetricDescriptor
    consumer_num_waiting: MetricDescriptor
    consumer_num_pending: MetricDescriptor

    def all(self) -> Tuple[MetricDescriptor, ...]:
        """All 14 descriptors, server tier first, then stream, then consumer."""
        return tuple(getattr(self, name) for name in self.__dataclass_fields__)


def build_descriptors(namespace: str = "jetstream") -> JszDescriptors:
    def server(name: str, help_text: str) -> MetricDescriptor:
        return MetricDescriptor(build_fq_name(namespace, "server", name), help_text, SERVER_LABELS)

    def stream(name: str, help_text: str) -> MetricDescriptor:
        return MetricDescriptor(build_fq_name(namespace, "stream", name), help_text, STREAM_LABELS)

    def consumer(name: str, help_text: str) -> MetricDescriptor:
        return MetricDescriptor(build_fq_name(namespace, "consumer", name), help_text, CONSUMER_LABELS)

    return JszDescriptors(
        streams=server("total_streams", "Total number of streams in JetStream"),
        consumers=server("total_consumers", "Total number of consumers in JetStream"),
        messages=server("total_messages", "Total number of stored messages in JetStream"),
        bytes=server("total_message_bytes", "Total number of bytes stored in JetStream"),
        stream_messages=stream("total_messages", "Total number of messages from a stream"),
        stream_bytes=stream("total_bytes", "Total stored bytes from a stream"),
        stream_last_seq=stream("last_seq", "Last sequence from a stream"),
        stream_consumer_count=stream("consumer_count", "Total number of consumers from a stream"),
        consumer_delivered_consumer_seq=consumer(
            "delivered_consumer_seq", "Latest sequence number of a stream consumer"
        ),
        consumer_delivered_stream_seq=consumer(
            "delivered_stream_seq", "Latest sequence number of a stream"
        ),
        consumer_num_ack_pending=consumer("num_ack_pending", "Number of pending acks from a consumer"),
        consumer_num_redelivered=consumer(
            "num_redelivered", "Number of redelivered messages from a consumer"
        ),
        consumer_num_waiting=consumer(
            "num_waiting", "Number of inflight fetch requests from a pull consumer"
        ),
        consumer_num_pending=consumer("num_pending", "Number of pending messages from a consumer"),
    )
