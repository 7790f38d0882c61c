"""Prometheus exporter for NATS JetStream /jsz snapshots."""

__version__ = "0.1.0"
