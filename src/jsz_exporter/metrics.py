"""
Core metric types for the exporter.

A MetricDescriptor is declared once per collector and reused for every
sample of that kind. Its label_names order is positional: every Sample
built against it carries label values in exactly that order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple
from urllib.parse import urlparse


@dataclass(frozen=True)
class Target:
    """One monitored NATS server: an identifier plus its monitoring base URL."""

    id: str
    url: str


def parse_target(value: str) -> Target:
    """Build a Target from "id=url" or a bare URL.

    A bare URL gets its host:port as the identifier.
    """
    value = value.strip()
    if not value:
        raise ValueError("empty target")

    if "=" in value and not value.startswith(("http://", "https://")):
        target_id, url = value.split("=", 1)
        target_id, url = target_id.strip(), url.strip()
    else:
        target_id, url = "", value

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"invalid target URL: {url!r}")

    return Target(id=target_id or parsed.netloc, url=url.rstrip("/"))


@dataclass(frozen=True)
class MetricDescriptor:
    name: str
    help_text: str
    label_names: Tuple[str, ...]


@dataclass(frozen=True)
class Sample:
    """A single gauge reading for one descriptor."""

    descriptor: MetricDescriptor
    label_values: Tuple[str, ...]
    value: float

    @property
    def labels(self) -> dict:
        return dict(zip(self.descriptor.label_names, self.label_values))


def make_sample(descriptor: MetricDescriptor, value: float, label_values: Sequence[str]) -> Sample:
    label_values = tuple(label_values)
    if len(label_values) != len(descriptor.label_names):
        raise ValueError(
            f"{descriptor.name}: expected {len(descriptor.label_names)} label values, "
            f"got {len(label_values)}"
        )
    return Sample(descriptor=descriptor, label_values=label_values, value=float(value))
