"""
Bridge from MetricsCollector to prometheus_client.

prometheus_client calls describe() once at registration to check for name
clashes, then collect() on every scrape of the /metrics endpoint.
"""

from __future__ import annotations

from typing import Dict, Iterator

from prometheus_client import CollectorRegistry
from prometheus_client.core import GaugeMetricFamily

from jsz_exporter.collector.base import MetricsCollector
from jsz_exporter.metrics import MetricDescriptor


def _family(descriptor: MetricDescriptor) -> GaugeMetricFamily:
    return GaugeMetricFamily(
        descriptor.name,
        descriptor.help_text,
        labels=list(descriptor.label_names),
    )


class PrometheusBridge:
    """Custom prometheus_client collector wrapping one MetricsCollector."""

    def __init__(self, collector: MetricsCollector):
        self._collector = collector

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for descriptor in self._collector.describe():
            yield _family(descriptor)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        families: Dict[str, GaugeMetricFamily] = {
            d.name: _family(d) for d in self._collector.describe()
        }
        for sample in self._collector.collect():
            families[sample.descriptor.name].add_metric(list(sample.label_values), sample.value)
        yield from families.values()


def build_registry(collector: MetricsCollector) -> CollectorRegistry:
    """A fresh registry holding only this collector (no process/platform metrics)."""
    registry = CollectorRegistry(auto_describe=True)
    registry.register(PrometheusBridge(collector))
    return registry
