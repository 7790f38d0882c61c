"""
Base collector interface.

A collector declares a fixed set of metric descriptors and, on each scrape,
produces samples against them. The Prometheus bridge and the terminal view
only depend on this interface, not on where the numbers come from.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from jsz_exporter.metrics import MetricDescriptor, Sample


class MetricsCollector(ABC):
    """Interface for all metrics sources."""

    @abstractmethod
    def describe(self) -> Sequence[MetricDescriptor]:
        """Every descriptor this collector can emit. Must not touch the network."""
        ...

    @abstractmethod
    def collect(self) -> Sequence[Sample]:
        """Scrape all sources once. Must not raise for unreachable sources."""
        ...

    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this source."""
        ...
