"""Terminal view using Rich. Pivots one collect cycle into server, stream and consumer tables."""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime
from typing import Dict, List, Sequence, Tuple

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from jsz_exporter import __version__
from jsz_exporter.collector.base import MetricsCollector
from jsz_exporter.collector.descriptors import CONSUMER_LABELS, SERVER_LABELS, STREAM_LABELS
from jsz_exporter.metrics import MetricDescriptor, Sample

log = logging.getLogger(__name__)

# Labels shown as row keys per tier; inherited cluster/domain labels are left
# out of the stream and consumer tables to keep them narrow.
_TIER_KEYS = {
    SERVER_LABELS: ("server_id", "cluster", "domain", "meta_leader"),
    STREAM_LABELS: ("server_id", "stream_name", "stream_leader"),
    CONSUMER_LABELS: ("server_id", "stream_name", "consumer_name", "deliver_subject"),
}


def _short_name(descriptor: MetricDescriptor) -> str:
    # jetstream_consumer_num_pending -> num_pending
    padded = "_" + descriptor.name
    for tier in ("_server_", "_stream_", "_consumer_"):
        if tier in padded:
            return padded.split(tier, 1)[1]
    return descriptor.name


def pivot(samples: Sequence[Sample], label_names: Tuple[str, ...]) -> Dict[Tuple[str, ...], Dict[str, float]]:
    """Group one tier's samples into rows keyed by their label values."""
    rows: Dict[Tuple[str, ...], Dict[str, float]] = {}
    for s in samples:
        if s.descriptor.label_names != label_names:
            continue
        rows.setdefault(s.label_values, {})[_short_name(s.descriptor)] = s.value
    return rows


def build_tier_table(
    title: str,
    descriptors: Sequence[MetricDescriptor],
    samples: Sequence[Sample],
    label_names: Tuple[str, ...],
) -> Table:
    keys = _TIER_KEYS[label_names]
    key_idx = [label_names.index(k) for k in keys]
    metrics = [_short_name(d) for d in descriptors if d.label_names == label_names]

    table = Table(title=title, show_header=True, header_style="bold cyan", expand=True)
    for k in keys:
        table.add_column(k, style="dim")
    for m in metrics:
        table.add_column(m, justify="right")

    for label_values, values in pivot(samples, label_names).items():
        cells = [label_values[i] or "-" for i in key_idx]
        cells += [f"{values[m]:,.0f}" if m in values else "" for m in metrics]
        table.add_row(*cells)
    return table


def build_display(collector: MetricsCollector, samples: Sequence[Sample]) -> Group:
    descriptors = collector.describe()
    servers = {s.label_values[0] for s in samples}

    header = Text(f"  jsz-exporter v{__version__}  |  {collector.name()}", style="bold white on blue")
    header.append(f"\n  {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}  ", style="dim")
    header.append(f"  {len(servers)} server(s) reporting, {len(samples)} samples")

    return Group(
        Panel(header, border_style="blue"),
        build_tier_table("Servers", descriptors, samples, SERVER_LABELS),
        build_tier_table("Streams", descriptors, samples, STREAM_LABELS),
        build_tier_table("Consumers", descriptors, samples, CONSUMER_LABELS),
    )


def print_once(collector: MetricsCollector, console: Console = None):
    console = console or Console()
    samples = collector.collect()
    console.print(build_display(collector, samples))


def run_dashboard(collector: MetricsCollector, refresh_interval: float = 5.0):
    console = Console()
    log.info("Starting dashboard: source=%s, refresh=%.1fs", collector.name(), refresh_interval)

    with Live(console=console, refresh_per_second=1, screen=True) as live:
        try:
            while True:
                samples = collector.collect()
                live.update(build_display(collector, samples))
                time.sleep(refresh_interval)
        except KeyboardInterrupt:
            pass

    console.print("\n[dim]Dashboard stopped.[/dim]")


def samples_to_records(samples: Sequence[Sample]) -> List[dict]:
    return [{"name": s.descriptor.name, "labels": s.labels, "value": s.value} for s in samples]


def run_jsonl(collector: MetricsCollector, refresh_interval: float = 5.0, once: bool = False):
    """Non-interactive output: one JSON object per sample per line."""
    log.info("Starting JSONL output: source=%s, refresh=%.1fs", collector.name(), refresh_interval)
    try:
        while True:
            for record in samples_to_records(collector.collect()):
                sys.stdout.write(json.dumps(record) + "\n")
            sys.stdout.flush()
            if once:
                break
            time.sleep(refresh_interval)
    except KeyboardInterrupt:
        pass
