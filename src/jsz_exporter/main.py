"""
jsz-exporter entry point.

Usage:
    jsz-exporter --url http://nats-0:8222 --url http://nats-1:8222   Serve /metrics
    jsz-exporter --url east=http://nats-east:8222 once               Print one scrape
    jsz-exporter --mock watch                                         Live table, simulated data

Every option can also come from the environment, e.g. JSZ_EXPORTER_PORT=7777.
"""

from __future__ import annotations

import logging
import time

import click
from prometheus_client import start_http_server

from jsz_exporter import __version__
from jsz_exporter.collector.fetcher import DEFAULT_TIMEOUT_SECONDS
from jsz_exporter.collector.jsz_collector import JszCollector
from jsz_exporter.dashboard.terminal import print_once, run_dashboard, run_jsonl
from jsz_exporter.exposition import build_registry
from jsz_exporter.metrics import parse_target
from jsz_exporter.mock.mock_fetcher import MockFetcher


log = logging.getLogger("jsz_exporter")

MOCK_TARGETS = ("mock-0=http://mock-0:8222", "mock-1=http://mock-1:8222")


def build_collector(urls, mock: bool, namespace: str, timeout: float) -> JszCollector:
    if mock and not urls:
        urls = MOCK_TARGETS
    targets = [parse_target(u) for u in urls]
    fetcher = MockFetcher() if mock else None
    return JszCollector(targets, namespace=namespace, timeout_seconds=timeout, fetcher=fetcher)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="jsz-exporter")
@click.option("--url", "-u", "urls", multiple=True,
              help="NATS monitoring URL, optionally prefixed with an id (id=http://host:8222). Repeatable.")
@click.option("--mock", is_flag=True, default=False, help="Use simulated JetStream snapshots")
@click.option("--namespace", default="jetstream", show_default=True, help="Metric name prefix")
@click.option("--timeout", default=DEFAULT_TIMEOUT_SECONDS, show_default=True,
              help="Per-request timeout in seconds")
@click.option("--addr", default="0.0.0.0", show_default=True, help="Address to serve /metrics on")
@click.option("--port", default=7777, show_default=True, help="Port to serve /metrics on")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx, urls, mock: bool, namespace: str, timeout: float, addr: str, port: int, verbose: bool):
    """jsz-exporter - Prometheus exporter for NATS JetStream."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if not mock and not urls:
        click.echo("Please specify a data source: --mock or --url <endpoint>")
        raise SystemExit(1)

    try:
        collector = build_collector(urls, mock, namespace, timeout)
    except ValueError as e:
        click.echo(f"Invalid target: {e}")
        raise SystemExit(1)

    ctx.ensure_object(dict)
    ctx.obj["collector"] = collector
    ctx.call_on_close(collector.close)

    # If no subcommand, serve metrics until interrupted
    if ctx.invoked_subcommand is None:
        registry = build_registry(collector)
        start_http_server(port, addr=addr, registry=registry)
        log.info("Serving %s on http://%s:%d/metrics", collector.name(), addr, port)
        click.echo(f"Serving {collector.name()} on http://{addr}:{port}/metrics")
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            pass


@cli.command()
@click.option("--output", type=click.Choice(["table", "jsonl"]), default="table",
              help="Output mode: table (Rich) or jsonl (one JSON line per sample)")
@click.pass_context
def once(ctx, output: str):
    """Scrape every target once and print the samples."""
    collector = ctx.obj["collector"]
    if output == "jsonl":
        run_jsonl(collector, once=True)
    else:
        print_once(collector)


@cli.command()
@click.option("--refresh", default=5.0, show_default=True, help="Refresh interval in seconds")
@click.pass_context
def watch(ctx, refresh: float):
    """Live-updating table of every target's streams and consumers."""
    run_dashboard(ctx.obj["collector"], refresh_interval=refresh)


def main():
    cli(auto_envvar_prefix="JSZ_EXPORTER")


if __name__ == "__main__":
    main()
