"""
Fetches /jsz snapshots over HTTP.

One httpx client is shared by every target so the same timeout bounds each
request. There are no retries: a failed target is simply missing from this
scrape and gets tried again on the next one.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from jsz_exporter.errors import FetchError
from jsz_exporter.metrics import Target
from jsz_exporter.snapshot import JszSnapshot

log = logging.getLogger(__name__)

JSZ_SUFFIX = "/jsz?consumers=true"
DEFAULT_TIMEOUT_SECONDS = 5.0


def jsz_url(base_url: str) -> str:
    return base_url.rstrip("/") + JSZ_SUFFIX


class SnapshotFetcher:

    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS, client: Optional[httpx.Client] = None):
        if client is None:
            client = httpx.Client(timeout=timeout_seconds)
        self._client = client

    @property
    def timeout(self) -> httpx.Timeout:
        """The timeout actually applied, read from the client."""
        return self._client.timeout

    def fetch(self, target: Target) -> JszSnapshot:
        """GET the target's /jsz endpoint and decode it. Raises FetchError."""
        url = jsz_url(target.url)
        try:
            response = self._client.get(url)
            response.raise_for_status()
            snapshot = JszSnapshot.model_validate_json(response.content)
        except httpx.HTTPError as e:
            raise FetchError(target.id, e) from e
        except ValidationError as e:
            raise FetchError(target.id, e) from e

        log.debug("fetched %s (%d bytes)", url, len(response.content))
        return snapshot

    def close(self):
        self._client.close()
