"""Exception types raised inside the exporter."""

from __future__ import annotations


class JszExporterError(Exception):
    """Base class for exporter errors."""


class FetchError(JszExporterError):
    """A target's snapshot could not be retrieved or decoded.

    Covers connection failures, timeouts, non-2xx responses and bodies
    that are not a valid /jsz document. `cause` is the underlying exception.
    """

    def __init__(self, target_id: str, cause: BaseException):
        super().__init__(f"{target_id}: {cause}")
        self.target_id = target_id
        self.cause = cause
