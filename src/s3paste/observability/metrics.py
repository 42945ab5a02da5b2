"""Metrics hook protocol and no-op default implementation.

s3paste emits a handful of data points around each upload.  By default a
:class:`NoopMetricsHook` swallows them; pass any object satisfying
:class:`MetricsHook` as ``UploadConfig(metrics=...)`` to route them to
StatsD, Prometheus, or whatever the host uses.

Emitted metric names:

* ``s3paste.upload_success_total``  -- counter
* ``s3paste.upload_failure_total``  -- counter (tag ``code``)
* ``s3paste.upload_duration_ms``    -- timing
* ``s3paste.upload_bytes``          -- gauge
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Metrics backend that silently discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
