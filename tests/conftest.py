"""Shared test fixtures for the s3paste test suite.

Everything runs offline: the object store is an :class:`httpx.MockTransport`
and the host (editor, notifier, paste event, settings store) is faked with
small recording classes.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx
import pytest

from s3paste.config import UploadConfig
from s3paste.models import NoticeKind
from s3paste.storage.transport import AsyncS3Transport
from s3paste.uploader import AsyncImageUploader

ACCESS_KEY_ID = "AKIDEXAMPLE1234"
ACCESS_KEY_SECRET = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
ENDPOINT = "https://account123.r2.cloudflarestorage.com"
BUCKET = "notes"
CLOCK_START = 1_718_000_000_000


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeObjectStore:
    """An in-memory S3 endpoint behind an httpx.MockTransport.

    Every request is recorded.  Keys registered with :meth:`fail` answer
    with an S3-style XML error instead of ``200 OK``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.objects: dict[str, bytes] = {}
        self._failures: dict[str, tuple[int, str, str]] = {}
        self._network_failures: set[str] = set()
        self.transport = httpx.MockTransport(self._handle)

    def fail(
        self,
        key: str,
        status: int = 403,
        code: str = "AccessDenied",
        message: str = "Access Denied",
    ) -> None:
        self._failures[key] = (status, code, message)

    def drop_connection(self, key: str) -> None:
        self._network_failures.add(key)

    @property
    def keys(self) -> list[str]:
        return [r.url.path.rsplit("/", 1)[-1] for r in self.requests]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = request.url.path.rsplit("/", 1)[-1]
        if key in self._network_failures:
            raise httpx.ConnectError("connection reset by peer", request=request)
        if key in self._failures:
            status, code, message = self._failures[key]
            body = (
                '<?xml version="1.0" encoding="UTF-8"?>'
                f"<Error><Code>{code}</Code><Message>{message}</Message></Error>"
            )
            return httpx.Response(
                status,
                content=body.encode(),
                headers={"Content-Type": "application/xml"},
            )
        self.objects[request.url.path] = request.content
        return httpx.Response(200, headers={"ETag": '"d41d8cd98f00b204e9800998ecf8427e"'})


class RecordingEditor:
    def __init__(self) -> None:
        self.inserted: list[str] = []

    def replace_selection(self, text: str) -> None:
        self.inserted.append(text)


class RecordingNotifier:
    def __init__(self) -> None:
        self.notices: list[tuple[NoticeKind, str]] = []

    def notify(self, message: str, kind: NoticeKind) -> None:
        self.notices.append((kind, message))


class FakePasteEvent:
    def __init__(self, files: list[Any] | None) -> None:
        self.files = files
        self.default_prevented = 0

    def prevent_default(self) -> None:
        self.default_prevented += 1


class MemorySettingsStore:
    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data = data
        self.saves: list[dict[str, Any]] = []

    async def load_data(self) -> dict[str, Any] | None:
        return None if self.data is None else dict(self.data)

    async def save_data(self, data: dict[str, Any]) -> None:
        self.saves.append(dict(data))
        self.data = dict(data)


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []
        self.gauges: list[dict[str, Any]] = []

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.gauges.append({"name": name, "value": value, "tags": tags})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> UploadConfig:
    """A complete configuration pointing at the fake R2 endpoint."""
    return UploadConfig(
        access_key_id=ACCESS_KEY_ID,
        access_key_secret=ACCESS_KEY_SECRET,
        bucket=BUCKET,
        endpoint=ENDPOINT,
    )


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def transport_factory(object_store: FakeObjectStore):
    """Build real AsyncS3Transports wired to the fake object store."""
    built: list[AsyncS3Transport] = []

    def factory(cfg: UploadConfig) -> AsyncS3Transport:
        transport = AsyncS3Transport(cfg, http_transport=object_store.transport)
        built.append(transport)
        return transport

    factory.built = built  # type: ignore[attr-defined]
    return factory


@pytest.fixture
def uploader(config: UploadConfig, transport_factory) -> AsyncImageUploader:
    return AsyncImageUploader(config, transport_factory=transport_factory)


@pytest.fixture
def clock():
    """A millisecond clock that ticks once per call."""
    counter = itertools.count(CLOCK_START)
    return lambda: next(counter)


@pytest.fixture
def editor() -> RecordingEditor:
    return RecordingEditor()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def make_event():
    return FakePasteEvent


@pytest.fixture
def settings_store() -> MemorySettingsStore:
    return MemorySettingsStore()


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()


@pytest.fixture
def make_settings_store():
    return MemorySettingsStore
