"""Async HTTP transport for S3-compatible object stores.

Each request follows a short, single-attempt lifecycle:

1. Build the path-style object URL ``{endpoint}/{bucket}/{key}``.
2. Sign the request with SigV4 (see :mod:`.signing`).
3. Send it with httpx.
4. On ``2xx`` -- return the response headers.
5. On any other status -- parse the S3 XML error body and raise
   :class:`UploadError`.
6. On a transport failure (timeout, DNS, connection reset) -- raise
   :class:`UploadError` wrapping the httpx exception.

There is no retry: a failed attempt is terminal for that object.
"""

from __future__ import annotations

import json as _json
import sys
import time
import xml.etree.ElementTree as ET
from typing import Any
from urllib.parse import quote

import httpx

from s3paste.config import UploadConfig
from s3paste.errors import UploadError
from s3paste.observability import NoopMetricsHook, get_logger

from .signing import RequestSigner

log = get_logger("s3paste.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def build_object_url(endpoint: str, bucket: str, key: str) -> str:
    """Return the path-style URL of *key* in *bucket*.

    An empty *bucket* is skipped, which lets an endpoint that already
    names the bucket (virtual-hosted style) be used as-is.
    """
    parts = [endpoint.rstrip("/")]
    if bucket:
        parts.append(quote(bucket, safe=""))
    parts.append(quote(key, safe="/~"))
    return "/".join(parts)


def _parse_s3_error(response: httpx.Response) -> tuple[str, str]:
    """Extract ``(Code, Message)`` from an S3 XML error body.

    Falls back to the reason phrase when the body is empty or not XML
    (HEAD responses and some proxies return no body at all).
    """
    if response.content.strip():
        try:
            root = ET.fromstring(response.content)
        except ET.ParseError:
            return "", response.text[:500]
        code = root.findtext("Code") or ""
        message = root.findtext("Message") or ""
        if code or message:
            return code, message
    return "", response.reason_phrase


def _raise_for_status(response: httpx.Response, bucket: str, key: str) -> None:
    """Raise :class:`UploadError` describing a non-2xx store response."""
    status = response.status_code
    s3_code, s3_message = _parse_s3_error(response)

    detail = f"{s3_code}: {s3_message}" if s3_code else s3_message
    if status in (401, 403):
        reason = "access denied"
    elif status == 404:
        reason = "bucket or endpoint not found"
    elif status >= 500:
        reason = "object store error"
    else:
        reason = "request rejected"

    raise UploadError(
        message=f"Upload of {key} to bucket '{bucket}' failed ({status} {reason}): {detail}",
        context={
            "status_code": status,
            "s3_code": s3_code,
            "bucket": bucket,
            "key": key,
        },
    )


def _dump_exchange(
    method: str,
    url: str,
    headers: dict[str, str],
    response_status: int | None,
    response_body: str | None,
    secrets: tuple[str, ...],
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from s3paste.utils.redact import redact

    dump: dict[str, Any] = {
        "method": method,
        "url": url,
        "request_headers": headers,
    }
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body:
        dump["response_body"] = response_body[:1000]
    print(
        _json.dumps(redact(dump, secrets), indent=2, default=str),
        file=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncS3Transport:
    """Signed async HTTP transport bound to one :class:`UploadConfig`.

    The credentials are fixed at construction time.  When the settings
    change, build a new transport rather than mutating this one.

    Parameters
    ----------
    config:
        The configuration whose endpoint and key pair this transport uses.
    http_transport:
        Optional httpx transport, e.g. :class:`httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        config: UploadConfig,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._signer = RequestSigner(
            config.access_key_id,
            config.access_key_secret,
            config.region,
        )
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
            transport=http_transport,
        )

    @property
    def config(self) -> UploadConfig:
        return self._config

    # -- public API --------------------------------------------------------

    async def put_object(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str,
    ) -> httpx.Headers:
        """Store *data* at *key* in *bucket* with a single signed ``PUT``.

        Returns
        -------
        httpx.Headers
            The store's response headers (``ETag`` and friends).

        Raises
        ------
        UploadError
            On any non-2xx response or transport-level failure.
        """
        url = build_object_url(self._config.endpoint, bucket, key)
        headers = self._signer.sign(
            "PUT", url, {"Content-Type": content_type}, data,
        )

        t0 = time.monotonic()
        try:
            response = await self._client.put(url, content=data, headers=headers)
        except httpx.TransportError as exc:
            log.warning(
                "Object store network error",
                extra={
                    "extra_fields": {
                        "op": "put_object",
                        "bucket": bucket,
                        "key": key,
                        "error": str(exc),
                    }
                },
            )
            raise UploadError(
                message=f"Network error while uploading {key}: {exc}",
                context={
                    "status_code": None,
                    "s3_code": "",
                    "bucket": bucket,
                    "key": key,
                },
                cause=exc,
            ) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000

        self._metrics.timing(
            "s3paste.upload_duration_ms",
            elapsed_ms,
            tags={"status": str(response.status_code)},
        )

        if self._config.debug_dump_payload:
            _dump_exchange(
                "PUT", url, headers, response.status_code, response.text,
                secrets=(self._config.access_key_id, self._config.access_key_secret),
            )

        if not 200 <= response.status_code < 300:
            _raise_for_status(response, bucket, key)

        return response.headers

    # -- lifecycle ---------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncS3Transport:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
