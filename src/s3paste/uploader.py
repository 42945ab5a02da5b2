"""Upload pipeline: raw bytes plus an object name in, public URL out.

:class:`AsyncImageUploader` is a small stateful service constructed once
per plugin instance.  It holds the current :class:`UploadConfig` and a
lazily built :class:`AsyncS3Transport`.  Saving settings calls
:meth:`AsyncImageUploader.configure`, which swaps the configuration
wholesale and discards the transport so the next upload signs with the
new credentials.

Usage::

    uploader = AsyncImageUploader(UploadConfig.from_settings(stored))
    url = await uploader.upload(data, "image-1718000000000.png", "image/png")
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import quote

from s3paste.config import UploadConfig
from s3paste.errors import ErrorCode, S3PasteError, UploadError
from s3paste.models import UploadFailure, UploadResult, UploadSuccess
from s3paste.observability import NoopMetricsHook, get_logger
from s3paste.storage.transport import AsyncS3Transport, build_object_url

log = get_logger("s3paste.uploader")

TransportFactory = Callable[[UploadConfig], AsyncS3Transport]


def build_public_url(config: UploadConfig, object_name: str) -> str:
    """Return the public link for *object_name* under *config*.

    ``{custom_domain}/{object_name}`` when a custom domain is set,
    otherwise ``{endpoint}/{bucket}/{object_name}``.  The key is
    percent-encoded the same way in both forms.  Pure: no I/O.
    """
    if config.custom_domain:
        return f"{config.custom_domain.rstrip('/')}/{quote(object_name, safe='/~')}"
    return build_object_url(config.endpoint, config.bucket, object_name)


def _code_tag(code: ErrorCode | str) -> str:
    return code.value if isinstance(code, ErrorCode) else str(code)


class AsyncImageUploader:
    """Upload pasted images to the configured object store.

    Parameters
    ----------
    config:
        Initial configuration.  Defaults to an empty (incomplete) config,
        which makes every upload fail with :class:`ConfigurationError`
        until :meth:`configure` is called.
    transport_factory:
        Builds the transport for a configuration.  Defaults to
        :class:`AsyncS3Transport`; tests pass a factory that injects an
        :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        config: UploadConfig | None = None,
        *,
        transport_factory: TransportFactory | None = None,
    ) -> None:
        self._config = config if config is not None else UploadConfig()
        self._transport_factory = transport_factory or AsyncS3Transport
        self._transport: AsyncS3Transport | None = None
        self._retired: list[AsyncS3Transport] = []
        self._in_flight = 0

    @property
    def config(self) -> UploadConfig:
        return self._config

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    async def configure(self, config: UploadConfig) -> None:
        """Replace the configuration and drop the authenticated transport.

        The transport is rebuilt on the next upload.  A transport still
        serving an in-flight upload is closed once that upload finishes.
        """
        old = self._transport
        self._config = config
        self._transport = None
        if old is not None:
            self._retired.append(old)
            await self._close_retired()
        log.debug(
            "Uploader reconfigured",
            extra={
                "extra_fields": {
                    "op": "configure",
                    "bucket": config.bucket,
                    "endpoint": config.endpoint,
                    "missing_fields": config.missing_fields(),
                }
            },
        )

    def _get_transport(self) -> AsyncS3Transport:
        if self._transport is None:
            self._transport = self._transport_factory(self._config)
        return self._transport

    async def _close_retired(self) -> None:
        if self._in_flight:
            return
        retired, self._retired = self._retired, []
        for transport in retired:
            await transport.close()

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    async def upload(self, payload: bytes, object_name: str, content_type: str) -> str:
        """Upload *payload* as *object_name* and return its public URL.

        Exactly one ``PUT`` is attempted; there is no retry.

        Parameters
        ----------
        payload:
            Raw file bytes.
        object_name:
            Object key, e.g. ``"image-1718000000000.png"``.
        content_type:
            MIME type stored with the object.

        Returns
        -------
        str
            The public URL (see :func:`build_public_url`).

        Raises
        ------
        ConfigurationError
            If required settings are empty.  No network call is made.
        UploadError
            If the store rejects the request, the network fails, or the
            request cannot be built or signed.
        """
        config = self._config
        metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

        try:
            config.require_complete()
            try:
                transport = self._get_transport()
                self._in_flight += 1
                try:
                    await transport.put_object(config.bucket, object_name, payload, content_type)
                finally:
                    self._in_flight -= 1
                    await self._close_retired()
            except S3PasteError:
                raise
            except Exception as exc:
                raise UploadError(
                    message=f"Upload of {object_name} failed: {exc}",
                    context={
                        "status_code": None,
                        "s3_code": "",
                        "bucket": config.bucket,
                        "key": object_name,
                    },
                    cause=exc,
                ) from exc
        except S3PasteError as exc:
            metrics.increment(
                "s3paste.upload_failure_total",
                tags={"code": _code_tag(exc.code)},
            )
            raise

        metrics.increment("s3paste.upload_success_total")
        metrics.gauge("s3paste.upload_bytes", float(len(payload)))

        url = build_public_url(config, object_name)
        log.info(
            "Image uploaded",
            extra={
                "extra_fields": {
                    "op": "upload",
                    "object_name": object_name,
                    "content_type": content_type,
                    "bytes": len(payload),
                    "url": url,
                }
            },
        )
        return url

    async def upload_result(
        self,
        payload: bytes,
        object_name: str,
        content_type: str,
    ) -> UploadResult:
        """Like :meth:`upload`, but return the outcome instead of raising."""
        try:
            url = await self.upload(payload, object_name, content_type)
        except S3PasteError as exc:
            return UploadFailure(exc)
        return UploadSuccess(url=url, object_name=object_name)

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close every transport this uploader has built."""
        if self._transport is not None:
            self._retired.append(self._transport)
            self._transport = None
        retired, self._retired = self._retired, []
        for transport in retired:
            await transport.close()

    async def __aenter__(self) -> AsyncImageUploader:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
