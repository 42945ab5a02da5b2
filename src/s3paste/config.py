"""Upload configuration for s3paste.

:class:`UploadConfig` is a frozen dataclass holding the object-store
credentials plus a few transport knobs.  It is never mutated: every
settings save produces a new instance, which the uploader picks up via
:meth:`AsyncImageUploader.configure`.

The five persisted settings live in a flat key/value blob owned by the
host application.  :data:`DEFAULT_SETTINGS` holds their defaults (all
empty strings); :meth:`UploadConfig.from_settings` merges a stored blob
over them.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from s3paste.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Settings keys
# ---------------------------------------------------------------------------

SETTINGS_KEYS: tuple[str, ...] = (
    "access_key_id",
    "access_key_secret",
    "bucket",
    "endpoint",
    "custom_domain",
)
"""Keys of the persisted settings record, in form order."""

REQUIRED_KEYS: tuple[str, ...] = ("access_key_id", "access_key_secret", "endpoint")
"""Settings that must be non-empty before an upload is attempted."""

DEFAULT_SETTINGS: dict[str, str] = {key: "" for key in SETTINGS_KEYS}

LEGACY_KEYS: dict[str, str] = {
    "r2AccessKeyId": "access_key_id",
    "r2AccessKeySecret": "access_key_secret",
    "r2Bucket": "bucket",
    "r2Endpoint": "endpoint",
    "customDomain": "custom_domain",
}
"""camelCase keys written by earlier releases, mapped to current keys."""


def _mask(value: str) -> str:
    if not value:
        return ""
    return f"...{value[-4:]}" if len(value) >= 8 else "****"


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UploadConfig:
    """Complete configuration for the upload pipeline.

    Parameters
    ----------
    access_key_id:
        Access key ID of the object-store key pair.  Required.
    access_key_secret:
        Secret access key.  Required.  Never logged.
    bucket:
        Target bucket name.
    endpoint:
        Object-store endpoint URL, e.g.
        ``https://<account-id>.r2.cloudflarestorage.com``.  Required.
    custom_domain:
        Optional public URL prefix used instead of ``endpoint/bucket``
        when building the link for an uploaded object.
    region:
        Signing region.  ``"auto"`` suits R2 and most S3-compatible stores.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~s3paste.observability.MetricsHook` backend.
    debug_dump_payload:
        Write a redacted dump of every PUT request/response to *stderr*.
    """

    # ── Persisted settings ─────────────────────────────────────────────
    access_key_id: str = ""

    access_key_secret: str = ""

    bucket: str = ""

    endpoint: str = ""

    custom_domain: str = ""

    # ── Transport ──────────────────────────────────────────────────────
    region: str = "auto"

    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = field(default=None, compare=False)

    # ── Debug ──────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if not self.region:
            raise ValueError("region must be a non-empty string")

    # -- settings blob --------------------------------------------------

    @classmethod
    def from_settings(
        cls,
        stored: Mapping[str, Any] | None,
        **overrides: Any,
    ) -> UploadConfig:
        """Build a config from a stored settings blob.

        Stored values are merged over :data:`DEFAULT_SETTINGS`.  Unknown
        keys are ignored, ``None`` counts as empty, and legacy camelCase
        keys are accepted when the current key is absent.  Surrounding
        whitespace is stripped, since pasted credentials often carry it.

        Parameters
        ----------
        stored:
            The blob returned by the host's settings store, or ``None``
            when nothing has been saved yet.
        **overrides:
            Non-persisted knobs (``region``, ``timeout_seconds``, ...).
        """
        merged = dict(DEFAULT_SETTINGS)
        stored = stored or {}
        for legacy, key in LEGACY_KEYS.items():
            if legacy in stored and key not in stored:
                merged[key] = stored[legacy]
        for key in SETTINGS_KEYS:
            if key in stored:
                merged[key] = stored[key]
        values = {
            key: "" if value is None else str(value).strip()
            for key, value in merged.items()
        }
        return cls(**values, **overrides)

    def to_settings(self) -> dict[str, str]:
        """Return the flat five-field record persisted by the host."""
        return {key: getattr(self, key) for key in SETTINGS_KEYS}

    # -- validation -----------------------------------------------------

    def missing_fields(self) -> list[str]:
        """Return the required settings that are currently empty."""
        return [key for key in REQUIRED_KEYS if not getattr(self, key)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def require_complete(self) -> None:
        """Raise :class:`ConfigurationError` unless an upload may be attempted.

        Raises
        ------
        ConfigurationError
            If any of ``access_key_id``, ``access_key_secret``,
            ``endpoint`` is empty, or the endpoint is not an
            ``http``/``https`` URL with a host and a valid port.
        """
        missing = self.missing_fields()
        if missing:
            raise ConfigurationError(
                message=(
                    "Please configure the object store settings first "
                    f"(missing: {', '.join(missing)})."
                ),
                context={"missing_fields": missing},
            )
        parsed = urlparse(self.endpoint)
        try:
            valid = (
                parsed.scheme in ("http", "https")
                and bool(parsed.hostname)
                and (parsed.port is None or parsed.port > 0)
            )
        except ValueError:
            valid = False
        if not valid:
            raise ConfigurationError(
                message=(
                    f"Endpoint '{self.endpoint}' is not a valid URL; expected "
                    "something like https://<account-id>.r2.cloudflarestorage.com."
                ),
                context={"missing_fields": [], "endpoint": self.endpoint},
            )

    def __repr__(self) -> str:
        """Mask credentials to prevent accidental leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name in ("access_key_id", "access_key_secret"):
                parts.append(f"{f.name}='{_mask(val)}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"UploadConfig({', '.join(parts)})"
