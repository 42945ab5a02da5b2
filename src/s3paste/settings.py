"""Settings load/save for the upload credentials.

The host application owns persistence; s3paste reads and writes one
flat five-field record through a :class:`~s3paste.host.SettingsStore`.
:class:`SettingsManager` implements the contract:

* **load** -- stored values merged over the all-empty defaults, then
  pushed to the uploader;
* **save** -- persist the record, then reconfigure the uploader so the
  next upload signs with the new credentials.

:data:`SETTING_FIELDS` describes the settings form; the host renders the
widgets and calls :meth:`SettingsManager.update_field` on every change.
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from s3paste.config import SETTINGS_KEYS, UploadConfig
from s3paste.host import SettingsStore
from s3paste.observability import get_logger
from s3paste.uploader import AsyncImageUploader

log = get_logger("s3paste.settings")


@dataclass(frozen=True)
class SettingField:
    """One text input of the settings form."""

    key: str
    name: str
    description: str
    placeholder: str


SETTING_FIELDS: tuple[SettingField, ...] = (
    SettingField(
        key="access_key_id",
        name="Access Key ID",
        description="Access key ID of the object store key pair.",
        placeholder="Access Key ID",
    ),
    SettingField(
        key="access_key_secret",
        name="Secret Access Key",
        description="Secret access key of the object store key pair.",
        placeholder="Secret Access Key",
    ),
    SettingField(
        key="bucket",
        name="Bucket",
        description="Name of the bucket images are uploaded to.",
        placeholder="your-bucket-name",
    ),
    SettingField(
        key="endpoint",
        name="Endpoint",
        description="Object store endpoint URL.",
        placeholder="https://<account-id>.r2.cloudflarestorage.com",
    ),
    SettingField(
        key="custom_domain",
        name="Custom domain",
        description="Optional: public domain used in image links instead of the endpoint.",
        placeholder="https://images.example.com",
    ),
)


class JsonFileSettingsStore:
    """A :class:`SettingsStore` backed by a UTF-8 JSON file.

    Useful for hosts without their own plugin data store, and in tests.
    A missing file loads as ``None``; a malformed one raises
    :class:`json.JSONDecodeError`.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any] | None:
        if not self.path.is_file():
            return None
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else None

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    async def load_data(self) -> dict[str, Any] | None:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read)

    async def save_data(self, data: dict[str, Any]) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write, data)


class SettingsManager:
    """Load, save and edit the settings record for one uploader.

    Parameters
    ----------
    store:
        Host-owned persistence.
    uploader:
        Reconfigured after every load and save.
    **config_overrides:
        Non-persisted :class:`UploadConfig` knobs (``region``,
        ``timeout_seconds``, ``metrics``, ...) applied on every load.
    """

    def __init__(
        self,
        store: SettingsStore,
        uploader: AsyncImageUploader,
        **config_overrides: Any,
    ) -> None:
        self._store = store
        self._uploader = uploader
        self._overrides = config_overrides

    @property
    def config(self) -> UploadConfig:
        return self._uploader.config

    async def load(self) -> UploadConfig:
        """Read the stored record, merge it over defaults, configure the uploader."""
        stored = await self._store.load_data()
        config = UploadConfig.from_settings(stored, **self._overrides)
        await self._uploader.configure(config)
        log.debug(
            "Settings loaded",
            extra={
                "extra_fields": {
                    "op": "load_settings",
                    "missing_fields": config.missing_fields(),
                }
            },
        )
        return config

    async def save(self, config: UploadConfig) -> None:
        """Persist *config* and reconfigure the uploader."""
        await self._store.save_data(config.to_settings())
        await self._uploader.configure(config)

    async def update_field(self, key: str, value: str) -> UploadConfig:
        """Set one settings field, then save.

        Raises
        ------
        ValueError
            If *key* is not one of the five settings keys.
        """
        if key not in SETTINGS_KEYS:
            raise ValueError(
                f"Unknown setting '{key}'; expected one of {', '.join(SETTINGS_KEYS)}"
            )
        config = dataclasses.replace(self.config, **{key: value.strip()})
        await self.save(config)
        return config
