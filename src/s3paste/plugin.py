"""Plugin entry point wiring settings, uploader and paste handler.

:class:`ImageUploaderPlugin` is what a host binding instantiates once.
The host is expected to call :meth:`~ImageUploaderPlugin.onload` at
startup, route its ``editor-paste`` event to
:meth:`~ImageUploaderPlugin.on_editor_paste`, route settings-form
changes to :meth:`~ImageUploaderPlugin.update_setting`, and call
:meth:`~ImageUploaderPlugin.onunload` on shutdown.

Usage::

    plugin = ImageUploaderPlugin(JsonFileSettingsStore(path), notifier)
    await plugin.onload()
    ...
    await plugin.on_editor_paste(event, editor)
"""

from __future__ import annotations

from typing import Any

from s3paste.config import UploadConfig
from s3paste.host import Editor, Notifier, PasteEvent, SettingsStore
from s3paste.naming import current_millis
from s3paste.observability import get_logger
from s3paste.paste import Clock, PasteHandler
from s3paste.settings import SETTING_FIELDS, SettingField, SettingsManager
from s3paste.uploader import AsyncImageUploader, TransportFactory

log = get_logger("s3paste.plugin")


class ImageUploaderPlugin:
    """Paste-to-object-store image uploader.

    Parameters
    ----------
    store:
        Host-owned settings persistence.
    notifier:
        Host notice surface.
    clock:
        Millisecond clock for object names.
    transport_factory:
        Optional transport factory forwarded to the uploader.
    **config_overrides:
        Non-persisted :class:`UploadConfig` knobs.
    """

    def __init__(
        self,
        store: SettingsStore,
        notifier: Notifier,
        *,
        clock: Clock = current_millis,
        transport_factory: TransportFactory | None = None,
        **config_overrides: Any,
    ) -> None:
        self.uploader = AsyncImageUploader(transport_factory=transport_factory)
        self.settings = SettingsManager(store, self.uploader, **config_overrides)
        self._paste = PasteHandler(self.uploader, notifier, clock=clock)

    @property
    def config(self) -> UploadConfig:
        return self.uploader.config

    @property
    def setting_fields(self) -> tuple[SettingField, ...]:
        return SETTING_FIELDS

    async def onload(self) -> None:
        config = await self.settings.load()
        log.info(
            "Plugin loaded",
            extra={
                "extra_fields": {
                    "op": "onload",
                    "configured": config.is_complete,
                }
            },
        )

    async def onunload(self) -> None:
        await self.uploader.close()

    async def on_editor_paste(self, event: PasteEvent, editor: Editor) -> bool:
        """Callback for the host's paste event; never raises for per-file failures."""
        return await self._paste.on_paste(event, editor)

    async def update_setting(self, key: str, value: str) -> UploadConfig:
        """Callback for a settings-form change: persist and reconfigure."""
        return await self.settings.update_field(key, value)

    async def save_settings(self, config: UploadConfig | None = None) -> None:
        await self.settings.save(config if config is not None else self.config)
