"""s3paste: upload pasted images to S3-compatible storage and link them as Markdown.

Public re-exports
-----------------

* **Plugin:** :class:`ImageUploaderPlugin`
* **Pipeline:** :class:`AsyncImageUploader`, :func:`build_public_url`,
  :class:`PasteHandler`, :func:`handle_paste`
* **Configuration:** :class:`UploadConfig`, settings helpers
* **Errors:** :class:`S3PasteError` and its subclasses, :class:`ErrorCode`
* **Models:** pasted files, upload results, paste actions

Usage::

    from s3paste import AsyncImageUploader, PastedFile, UploadConfig, handle_paste

    uploader = AsyncImageUploader(UploadConfig(
        access_key_id="...",
        access_key_secret="...",
        bucket="notes",
        endpoint="https://<account-id>.r2.cloudflarestorage.com",
    ))
    actions = await handle_paste([PastedFile("photo.png", "image/png", data)], uploader)
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from s3paste.config import DEFAULT_SETTINGS, SETTINGS_KEYS, UploadConfig

# ── Errors ──────────────────────────────────────────────────────────────
from s3paste.errors import (
    ConfigurationError,
    ErrorCode,
    S3PasteError,
    UnhandledError,
    UploadError,
)

# ── Models ──────────────────────────────────────────────────────────────
from s3paste.models import (
    Action,
    InsertText,
    NoticeKind,
    Notify,
    PastedFile,
    UploadFailure,
    UploadResult,
    UploadSuccess,
)
from s3paste.naming import build_object_name, file_extension

# ── Pipeline ────────────────────────────────────────────────────────────
from s3paste.paste import PasteHandler, handle_paste, iter_paste_actions, select_images
from s3paste.plugin import ImageUploaderPlugin
from s3paste.settings import (
    SETTING_FIELDS,
    JsonFileSettingsStore,
    SettingField,
    SettingsManager,
)
from s3paste.uploader import AsyncImageUploader, build_public_url

__all__ = [
    # Plugin
    "ImageUploaderPlugin",
    # Pipeline
    "AsyncImageUploader",
    "PasteHandler",
    "build_public_url",
    "handle_paste",
    "iter_paste_actions",
    "select_images",
    "build_object_name",
    "file_extension",
    # Configuration
    "UploadConfig",
    "DEFAULT_SETTINGS",
    "SETTINGS_KEYS",
    "SETTING_FIELDS",
    "SettingField",
    "SettingsManager",
    "JsonFileSettingsStore",
    # Errors
    "S3PasteError",
    "ErrorCode",
    "ConfigurationError",
    "UploadError",
    "UnhandledError",
    # Models
    "PastedFile",
    "UploadSuccess",
    "UploadFailure",
    "UploadResult",
    "InsertText",
    "Notify",
    "NoticeKind",
    "Action",
]
