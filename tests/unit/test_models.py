"""Tests for data models (s3paste/models.py) and host protocols (s3paste/host.py)."""

from __future__ import annotations

import dataclasses

import pytest

from s3paste.errors import UploadError
from s3paste.host import ClipboardFile, Editor, Notifier, PasteEvent, SettingsStore
from s3paste.models import (
    InsertText,
    NoticeKind,
    Notify,
    PastedFile,
    UploadFailure,
    UploadSuccess,
)
from s3paste.settings import JsonFileSettingsStore


class TestModels:
    @pytest.mark.asyncio
    async def test_pasted_file_read(self):
        f = PastedFile(name="a.png", mime_type="image/png", data=b"abc")
        assert await f.read() == b"abc"

    def test_pasted_file_repr_hides_bytes(self):
        assert "data" not in repr(PastedFile("a.png", "image/png", b"\x00" * 1024))

    def test_results_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            UploadSuccess(url="u", object_name="o").url = "x"  # type: ignore[misc]

    def test_failure_message(self):
        assert UploadFailure(UploadError("denied")).message == "denied"

    def test_actions_compare_by_value(self):
        assert InsertText("![a](b)") == InsertText("![a](b)")
        assert Notify(NoticeKind.SUCCESS, "ok") != Notify(NoticeKind.FAILURE, "ok")

    def test_notice_kind_values(self):
        assert NoticeKind.SUCCESS == "success"
        assert NoticeKind.FAILURE == "failure"


class TestHostProtocols:
    def test_pasted_file_is_clipboard_file(self):
        assert isinstance(PastedFile("a.png", "image/png"), ClipboardFile)

    def test_fakes_satisfy_protocols(self, editor, notifier, make_event, settings_store):
        assert isinstance(editor, Editor)
        assert isinstance(notifier, Notifier)
        assert isinstance(make_event([]), PasteEvent)
        assert isinstance(settings_store, SettingsStore)

    def test_json_store_is_settings_store(self, tmp_path):
        assert isinstance(JsonFileSettingsStore(tmp_path / "d.json"), SettingsStore)

    def test_object_without_methods_rejected(self):
        assert not isinstance(object(), Editor)
