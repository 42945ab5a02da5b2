"""Interfaces s3paste consumes from the host application.

The host (the note-taking application) owns plugin lifecycle, event
registration, and UI widgets.  The core only needs the narrow surfaces
below; any object with matching attributes satisfies them.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from s3paste.models import NoticeKind


@runtime_checkable
class ClipboardFile(Protocol):
    """One file attached to a paste event."""

    name: str
    mime_type: str

    async def read(self) -> bytes:
        """Return the file's raw bytes."""
        ...


@runtime_checkable
class PasteEvent(Protocol):
    """A paste event as delivered by the host.

    ``files`` may be ``None`` when the clipboard carries no file list.
    """

    files: Sequence[ClipboardFile] | None

    def prevent_default(self) -> None:
        """Suppress the host's default paste insertion for this event."""
        ...


@runtime_checkable
class Editor(Protocol):
    """The active document's edit point."""

    def replace_selection(self, text: str) -> None:
        """Replace the current selection (or insert at the cursor)."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """Transient user-facing notices."""

    def notify(self, message: str, kind: NoticeKind) -> None:
        ...


@runtime_checkable
class SettingsStore(Protocol):
    """Host-owned persistence for the flat settings record."""

    async def load_data(self) -> dict[str, Any] | None:
        """Return the stored record, or ``None`` if nothing was saved."""
        ...

    async def save_data(self, data: dict[str, Any]) -> None:
        ...
