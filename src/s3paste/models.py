"""Data models for s3paste.

Plain dataclasses with no behaviour beyond what is needed for structural
equality.  The two unions defined here are the explicit result types of
the pipeline:

* :data:`UploadResult` -- :class:`UploadSuccess` or :class:`UploadFailure`,
  one per uploaded file.
* :data:`Action` -- :class:`InsertText` or :class:`Notify`, the
  host-agnostic instructions the paste handler produces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from s3paste.errors import S3PasteError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class NoticeKind(str, Enum):
    """Severity of a user-facing notice."""

    SUCCESS = "success"
    FAILURE = "failure"


# ---------------------------------------------------------------------------
# Clipboard payloads
# ---------------------------------------------------------------------------

@dataclass
class PastedFile:
    """An in-memory file taken from a clipboard paste event.

    Attributes
    ----------
    name:
        The file name as reported by the clipboard (e.g. ``"photo.PNG"``
        or ``"blob"``).
    mime_type:
        MIME type reported by the clipboard (e.g. ``"image/png"``).
    data:
        Raw file bytes.
    """

    name: str
    mime_type: str
    data: bytes = field(default=b"", repr=False)

    async def read(self) -> bytes:
        return self.data


# ---------------------------------------------------------------------------
# Upload results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UploadSuccess:
    """The object was stored; *url* is its public link."""

    url: str
    object_name: str


@dataclass(frozen=True)
class UploadFailure:
    """The upload did not complete; *error* says why."""

    error: S3PasteError

    @property
    def message(self) -> str:
        return self.error.message


UploadResult = Union[UploadSuccess, UploadFailure]


# ---------------------------------------------------------------------------
# Paste actions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InsertText:
    """Replace the editor's current selection with *text*."""

    text: str


@dataclass(frozen=True)
class Notify:
    """Show a transient notice to the user."""

    kind: NoticeKind
    message: str


Action = Union[InsertText, Notify]
