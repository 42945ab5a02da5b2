"""Paste handler: turn pasted images into markdown links.

For every paste event the handler

1. keeps only files whose MIME type starts with ``image/``,
2. names each one ``image-<unix-millis>.<ext>``,
3. uploads them one at a time, in clipboard order, and
4. replaces the editor selection with ``![<name>](<url>)`` per success,
   or shows a failure notice and moves on to the next file.

The decision logic (:func:`iter_paste_actions`, :func:`handle_paste`)
knows nothing about the host: it yields :class:`InsertText` and
:class:`Notify` actions.  :class:`PasteHandler` is the thin binding that
applies them to a host :class:`Editor` and :class:`Notifier`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterable, Sequence

from s3paste.errors import S3PasteError, UnhandledError
from s3paste.host import ClipboardFile, Editor, Notifier, PasteEvent
from s3paste.models import (
    Action,
    InsertText,
    NoticeKind,
    Notify,
    UploadFailure,
    UploadResult,
    UploadSuccess,
)
from s3paste.naming import build_object_name, current_millis
from s3paste.observability import get_logger
from s3paste.uploader import AsyncImageUploader

log = get_logger("s3paste.paste")

Clock = Callable[[], int]

SUCCESS_MESSAGE = "Image uploaded successfully!"
FAILURE_PREFIX = "Upload failed: "


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def is_image(file: ClipboardFile) -> bool:
    return (file.mime_type or "").lower().startswith("image/")


def select_images(files: Iterable[ClipboardFile] | None) -> list[ClipboardFile]:
    """Return the files the pipeline handles, preserving clipboard order."""
    return [f for f in files or () if is_image(f)]


def image_markdown(name: str, url: str) -> str:
    return f"![{name}]({url})"


def failure_message(error: S3PasteError) -> str:
    return f"{FAILURE_PREFIX}{error.message}"


def actions_for(file: ClipboardFile, result: UploadResult) -> list[Action]:
    """Map one file's upload outcome to the actions the host should apply."""
    if isinstance(result, UploadSuccess):
        return [
            InsertText(image_markdown(file.name, result.url)),
            Notify(NoticeKind.SUCCESS, SUCCESS_MESSAGE),
        ]
    return [Notify(NoticeKind.FAILURE, failure_message(result.error))]


def _log_failure(file: ClipboardFile, error: S3PasteError, object_name: str | None) -> None:
    log.error(
        "Paste upload failed",
        exc_info=error,
        extra={
            "extra_fields": {
                "op": "paste",
                "file_name": file.name,
                "object_name": object_name,
                "code": error.code,
                "context": error.context,
            }
        },
    )


# ---------------------------------------------------------------------------
# Per-file pipeline
# ---------------------------------------------------------------------------

async def upload_pasted_file(
    file: ClipboardFile,
    uploader: AsyncImageUploader,
    *,
    clock: Clock = current_millis,
) -> UploadResult:
    """Read, name, and upload one pasted file.

    Never raises: :class:`ConfigurationError` and :class:`UploadError`
    come back as :class:`UploadFailure`, and anything unexpected is
    wrapped in :class:`UnhandledError` first.
    """
    object_name: str | None = None
    stage = "read"
    try:
        data = await file.read()
        object_name = build_object_name(file.name, clock())
        stage = "upload"
        result = await uploader.upload_result(data, object_name, file.mime_type)
    except Exception as exc:
        result = UploadFailure(
            UnhandledError(
                message=f"Unexpected error while processing {file.name}: {exc}",
                context={"file_name": file.name, "stage": stage},
                cause=exc,
            )
        )

    if isinstance(result, UploadFailure):
        _log_failure(file, result.error, object_name)
    return result


async def iter_paste_actions(
    files: Iterable[ClipboardFile] | None,
    uploader: AsyncImageUploader,
    *,
    clock: Clock = current_millis,
) -> AsyncIterator[list[Action]]:
    """Yield the actions for each image file, one file at a time.

    Each upload finishes before the next begins, so the inserted links
    land in clipboard order.  Non-image files are skipped.
    """
    for file in select_images(files):
        result = await upload_pasted_file(file, uploader, clock=clock)
        yield actions_for(file, result)


async def handle_paste(
    files: Iterable[ClipboardFile] | None,
    uploader: AsyncImageUploader,
    *,
    clock: Clock = current_millis,
) -> list[Action]:
    """Process a whole paste and return every action, in order."""
    return [
        action
        async for actions in iter_paste_actions(files, uploader, clock=clock)
        for action in actions
    ]


# ---------------------------------------------------------------------------
# Host binding
# ---------------------------------------------------------------------------

class PasteHandler:
    """Apply the paste pipeline to host paste events.

    Parameters
    ----------
    uploader:
        The shared upload service.
    notifier:
        Where success and failure notices go.
    clock:
        Millisecond clock used for object names.
    """

    def __init__(
        self,
        uploader: AsyncImageUploader,
        notifier: Notifier,
        *,
        clock: Clock = current_millis,
    ) -> None:
        self._uploader = uploader
        self._notifier = notifier
        self._clock = clock

    async def on_paste(self, event: PasteEvent, editor: Editor) -> bool:
        """Handle one paste event.

        Returns ``True`` when the event carried at least one image, in
        which case default paste handling has been suppressed.  Events
        without images are left untouched for the host.
        """
        images = select_images(event.files)
        if not images:
            return False

        event.prevent_default()
        async for actions in iter_paste_actions(images, self._uploader, clock=self._clock):
            self._apply(actions, editor)
        return True

    def _apply(self, actions: Sequence[Action], editor: Editor) -> None:
        for action in actions:
            if isinstance(action, InsertText):
                try:
                    editor.replace_selection(action.text)
                except Exception as exc:
                    error = UnhandledError(
                        message=f"Could not insert the image link: {exc}",
                        context={"stage": "insert"},
                        cause=exc,
                    )
                    log.error(
                        "Inserting image link failed",
                        exc_info=error,
                        extra={"extra_fields": {"op": "paste", "code": error.code}},
                    )
                    self._notify(Notify(NoticeKind.FAILURE, failure_message(error)))
                    return
            else:
                self._notify(action)

    def _notify(self, action: Notify) -> None:
        try:
            self._notifier.notify(action.message, action.kind)
        except Exception:
            log.exception(
                "Notifier failed",
                extra={"extra_fields": {"op": "notify", "kind": action.kind}},
            )
