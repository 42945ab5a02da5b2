"""Object-name derivation for pasted images.

Names have the form ``image-<unix-millis>.<ext>``.  The extension is the
original file name's last dot-suffix, kept verbatim; names without one
produce ``image-<unix-millis>`` with no trailing dot.

Uniqueness comes from the millisecond timestamp alone.  Two files named
within the same millisecond get the same key and the later upload
overwrites the earlier object.
"""

from __future__ import annotations

import time

OBJECT_NAME_PREFIX = "image-"


def current_millis() -> int:
    """Return the current Unix time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def file_extension(filename: str) -> str:
    """Return the extension of *filename* without the dot, or ``""``.

    >>> file_extension("photo.PNG")
    'PNG'
    >>> file_extension("archive.tar.gz")
    'gz'
    >>> file_extension("blob")
    ''
    """
    _, dot, ext = filename.rpartition(".")
    if not dot or "/" in ext:
        return ""
    return ext


def build_object_name(original_name: str, timestamp_ms: int) -> str:
    """Build the object key for a file pasted at *timestamp_ms*.

    Parameters
    ----------
    original_name:
        The clipboard file name; only its extension is used.
    timestamp_ms:
        Unix time in milliseconds at processing time.

    Returns
    -------
    str
        ``image-<timestamp_ms>.<ext>`` or ``image-<timestamp_ms>``.
    """
    ext = file_extension(original_name)
    name = f"{OBJECT_NAME_PREFIX}{timestamp_ms}"
    return f"{name}.{ext}" if ext else name
