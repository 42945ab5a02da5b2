"""Error hierarchy for s3paste.

Every public error class inherits from :class:`S3PasteError`. Each carries
a machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message`` suitable for a user notice, an optional structured ``context``
dict, and an optional ``cause`` (chained exception).

The paste handler catches all three kinds at the per-file boundary, so
none of them ever escapes a paste callback.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error s3paste can raise."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UPLOAD_ERROR = "UPLOAD_ERROR"
    UNHANDLED_ERROR = "UNHANDLED_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class S3PasteError(Exception):
    """Base exception for all s3paste errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A user-presentable description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------

class ConfigurationError(S3PasteError):
    """Required settings are empty or malformed.

    Raised before any network call is attempted.

    Context keys: ``missing_fields`` (list of setting keys), ``endpoint``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class UploadError(S3PasteError):
    """The object-store request failed (auth, network, server-side).

    Context keys: ``status_code`` (``None`` for transport failures),
    ``s3_code``, ``bucket``, ``key``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UPLOAD_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class UnhandledError(S3PasteError):
    """Any other failure while reading a pasted payload or substituting text.

    Context keys: ``file_name``, ``stage``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UNHANDLED_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
