"""s3paste.storage -- object-store transport and request signing.

This sub-package provides:

* :mod:`.signing` -- SigV4 request signing via botocore.
* :mod:`.transport` -- Async httpx transport issuing signed ``PUT`` requests.
"""

from __future__ import annotations

from .signing import RequestSigner
from .transport import AsyncS3Transport, build_object_url

__all__ = [
    "AsyncS3Transport",
    "RequestSigner",
    "build_object_url",
]
