"""AWS Signature Version 4 signing for object-store requests.

The signing itself is botocore's :class:`~botocore.auth.S3SigV4Auth`; this
module only adapts it to plain ``(method, url, headers, body)`` tuples so
the result can be sent with httpx.
"""

from __future__ import annotations

from collections.abc import Mapping

from botocore.auth import S3SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

SERVICE_NAME = "s3"


class RequestSigner:
    """Sign requests with one access key pair for one region.

    Parameters
    ----------
    access_key_id:
        Access key ID of the key pair.
    access_key_secret:
        Secret access key of the key pair.
    region:
        Signing region.  R2 and most S3-compatible stores accept ``"auto"``.
    """

    def __init__(self, access_key_id: str, access_key_secret: str, region: str) -> None:
        self.region = region
        self._auth = S3SigV4Auth(
            Credentials(access_key_id, access_key_secret),
            SERVICE_NAME,
            region,
        )

    def sign(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> dict[str, str]:
        """Return *headers* plus the SigV4 ``Authorization`` set.

        The returned dict includes ``X-Amz-Date`` and
        ``X-Amz-Content-SHA256`` and must be sent unchanged alongside
        *body* to *url*.
        """
        request = AWSRequest(method=method, url=url, data=body, headers=dict(headers))
        self._auth.add_auth(request)
        return dict(request.headers.items())
