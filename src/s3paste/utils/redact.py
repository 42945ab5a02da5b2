"""Credential / payload redaction for safe logging.

Before a signed request is written to logs or debug dumps the
:func:`redact` function must be applied.  It enforces the following rules:

* **SigV4 Authorization headers** keep their structure but the
  ``Credential`` access key and the ``Signature`` are masked.
* **Sensitive keys** (anything containing ``secret``, ``token``,
  ``password``, ...) are replaced with a masked placeholder.
* **Binary values** (``bytes`` / ``bytearray``) become ``<binary:N_bytes>``.
* Any explicitly supplied **secret string** is scrubbed wherever it
  appears.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Iterable
from typing import Any

# Substrings: if any of these appear in a key name (case-insensitive), the
# value is redacted.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "cookie",
    "signature",
    "access_key",
})

_SIGV4_CREDENTIAL_RE = re.compile(r"(Credential=)([^/,\s]+)")
_SIGV4_SIGNATURE_RE = re.compile(r"(Signature=)([0-9a-fA-F]+)")


def _placeholder(secret: str) -> str:
    suffix = secret[-4:] if len(secret) >= 8 else "****"
    return f"<redacted:...{suffix}>"


def _mask_string(value: str, secrets: tuple[str, ...]) -> str:
    """Scrub known secrets and SigV4 credential fragments from *value*."""
    value = _SIGV4_CREDENTIAL_RE.sub(
        lambda m: f"{m.group(1)}{_placeholder(m.group(2))}", value
    )
    value = _SIGV4_SIGNATURE_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)
    for secret in secrets:
        if secret and secret in value:
            value = value.replace(secret, _placeholder(secret))
    return value


def _redact_value(value: Any, secrets: tuple[str, ...]) -> Any:
    """Redact a single value (recursive for dicts / lists)."""
    if isinstance(value, dict):
        return _redact_dict(value, secrets)
    if isinstance(value, list):
        return [_redact_value(item, secrets) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return f"<binary:{len(value)}_bytes>"
    if isinstance(value, str):
        return _mask_string(value, secrets)
    return value


def _redact_dict(d: dict, secrets: tuple[str, ...]) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if key_lower == "authorization" and isinstance(value, str):
            result[key] = _mask_string(value, secrets)
        elif any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, secrets)
    return result


def redact(payload: dict, secrets: Iterable[str] | None = None) -> dict:
    """Return a deep copy of *payload* with sensitive data redacted.

    Parameters
    ----------
    payload:
        The dictionary to sanitize (request headers, a debug dump, a
        settings record).
    secrets:
        Literal strings (access key id, secret key) to scrub from every
        string value in the tree.

    Returns
    -------
    dict
        A new dictionary; the original *payload* is never mutated.

    Examples
    --------
    >>> redact({"x-amz-secret": "abc", "bucket": "notes"})
    {'x-amz-secret': '<redacted>', 'bucket': 'notes'}
    """
    safe = copy.deepcopy(payload)
    return _redact_dict(safe, tuple(secrets or ()))
