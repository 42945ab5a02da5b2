"""Tests for redact (s3paste/utils/redact.py)."""

from s3paste.utils.redact import redact

AUTH = (
    "AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE1234/20261017/auto/s3/aws4_request, "
    "SignedHeaders=content-type;host;x-amz-content-sha256;x-amz-date, "
    "Signature=0f1e2d3c4b5a69788796a5b4c3d2e1f00f1e2d3c4b5a69788796a5b4c3d2e1f0"
)


class TestRedact:
    def test_sigv4_authorization_masked(self):
        result = redact({"Authorization": AUTH})
        auth = result["Authorization"]
        assert auth.startswith("AWS4-HMAC-SHA256 Credential=<redacted:...1234>/20261017/auto/s3/")
        assert "SignedHeaders=content-type;host;x-amz-content-sha256;x-amz-date" in auth
        assert auth.endswith("Signature=<redacted>")
        assert "AKIDEXAMPLE1234" not in auth

    def test_authorization_key_case_insensitive(self):
        result = redact({"authorization": AUTH})
        assert "AKIDEXAMPLE1234" not in result["authorization"]

    def test_sensitive_keys(self):
        result = redact({
            "access_key_secret": "wJalrXUtnFEMI",
            "access_key_id": "AKID",
            "X-Amz-Security-Token": "tok",
            "password": "hunter2",
            "bucket": "notes",
        })
        assert result == {
            "access_key_secret": "<redacted>",
            "access_key_id": "<redacted>",
            "X-Amz-Security-Token": "<redacted>",
            "password": "<redacted>",
            "bucket": "notes",
        }

    def test_literal_secrets_scrubbed_everywhere(self):
        secret = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
        result = redact(
            {"response_body": f"<Error><Message>bad key {secret}</Message></Error>"},
            secrets=[secret],
        )
        assert secret not in result["response_body"]
        assert "<redacted:...EKEY>" in result["response_body"]

    def test_short_secret_placeholder(self):
        result = redact({"note": "key abc"}, secrets=["abc"])
        assert result["note"] == "key <redacted:...****>"

    def test_empty_secret_ignored(self):
        assert redact({"note": "hello"}, secrets=[""]) == {"note": "hello"}

    def test_binary_values(self):
        assert redact({"body": b"\x89PNG\r\n"}) == {"body": "<binary:6_bytes>"}

    def test_nested_structures(self):
        result = redact({
            "request": {"headers": {"Cookie": "a=b"}, "parts": [{"token": "t"}, b"xy"]},
        })
        assert result == {
            "request": {
                "headers": {"Cookie": "<redacted>"},
                "parts": [{"token": "<redacted>"}, "<binary:2_bytes>"],
            },
        }

    def test_original_not_mutated(self):
        payload = {"headers": {"Authorization": AUTH}, "secret": "s"}
        redact(payload)
        assert payload == {"headers": {"Authorization": AUTH}, "secret": "s"}

    def test_non_string_values_kept(self):
        assert redact({"status": 403, "ok": False, "none": None}) == {
            "status": 403,
            "ok": False,
            "none": None,
        }
