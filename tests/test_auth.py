"""Tests for request signing."""

import hashlib
import hmac
import re

import pytest

from websupport_dns.auth import format_date, sign_request
from websupport_dns.errors import ConfigError

_URL = "https://rest.websupport.sk/v1/user/self/zone/example.com/record"


class TestSignRequest:
    def test_hmac_sha1_over_method_path_and_timestamp(self):
        expected = hmac.new(
            b"secret",
            b"GET /v1/user/self/zone/example.com/record 1700000000",
            hashlib.sha1,
        ).hexdigest()

        assert sign_request("GET", _URL, "secret", 1700000000) == expected

    def test_is_40_char_lowercase_hex(self):
        signature = sign_request("POST", _URL, "secret", 1700000000)
        assert re.fullmatch(r"[0-9a-f]{40}", signature)

    def test_deterministic_for_same_second(self):
        first = sign_request("DELETE", f"{_URL}/42", "secret", 1700000000)
        second = sign_request("DELETE", f"{_URL}/42", "secret", 1700000000)
        assert first == second

    def test_changes_with_timestamp(self):
        assert sign_request("GET", _URL, "secret", 1700000000) != sign_request("GET", _URL, "secret", 1700000001)

    def test_changes_with_method(self):
        assert sign_request("GET", _URL, "secret", 1700000000) != sign_request("POST", _URL, "secret", 1700000000)

    def test_lowercase_method_is_normalised(self):
        assert sign_request("get", _URL, "secret", 1700000000) == sign_request("GET", _URL, "secret", 1700000000)

    def test_query_string_is_not_signed(self):
        assert sign_request("GET", f"{_URL}?page=2", "secret", 1700000000) == sign_request(
            "GET", _URL, "secret", 1700000000
        )

    @pytest.mark.parametrize("url", ["", "example.com/record", "/v1/user/self/zone/example.com/record"])
    def test_malformed_url_raises_config_error(self, url):
        with pytest.raises(ConfigError, match="malformed URL"):
            sign_request("GET", url, "secret", 1700000000)


class TestFormatDate:
    def test_rfc3339_utc(self):
        assert format_date(1700000000) == "2023-11-14T22:13:20+00:00"

    def test_epoch(self):
        assert format_date(0) == "1970-01-01T00:00:00+00:00"
