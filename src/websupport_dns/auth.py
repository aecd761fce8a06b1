"""Websupport request signing — HMAC-SHA1 over method, path and timestamp."""

from __future__ import annotations

import hashlib
import hmac
from datetime import UTC, datetime

import httpx

from websupport_dns.errors import ConfigError


def _url_path(url: str) -> str:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ConfigError(f"Cannot sign malformed URL {url!r}: {exc}") from exc
    if not parsed.scheme or not parsed.host:
        raise ConfigError(f"Cannot sign malformed URL {url!r}: scheme and host are required")
    return parsed.path


def sign_request(method: str, url: str, secret: str, timestamp: int) -> str:
    """Return the lowercase hex signature the API expects as the Basic-auth password.

    The canonical string is ``"<METHOD> <path> <timestamp>"``; query string and
    body are not signed.
    """
    message = f"{method.upper()} {_url_path(url)} {timestamp}"
    return hmac.new(secret.encode(), message.encode(), hashlib.sha1).hexdigest()


def format_date(timestamp: int) -> str:
    """Render ``timestamp`` as the RFC 3339 ``Date`` header value."""
    return datetime.fromtimestamp(timestamp, UTC).isoformat()
