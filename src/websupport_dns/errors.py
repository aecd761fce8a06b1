"""Exception hierarchy for the Websupport DNS client.

Hierarchy:
    WebsupportError (Base)
    ├─ ConfigError      - Bad URL, domain or solver configuration
    ├─ TransportError   - Network failure or timeout talking to the API
    └─ ProviderError    - Decoded 4xx/5xx response from the API
       └─ NotFoundError - No record matched a lookup pattern
"""

from __future__ import annotations

import httpx

from websupport_dns.models import DnsRecord


class WebsupportError(Exception):
    """Base exception for all Websupport DNS errors."""


class ConfigError(WebsupportError, ValueError):
    """Invalid configuration or input that cannot be signed or sent."""


class TransportError(WebsupportError):
    """The request never produced an HTTP response (DNS, timeout, reset)."""


class ProviderError(WebsupportError):
    """Error reported by the Websupport API.

    Attributes:
        record: The record echoed back by the API (or the search pattern).
        status: HTTP status line, e.g. ``"503 Service Unavailable"``.
        messages: Human-readable error messages, most relevant first.
    """

    def __init__(
        self,
        record: DnsRecord | None = None,
        status: str | None = None,
        messages: list[str] | None = None,
    ) -> None:
        self.record = record
        self.status = status
        self.messages = list(messages or [])
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.messages:
            return self.messages[0]
        return self.status or "unknown provider error"

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_response(cls, response: httpx.Response) -> ProviderError:
        """Decode an error body of the form ``{item, status, errors: {field: [msg]}}``."""
        status = f"{response.status_code} {response.reason_phrase}".strip()
        try:
            body = response.json()
        except ValueError:
            return cls(status=status)
        if not isinstance(body, dict):
            return cls(status=status)

        record = None
        if isinstance(body.get("item"), dict):
            record = DnsRecord.from_dict(body["item"])

        messages: list[str] = []
        errors = body.get("errors")
        if isinstance(errors, dict):
            # "content" carries the primary message; other fields follow.
            fields = sorted(errors, key=lambda name: name != "content")
            for name in fields:
                value = errors[name]
                if isinstance(value, list):
                    messages.extend(str(m) for m in value)
                elif value:
                    messages.append(str(value))
        return cls(record=record, status=status, messages=messages)


class NotFoundError(ProviderError):
    """No record in the zone matched the search pattern."""
